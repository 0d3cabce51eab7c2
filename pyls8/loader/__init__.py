"""Loaders for LS-8 program images."""

from __future__ import annotations

from .ls8_text import LS8FormatError, load_ls8, load_ls8_from_path
from .program import ProgramImage

__all__ = [
    "ProgramImage",
    "LS8FormatError",
    "load_ls8",
    "load_ls8_from_path",
]
