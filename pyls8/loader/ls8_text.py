"""Loader for ``.ls8`` text program images.

Each non-blank line holds one byte written as up to eight binary digits.
Everything after ``#`` is a comment::

    00000100 # LDI R0,8
    00000000
    00001000
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol, TextIO

from pyls8.bus import ADDRESS_SPACE
from pyls8.utils import debug_enabled, debug_log

from .program import ProgramImage


class LS8FormatError(RuntimeError):
    """Raised when an ``.ls8`` file violates the expected structure."""


class Pokeable(Protocol):
    def poke(self, address: int, value: int) -> None:
        ...


COMMENT_MARKER = "#"
_BYTE_PATTERN = re.compile(r"[01]{1,8}")


def load_ls8(stream: TextIO, target: Pokeable, *, start: int = 0x00, name: str = "") -> ProgramImage:
    """Poke the program held in ``stream`` into ``target`` starting at ``start``."""

    if not 0 <= start < ADDRESS_SPACE:
        raise LS8FormatError(f"start address {start:#x} outside the address space")

    program = ProgramImage(name=name, start=start)
    for line_number, raw_line in enumerate(stream, start=1):
        text = raw_line.split(COMMENT_MARKER, 1)[0].strip()
        if not text:
            continue
        if not _BYTE_PATTERN.fullmatch(text):
            raise LS8FormatError(f"line {line_number}: expected up to 8 binary digits, got {text!r}")
        address = start + len(program)
        if address >= ADDRESS_SPACE:
            raise LS8FormatError(f"line {line_number}: program does not fit below {ADDRESS_SPACE:#x}")
        value = int(text, 2)
        target.poke(address, value)
        program.append(value, line_number)

    if debug_enabled("loader"):
        debug_log("loader", "loaded %s bytes=%d start=%02x", name or "<stream>", len(program), start)
    return program


def load_ls8_from_path(path: Path, target: Pokeable, *, start: int = 0x00) -> ProgramImage:
    """Load an ``.ls8`` program from the filesystem."""

    with path.open("r", encoding="utf-8") as handle:
        return load_ls8(handle, target, start=start, name=path.stem)
