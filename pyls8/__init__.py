"""Python implementation of the LS-8 8-bit virtual machine.

The package hosts the CPU, memory, clock, loader and machine assembly layers
used by ``run.py``.
"""

from __future__ import annotations

from . import bus, cpu, loader, system, timing, utils

__all__: list[str] = [
    "cpu",
    "bus",
    "timing",
    "loader",
    "system",
    "utils",
]
