"""Stateless 8-bit arithmetic for the LS-8 CPU."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

from .errors import CPUError

ALU_OPERATIONS: Mapping[str, Callable[[int, int], int]] = MappingProxyType(
    {
        "ADD": lambda a, b: (a + b) & 0xFF,
        "MUL": lambda a, b: (a * b) & 0xFF,
    }
)


def apply(op: str, a: int, b: int) -> int:
    """Apply ALU operation ``op`` to two register values and return the masked result."""

    operation = ALU_OPERATIONS.get(op)
    if operation is None:
        raise CPUError(f"unsupported ALU operation {op!r}")
    return operation(a & 0xFF, b & 0xFF)
