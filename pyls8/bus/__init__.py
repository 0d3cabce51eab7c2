"""Bus-related helpers for the LS-8 virtual machine."""

from .memory import ADDRESS_SPACE, Addressable, Memory, MemoryError

__all__ = [
    "ADDRESS_SPACE",
    "Addressable",
    "Memory",
    "MemoryError",
]
