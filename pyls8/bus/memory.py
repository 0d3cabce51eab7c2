"""Memory block for the LS-8 virtual machine.

The CPU only relies on the two-method ``read``/``write`` contract exposed by
``Addressable``. ``Memory`` is the default RAM implementation covering the full
8-bit address space.
"""

from __future__ import annotations

from dataclasses import dataclass

ADDRESS_SPACE = 0x100


class MemoryError(Exception):
    """Raised when memory is misconfigured or accessed outside its range."""


class Addressable:
    """Interface for objects the CPU can read from and write to."""

    def read(self, address: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def write(self, address: int, value: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class Memory(Addressable):
    """Simple byte-addressable RAM block."""

    start: int = 0x00
    length: int = ADDRESS_SPACE

    def __post_init__(self) -> None:
        if self.start < 0 or self.length <= 0:
            raise MemoryError("memory block must have a positive length and non-negative start")
        if self.start + self.length > ADDRESS_SPACE:
            raise MemoryError(f"memory block {self.start:#04x}+{self.length} exceeds the 8-bit address space")
        self._data = bytearray(self.length)

    def get_end_address(self) -> int:
        return self.start + self.length - 1

    def _offset(self, address: int) -> int:
        offset = address - self.start
        if not 0 <= offset < self.length:
            raise MemoryError(f"address {address:#04x} outside memory {self.start:#04x}-{self.get_end_address():#04x}")
        return offset

    def read(self, address: int) -> int:
        return self._data[self._offset(address)]

    def write(self, address: int, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise MemoryError(f"value {value:#x} at {address:#04x} does not fit a byte")
        self._data[self._offset(address)] = value

    def clear(self) -> None:
        self._data[:] = bytes(self.length)

    def snapshot(self) -> bytes:
        return bytes(self._data)
