"""Register file and flags of the LS-8 CPU."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import OperandError

REGISTER_COUNT = 8

IM = 5  # interrupt mask
IS = 6  # interrupt status
SP = 7  # stack pointer

STACK_START = 0xF8
VECTOR_TABLE = 0xF8


def _initial_registers() -> list[int]:
    registers = [0x00] * REGISTER_COUNT
    registers[SP] = STACK_START
    return registers


@dataclass
class Flags:
    """CPU flags; ``equal`` stays ``None`` until the first CMP."""

    interrupts_enabled: bool = True
    equal: bool | None = None


@dataclass
class CPUState:
    """Snapshot of the LS-8 register file."""

    registers: list[int] = field(default_factory=_initial_registers)
    pc: int = 0x00
    ir: int = 0x00
    flags: Flags = field(default_factory=Flags)
    halted: bool = False

    def get_register(self, index: int) -> int:
        return self.registers[_check_index(index)]

    def set_register(self, index: int, value: int) -> None:
        self.registers[_check_index(index)] = value & 0xFF

    @property
    def sp(self) -> int:
        return self.registers[SP]

    @sp.setter
    def sp(self, value: int) -> None:
        self.registers[SP] = value & 0xFF


def _check_index(index: int) -> int:
    if not 0 <= index < REGISTER_COUNT:
        raise OperandError(f"register index {index} out of range (0-{REGISTER_COUNT - 1})")
    return index
