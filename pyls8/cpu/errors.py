"""Exceptions raised by the LS-8 CPU."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised when the instruction register holds an opcode with no handler."""

    def __init__(self, address: int, opcode: int) -> None:
        super().__init__(f"Invalid instruction at address {address:#04x}: {opcode:08b}")
        self.address = address
        self.opcode = opcode


class OperandError(CPUError):
    """Raised when an operand does not name a register or does not fit a byte."""


class StackError(CPUError):
    """Raised when the stack pointer would leave the address space."""
