"""CPU package for the LS-8 virtual machine."""

from .core import LS8, TIMER_INTERRUPT
from .errors import CPUError, IllegalOpcodeError, OperandError, StackError
from .handlers import ExecutionContext
from .state import IM, IS, SP, STACK_START, VECTOR_TABLE, CPUState, Flags
from . import alu, opcodes

__all__ = [
    "LS8",
    "CPUState",
    "Flags",
    "ExecutionContext",
    "CPUError",
    "IllegalOpcodeError",
    "OperandError",
    "StackError",
    "IM",
    "IS",
    "SP",
    "STACK_START",
    "VECTOR_TABLE",
    "TIMER_INTERRUPT",
    "alu",
    "opcodes",
]
