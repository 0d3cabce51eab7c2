"""Opcode metadata and dispatch table for the LS-8 CPU."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final, Iterable, List, Sequence

from . import handlers
from .handlers import ExecutionContext

NOP: Final[int] = 0b00000000
LDI: Final[int] = 0b00000100
MUL: Final[int] = 0b00000101
PRN: Final[int] = 0b00000110
PRA: Final[int] = 0b00000111
ST: Final[int] = 0b00001001
PUSH: Final[int] = 0b00001010
POP: Final[int] = 0b00001011
ADD: Final[int] = 0b00001100
CALL: Final[int] = 0b00001111
RET: Final[int] = 0b00010000
JMP: Final[int] = 0b00010001
JEQ: Final[int] = 0b00010011
JNE: Final[int] = 0b00010100
CMP: Final[int] = 0b00010110
IRET: Final[int] = 0b00011010
HLT: Final[int] = 0b00011011


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single LS-8 opcode."""

    opcode: int
    mnemonic: str
    width: int
    handler: Callable[[ExecutionContext], None]
    sets_pc: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.opcode <= 0xFF:
            raise ValueError(f"opcode out of range: {self.opcode}")
        if not 1 <= self.width <= 3:
            raise ValueError(f"width out of range: {self.width}")


class OpcodeTable:
    """Mutable builder for the 256-entry dispatch table."""

    _TABLE_SIZE: Final[int] = 0x100

    def __init__(self) -> None:
        self._table: List[Instruction | None] = [None] * self._TABLE_SIZE

    def register(self, instruction: Instruction) -> None:
        opcode = instruction.opcode
        existing = self._table[opcode]
        if existing is not None:
            raise ValueError(
                f"opcode {opcode:#04x} already registered as {existing.mnemonic}")
        self._table[opcode] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Instruction | None]:
        return tuple(self._table)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Instruction | None]:
    """Build an immutable 256-entry opcode lookup table."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(NOP, "NOP", 1, handlers.op_nop),
    Instruction(LDI, "LDI", 3, handlers.op_ldi),
    Instruction(MUL, "MUL", 3, handlers.op_mul),
    Instruction(PRN, "PRN", 2, handlers.op_prn),
    Instruction(PRA, "PRA", 2, handlers.op_pra),
    Instruction(ST, "ST", 3, handlers.op_st),
    Instruction(PUSH, "PUSH", 2, handlers.op_push),
    Instruction(POP, "POP", 2, handlers.op_pop),
    Instruction(ADD, "ADD", 3, handlers.op_add),
    Instruction(CALL, "CALL", 2, handlers.op_call, sets_pc=True),
    Instruction(RET, "RET", 1, handlers.op_ret, sets_pc=True),
    Instruction(JMP, "JMP", 2, handlers.op_jmp, sets_pc=True),
    Instruction(JEQ, "JEQ", 2, handlers.op_jeq, sets_pc=True),
    Instruction(JNE, "JNE", 2, handlers.op_jne, sets_pc=True),
    Instruction(CMP, "CMP", 3, handlers.op_cmp),
    Instruction(IRET, "IRET", 1, handlers.op_iret, sets_pc=True),
    Instruction(HLT, "HLT", 1, handlers.op_hlt, sets_pc=True),
)


__all__ = [
    "Instruction",
    "OpcodeTable",
    "build_instruction_table",
    "DEFAULT_INSTRUCTIONS",
    "NOP",
    "LDI",
    "MUL",
    "PRN",
    "PRA",
    "ST",
    "PUSH",
    "POP",
    "ADD",
    "CALL",
    "RET",
    "JMP",
    "JEQ",
    "JNE",
    "CMP",
    "IRET",
    "HLT",
]
