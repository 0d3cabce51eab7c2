"""LS-8 instruction handlers.

Each handler is a plain function over an explicit ``ExecutionContext``. Handlers
read their operands at ``pc + 1`` and ``pc + 2`` and advance ``pc`` by their own
width, except control transfers which assign ``pc`` directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from pyls8.bus import Addressable

from . import alu
from .errors import OperandError, StackError
from .state import REGISTER_COUNT, CPUState


@dataclass
class ExecutionContext:
    """Everything a handler may touch while executing one instruction."""

    state: CPUState
    memory: Addressable
    output: Callable[[str], None]

    def operand(self, offset: int) -> int:
        return self.memory.read(self.state.pc + offset)

    def register_operand(self, offset: int) -> int:
        return self.state.get_register(self.operand(offset))

    def push(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise OperandError(f"value {value:#x} does not fit a stack slot")
        state = self.state
        if state.sp == 0x00:
            raise StackError("stack overflow")
        state.sp -= 1
        self.memory.write(state.sp, value)

    def push_register(self, index: int) -> None:
        # SP moves before the register is read, so saving R7 stores the
        # already decremented stack pointer.
        state = self.state
        if state.sp == 0x00:
            raise StackError("stack overflow")
        state.sp -= 1
        self.memory.write(state.sp, state.get_register(index))

    def pop_into(self, index: int) -> None:
        # The destination is written before SP moves, so popping into SP
        # leaves SP one above the popped value.
        state = self.state
        state.set_register(index, self.memory.read(state.sp))
        self._bump_sp()

    def pop_pc(self) -> None:
        state = self.state
        state.pc = self.memory.read(state.sp)
        self._bump_sp()

    def _bump_sp(self) -> None:
        if self.state.sp == 0xFF:
            raise StackError("stack underflow")
        self.state.sp += 1


def op_nop(ctx: ExecutionContext) -> None:
    ctx.state.pc += 1


def op_ldi(ctx: ExecutionContext) -> None:
    ctx.state.set_register(ctx.operand(1), ctx.operand(2))
    ctx.state.pc += 3


def _alu_op(ctx: ExecutionContext, op: str) -> None:
    reg_a = ctx.operand(1)
    value_b = ctx.register_operand(2)
    state = ctx.state
    state.set_register(reg_a, alu.apply(op, state.get_register(reg_a), value_b))
    state.pc += 3


def op_add(ctx: ExecutionContext) -> None:
    _alu_op(ctx, "ADD")


def op_mul(ctx: ExecutionContext) -> None:
    _alu_op(ctx, "MUL")


def op_cmp(ctx: ExecutionContext) -> None:
    """Set ``equal`` when every bit of the first register is set in the second."""

    value_a = ctx.register_operand(1)
    value_b = ctx.register_operand(2)
    ctx.state.flags.equal = (value_a & ~value_b) == 0
    ctx.state.pc += 3


def op_prn(ctx: ExecutionContext) -> None:
    ctx.output(str(ctx.register_operand(1)))
    ctx.state.pc += 2


def op_pra(ctx: ExecutionContext) -> None:
    ctx.output(chr(ctx.register_operand(1)))
    ctx.state.pc += 2


def op_push(ctx: ExecutionContext) -> None:
    ctx.push(ctx.register_operand(1))
    ctx.state.pc += 2


def op_pop(ctx: ExecutionContext) -> None:
    ctx.pop_into(ctx.operand(1))
    ctx.state.pc += 2


def op_call(ctx: ExecutionContext) -> None:
    target = ctx.register_operand(1)
    ctx.push(ctx.state.pc + 2)
    ctx.state.pc = target


def op_ret(ctx: ExecutionContext) -> None:
    ctx.pop_pc()


def op_jmp(ctx: ExecutionContext) -> None:
    ctx.state.pc = ctx.register_operand(1)


def op_jeq(ctx: ExecutionContext) -> None:
    if ctx.state.flags.equal is True:
        ctx.state.pc = ctx.register_operand(1)
    else:
        ctx.state.pc += 2


def op_jne(ctx: ExecutionContext) -> None:
    if ctx.state.flags.equal is False:
        ctx.state.pc = ctx.register_operand(1)
    else:
        ctx.state.pc += 2


def op_st(ctx: ExecutionContext) -> None:
    ctx.memory.write(ctx.register_operand(1), ctx.register_operand(2))
    ctx.state.pc += 3


def op_iret(ctx: ExecutionContext) -> None:
    for index in reversed(range(REGISTER_COUNT)):
        ctx.pop_into(index)
    ctx.pop_pc()
    ctx.state.flags.interrupts_enabled = True


def op_hlt(ctx: ExecutionContext) -> None:
    ctx.state.halted = True


__all__ = [
    "ExecutionContext",
    "op_add",
    "op_call",
    "op_cmp",
    "op_hlt",
    "op_iret",
    "op_jeq",
    "op_jmp",
    "op_jne",
    "op_ldi",
    "op_mul",
    "op_nop",
    "op_pop",
    "op_pra",
    "op_prn",
    "op_push",
    "op_ret",
    "op_st",
]
