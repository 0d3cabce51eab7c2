"""LS-8 CPU: fetch/decode/execute cycle and interrupt dispatch."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, Sequence

from pyls8.bus import Addressable, MemoryError
from pyls8.timing import Clock
from pyls8.utils import TraceRecorder, debug_enabled, debug_log

from .errors import CPUError, IllegalOpcodeError, OperandError
from .handlers import ExecutionContext
from .opcodes import DEFAULT_INSTRUCTIONS, Instruction, build_instruction_table
from .state import IM, IS, REGISTER_COUNT, VECTOR_TABLE, CPUState

DEFAULT_TICK_INTERVAL = 0.001
DEFAULT_TIMER_INTERVAL = 1.0
TIMER_INTERRUPT = 0


def _report_error(message: str) -> None:
    print(message, file=sys.stderr)


@dataclass
class LS8:
    """The LS-8 CPU bound to an externally owned memory."""

    memory: Addressable
    clock: Clock = field(default_factory=Clock)
    output: Callable[[str], None] = print
    error_output: Callable[[str], None] = _report_error
    trace: TraceRecorder | None = None
    tick_interval: float = DEFAULT_TICK_INTERVAL
    timer_interval: float = DEFAULT_TIMER_INTERVAL
    instructions: Sequence[Instruction] = DEFAULT_INSTRUCTIONS

    state: CPUState = field(default_factory=CPUState)
    fault: Exception | None = None
    tick_count: int = 0

    def __post_init__(self) -> None:
        self.dispatch_table: Sequence[Instruction | None] = build_instruction_table(self.instructions)

    @property
    def halted(self) -> bool:
        return self.state.halted

    # ------------------------------------------------------------------
    # Host interface

    def poke(self, address: int, value: int) -> None:
        """Store ``value`` at ``address``; used to load programs."""

        self.memory.write(address, value)

    def raise_interrupt(self, line: int) -> None:
        """Mark interrupt ``line`` as pending in the interrupt status register."""

        if not 0 <= line < REGISTER_COUNT:
            raise OperandError(f"interrupt line {line} out of range (0-{REGISTER_COUNT - 1})")
        self.state.registers[IS] |= 1 << line

    def start_clock(self) -> None:
        """Tick the CPU and fire the timer interrupt until the clock stops."""

        if self.halted:
            return
        self.clock.add_periodic("tick", self.tick_interval, self.tick)
        self.clock.add_periodic("timer", self.timer_interval, self._timer_fired)
        self.clock.start()

    def stop_clock(self) -> None:
        self.clock.stop()

    def _timer_fired(self) -> None:
        self.raise_interrupt(TIMER_INTERRUPT)

    # ------------------------------------------------------------------
    # Execution

    def tick(self) -> None:
        """Service one pending interrupt or execute one instruction."""

        if self.halted:
            return
        self.tick_count += 1
        context = ExecutionContext(self.state, self.memory, self.output)
        try:
            if self._service_interrupt(context):
                return
            self._execute(context)
        except (CPUError, MemoryError) as exc:
            self._fail(exc)
            return
        if self.halted:
            if debug_enabled("cpu"):
                debug_log("cpu", "halt pc=%02x ticks=%d", self.state.pc, self.tick_count)
            self.stop_clock()

    def _service_interrupt(self, context: ExecutionContext) -> bool:
        state = self.state
        registers = state.registers
        pending = registers[IS] & registers[IM]
        if not state.flags.interrupts_enabled or pending == 0:
            return False

        for line in range(REGISTER_COUNT):
            if pending & (1 << line):
                break

        if self.trace is not None:
            self.trace.record_step(state, None, note=f"irq{line}")
        if debug_enabled("irq"):
            debug_log("irq", "enter line=%d pc=%02x sp=%02x", line, state.pc, state.sp)

        state.flags.interrupts_enabled = False
        registers[IS] &= ~(1 << line) & 0xFF

        context.push(state.pc)
        for index in range(REGISTER_COUNT):
            context.push_register(index)

        state.pc = self.memory.read(VECTOR_TABLE + line)
        return True

    def _execute(self, context: ExecutionContext) -> None:
        state = self.state
        state.ir = self.memory.read(state.pc)
        instruction = self.dispatch_table[state.ir]
        if self.trace is not None:
            self.trace.record_step(
                state,
                state.ir,
                mnemonic="" if instruction is None else instruction.mnemonic,
            )
        if instruction is None:
            raise IllegalOpcodeError(state.pc, state.ir)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%02x opcode=%02x %s", state.pc, state.ir, instruction.mnemonic)
        instruction.handler(context)

    def _fail(self, exc: Exception) -> None:
        self.fault = exc
        self.state.halted = True
        if self.trace is not None:
            self.trace.record_step(self.state, self.state.ir, note="fault")
        if debug_enabled("cpu"):
            debug_log("cpu", "fault pc=%02x: %s", self.state.pc, exc)
        self.error_output(str(exc))
        self.stop_clock()
