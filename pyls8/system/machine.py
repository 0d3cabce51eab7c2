"""LS-8 machine assembly."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from pyls8.bus import ADDRESS_SPACE, Memory
from pyls8.cpu import LS8
from pyls8.cpu.core import DEFAULT_TICK_INTERVAL, DEFAULT_TIMER_INTERVAL
from pyls8.loader import ProgramImage, load_ls8_from_path
from pyls8.timing import Clock
from pyls8.utils import TraceRecorder


@dataclass
class MachineConfig:
    """Runtime configuration for an LS-8 machine."""

    memory_size: int = ADDRESS_SPACE
    tick_interval: float = DEFAULT_TICK_INTERVAL
    timer_interval: float = DEFAULT_TIMER_INTERVAL
    trace_capacity: int = 0
    output: Optional[Callable[[str], None]] = None
    clock: Optional[Clock] = None


@dataclass
class Machine:
    """Aggregates the core components of an LS-8."""

    memory: Memory
    cpu: LS8
    clock: Clock
    trace: TraceRecorder | None = None

    def load_program(self, path: Path) -> ProgramImage:
        return load_ls8_from_path(path, self.cpu)

    def run(self) -> None:
        """Run until the program halts, faults or the clock is stopped."""

        self.cpu.start_clock()


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate an LS-8 machine with the requested configuration."""

    config = config or MachineConfig()
    memory = Memory(0x00, config.memory_size)
    clock = config.clock or Clock()
    trace = TraceRecorder(config.trace_capacity) if config.trace_capacity > 0 else None

    cpu = LS8(
        memory,
        clock=clock,
        output=config.output or print,
        trace=trace,
        tick_interval=config.tick_interval,
        timer_interval=config.timer_interval,
    )
    return Machine(memory=memory, cpu=cpu, clock=clock, trace=trace)
