"""Cooperative scheduler driving the LS-8 instruction clock and timer source.

Every periodic source runs on the caller's thread inside ``Clock.start``, so
callbacks never overlap and the register file needs no lock.
"""

from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, List

from pyls8.utils import debug_enabled, debug_log


@dataclass
class PeriodicSource:
    """A callback fired every ``interval`` seconds."""

    name: str
    interval: float
    command: Callable[[], None]


@dataclass(order=True)
class _ScheduledEvent:
    due: float
    sequence: int
    source: PeriodicSource = field(compare=False)


class Clock:
    """Single-threaded fixed-rate scheduler."""

    def __init__(
        self,
        *,
        time_source: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._time_source = time_source
        self._sleep = sleep
        self._events: List[_ScheduledEvent] = []
        self._sequence = itertools.count()
        self._running = False
        self.dispatch_count = 0

    @property
    def running(self) -> bool:
        return self._running

    def add_periodic(self, name: str, interval: float, command: Callable[[], None]) -> PeriodicSource:
        if interval <= 0:
            raise ValueError(f"interval for {name!r} must be positive")
        source = PeriodicSource(name, interval, command)
        self._schedule(source, self._time_source() + interval)
        return source

    def start(self) -> None:
        """Run due sources until ``stop`` is called or no source remains."""

        if self._running:
            return
        self._running = True
        if debug_enabled("clock"):
            debug_log("clock", "start sources=%d", len(self._events))
        try:
            while self._running and self._events:
                self.run_pending()
                if not self._running or not self._events:
                    break
                delay = self._events[0].due - self._time_source()
                if delay > 0:
                    self._sleep(delay)
        finally:
            self._running = False

    def stop(self) -> None:
        """Stop the loop and drop every source."""

        if debug_enabled("clock"):
            debug_log("clock", "stop dispatched=%d", self.dispatch_count)
        self._running = False
        self._events.clear()

    def run_pending(self) -> int:
        """Fire every source whose due time has passed and return how many ran."""

        now = self._time_source()
        fired = 0
        while self._events and self._events[0].due <= now:
            event = heapq.heappop(self._events)
            interval = event.source.interval
            next_due = event.due + interval
            if next_due <= now:
                # Missed beats are dropped rather than replayed in a burst.
                next_due = now + interval
            self._schedule(event.source, next_due)
            event.source.command()
            fired += 1
            self.dispatch_count += 1
        return fired

    def _schedule(self, source: PeriodicSource, due: float) -> None:
        heapq.heappush(self._events, _ScheduledEvent(due, next(self._sequence), source))
