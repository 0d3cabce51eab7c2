"""Scheduling for the LS-8 instruction clock and timer source."""

from .clock import Clock, PeriodicSource

__all__ = [
    "Clock",
    "PeriodicSource",
]
