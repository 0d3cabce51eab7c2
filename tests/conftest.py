"""Shared fixtures for the LS-8 test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from pyls8.timing import Clock

PROGRAMS_DIR = Path(__file__).resolve().parents[1] / "programs"


class FakeTime:
    """Virtual time source whose ``sleep`` advances instantly."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def virtual_clock(fake_time: FakeTime) -> Clock:
    return Clock(time_source=fake_time, sleep=fake_time.sleep)


@pytest.fixture
def programs_dir() -> Path:
    return PROGRAMS_DIR
