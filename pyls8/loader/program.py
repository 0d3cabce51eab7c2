"""Program metadata structures for LS-8 loaders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class ProgramImage:
    """Holds the bytes written by a loader alongside where they came from."""

    name: str = ""
    start: int = 0x00
    data: bytearray = field(default_factory=bytearray)
    source_lines: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        return self.start + len(self.data) - 1

    def append(self, value: int, line_number: int) -> None:
        self.data.append(value & 0xFF)
        self.source_lines.append(line_number)
