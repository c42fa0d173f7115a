from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """Half-open `[start, end)` character range in the source text."""

    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Span start {self.start} is after end {self.end}")

    def line_column(self, source: str) -> tuple[int, int]:
        """1-based line and column of `start` within `source`."""
        line = source.count("\n", 0, self.start) + 1
        column = self.start - (source.rfind("\n", 0, self.start) + 1) + 1
        return line, column
