"""Source spans.

A :class:`Span` is a half-open ``[start, end)`` range of offsets into the
source text. Every token and every syntax tree node carries one so that
diagnostics can point at the exact text that produced them.

File: span.py
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """
    Half-open range of source offsets.
    """
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Span start {self.start} is past its end {self.end}")

    def combine(self, other: Span) -> Span:
        """
        Return the smallest span covering both ``self`` and ``other``.
        """
        return Span(min(self.start, other.start), max(self.end, other.end))

    def slice(self, source: str) -> str:
        """
        Return the text of ``source`` covered by this span.
        """
        return source[self.start:self.end]

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"
