"""An in-memory log of two-column lines with tracked column widths."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Optional, TextIO


class Log:
    """Collects (header, detail) lines and the widest entry of each column.

    *measure* gives the rendered width of a string; it defaults to ``len``.
    """

    def __init__(self, measure: Optional[Callable[[str], int]] = None) -> None:
        self._measure: Callable[[str], int] = measure if measure is not None else len
        self._lines: list[tuple[str, str]] = []
        self.header_width = 0
        self.longest_line_width = 0

    @property
    def lines(self) -> list[tuple[str, str]]:
        return list(self._lines)

    def add_line(self, line1: str, line2: str = "") -> None:
        self.header_width = max(self._measure(line1), self.header_width)
        self.longest_line_width = max(self._measure(line2), self.longest_line_width)
        self._lines.append((line1, line2))

    def reset(self) -> None:
        self.header_width = 0
        self.longest_line_width = 0
        self._lines.clear()

    def dump(self, stream: Optional[TextIO] = None) -> None:
        """Write every line to *stream*, standard output by default."""
        out = stream if stream is not None else sys.stdout
        for first, second in self._lines:
            text = first if not second else f"{first} - {second}"
            out.write(f"[LOG]: {text}\n")
        out.flush()