"""Logical-line to physical-row mapping for a given render width.

Every logical line wraps by display width, so line ``i`` starts at the
cumulative row count of all lines before it. ``RowMap`` stores that prefix
sum table and answers range queries against it.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence

from ..document import Line


def line_row_span(line: Line, width: int) -> int:
    """Return physical rows for ``line`` at ``width`` columns.

    Blank lines still take one row; a non-positive width maps everything to
    zero rows.
    """
    if width <= 0:
        return 0
    line_width = line.width()
    if line_width == 0:
        return 1
    return (line_width + width - 1) // width


class RowMap:
    """Prefix-sum table of physical rows over a document's lines.

    ``offsets[i]`` is the number of rows occupied by lines ``[0, i)``, so
    ``offsets[0] == 0`` and ``offsets[-1]`` is the document's total height.
    """

    def __init__(self, offsets: Sequence[int], width: int) -> None:
        self.offsets: tuple[int, ...] = tuple(offsets) if offsets else (0,)
        self.width = width

    @classmethod
    def build(cls, lines: Sequence[Line], width: int) -> RowMap:
        offsets = [0]
        total = 0
        for line in lines:
            total += line_row_span(line, width)
            offsets.append(total)
        return cls(offsets, width)

    @property
    def line_count(self) -> int:
        return len(self.offsets) - 1

    @property
    def total_rows(self) -> int:
        return self.offsets[-1]

    def rows_of(self, line_start: int, line_end: int) -> tuple[int, int] | None:
        """Return the half-open row range for lines ``[line_start, line_end)``.

        ``None`` when the range is empty, inverted, or out of bounds.
        """
        if line_start < 0 or line_end > self.line_count or line_start >= line_end:
            return None
        return self.offsets[line_start], self.offsets[line_end]

    def row_span(self, line_index: int) -> int:
        if not 0 <= line_index < self.line_count:
            return 0
        return self.offsets[line_index + 1] - self.offsets[line_index]

    def line_for_row(self, row: int) -> int | None:
        """Return the index of the line covering physical ``row``."""
        if row < 0 or row >= self.total_rows:
            return None
        return bisect_right(self.offsets, row) - 1

    def max_scroll(self, viewport_height: int) -> int:
        return max(0, self.total_rows - max(0, viewport_height))
