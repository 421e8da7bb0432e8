"""Cell-grid render surface for the visible part of a document.

Visible logical lines are character-wrapped into exactly the number of rows
``RowMap`` assigns them, overlay overrides are layered on top, and each row
is encoded as an ANSI string.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..ansi import ANSI_RESET, char_display_width, style_sgr
from ..document import Line, RenderedMarkdown
from ..style import Style
from ..viewport.overlays import CellOverride, paint_overlays
from ..viewport.rows import RowMap

# Trailing half of a double-width glyph; renders as nothing.
WIDE_TAIL = ""
# Drawn in the last cell when a line needs more rows than it was given.
OVERFLOW_MARKER = "…"


@dataclass
class Cell:
    char: str = " "
    style: Style = field(default_factory=Style)


def wrap_line_cells(line: Line, width: int, max_rows: int) -> list[list[Cell]]:
    """Split ``line`` into rows of ``width`` cells, at most ``max_rows`` rows.

    A wide glyph that would straddle the right edge moves to the next row and
    leaves a padding cell behind. Rows are padded to ``width``. Text that does
    not fit in ``max_rows`` is dropped and the final cell shows
    ``OVERFLOW_MARKER`` instead.
    """
    if width <= 0 or max_rows <= 0:
        return []
    rows: list[list[Cell]] = [[]]
    for span in line.spans:
        for ch in span.text:
            w = char_display_width(ch, len(rows[-1]))
            if w == 0:
                continue
            if len(rows[-1]) + w > width:
                if len(rows) >= max_rows:
                    rows = _pad_rows(rows, width)
                    _mark_overflow(rows[-1], span.style)
                    return rows
                rows.append([])
            rows[-1].append(Cell(ch, span.style))
            if w == 2:
                rows[-1].append(Cell(WIDE_TAIL, span.style))
    return _pad_rows(rows, width)


def _mark_overflow(row: list[Cell], style: Style) -> None:
    if row[-1].char == WIDE_TAIL and len(row) >= 2:
        row[-2] = Cell(" ", row[-2].style)
    row[-1] = Cell(OVERFLOW_MARKER, style)


def _pad_rows(rows: list[list[Cell]], width: int) -> list[list[Cell]]:
    for row in rows:
        while len(row) < width:
            row.append(Cell())
    return rows


class ScreenBuffer:
    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.rows: list[list[Cell]] = [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def set_row(self, row: int, cells: list[Cell]) -> None:
        if 0 <= row < self.height:
            self.rows[row] = (cells + [Cell() for _ in range(self.width)])[: self.width]

    def set_char(self, row: int, col: int, ch: str, style: Style) -> None:
        cells = self.rows[row]
        # Never leave half of a wide glyph behind.
        if cells[col].char == WIDE_TAIL and col > 0:
            cells[col - 1] = Cell(" ", cells[col - 1].style)
        if col + 1 < self.width and cells[col + 1].char == WIDE_TAIL:
            cells[col + 1] = Cell(" ", cells[col + 1].style)
        cells[col] = Cell(ch, style)

    def apply(self, overrides: Iterable[CellOverride]) -> None:
        for override in overrides:
            if not 0 <= override.row < self.height:
                continue
            col_end = min(self.width, override.col_end)
            cells = self.rows[override.row]
            for col in range(max(0, override.col_start), col_end):
                cells[col].style = cells[col].style.patch(override.style)
            if override.text is None:
                continue
            col = max(0, override.col_start)
            for ch in override.text:
                w = char_display_width(ch, col)
                if col + w > col_end:
                    break
                style = cells[col].style
                self.set_char(override.row, col, ch, style)
                if w == 2:
                    if col + 2 < self.width and cells[col + 2].char == WIDE_TAIL:
                        cells[col + 2] = Cell(" ", cells[col + 2].style)
                    cells[col + 1] = Cell(WIDE_TAIL, style)
                col += w

    def encode_row(self, row: int, color: bool = True) -> str:
        """Encode one row as text, grouping equal-style cells into SGR runs."""
        out: list[str] = []
        run_style: Style | None = None
        for cell in self.rows[row]:
            if cell.char == WIDE_TAIL:
                continue
            if color and cell.style != run_style:
                if run_style is not None and style_sgr(run_style):
                    out.append(ANSI_RESET)
                out.append(style_sgr(cell.style))
                run_style = cell.style
            out.append(cell.char)
        if color and run_style is not None and style_sgr(run_style):
            out.append(ANSI_RESET)
        return "".join(out)

    def plain_rows(self) -> list[str]:
        return [self.encode_row(row, color=False) for row in range(self.height)]


def compose_viewport(
    rendered: RenderedMarkdown,
    row_map: RowMap,
    scroll: int,
    height: int,
    width: int,
) -> ScreenBuffer:
    """Lay out the visible rows of ``rendered`` and apply its overlays."""
    buffer = ScreenBuffer(width, height)
    if buffer.width == 0 or buffer.height == 0:
        return buffer
    scroll = max(0, scroll)
    line_index = row_map.line_for_row(scroll)
    if line_index is not None:
        row = row_map.offsets[line_index]
        while line_index < len(rendered.lines) and row < scroll + height:
            span_rows = row_map.row_span(line_index)
            wrapped = wrap_line_cells(rendered.lines[line_index], width, span_rows)
            for offset, cells in enumerate(wrapped):
                screen_row = row + offset - scroll
                if 0 <= screen_row < height:
                    buffer.set_row(screen_row, cells)
            row += span_rows
            line_index += 1
    buffer.apply(paint_overlays(rendered, row_map, scroll, height, width))
    return buffer
