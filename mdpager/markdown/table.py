"""Table collection and bordered grid layout.

``TableBuilder`` accumulates header/body cell text while the compiler walks a
table. ``layout_table`` turns the collected cells into bordered document
lines, shrinking columns proportionally when the natural grid is wider than
the available width and word-wrapping cell text to the final widths.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..ansi import display_width, split_by_width
from ..document import Line, Span
from ..style import Style
from .events import ALIGN_CENTER, ALIGN_LEFT, ALIGN_NONE, ALIGN_RIGHT
from .palette import TABLE_BORDER_STYLE, TABLE_CELL_STYLE, TABLE_HEADER_STYLE

MIN_COLUMN_WIDTH = 3
_BR_TAG_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)


@dataclass(frozen=True)
class TableCell:
    """Cell text as explicit lines; each line is wrapped independently."""

    lines: tuple[str, ...] = ("",)

    def natural_width(self) -> int:
        widest = max((display_width(line) for line in self.lines), default=0)
        return max(MIN_COLUMN_WIDTH, widest)


@dataclass(frozen=True)
class _Border:
    left: str
    fill: str
    junction: str
    right: str


TOP_BORDER = _Border("┌", "─", "┬", "┐")
HEADER_SEPARATOR = _Border("╞", "═", "╪", "╡")
ROW_SEPARATOR = _Border("├", "─", "┼", "┤")
BOTTOM_BORDER = _Border("└", "─", "┴", "┘")
VERTICAL = "│"


@dataclass
class TableBuilder:
    alignments: list[str] = field(default_factory=list)
    header: list[TableCell] | None = None
    rows: list[list[TableCell]] = field(default_factory=list)
    current_row: list[TableCell] = field(default_factory=list)
    current_cell: list[str] = field(default_factory=lambda: [""])
    in_head: bool = False
    in_cell: bool = False

    def is_collecting(self) -> bool:
        return self.in_cell

    def start_head(self) -> None:
        self.in_head = True

    def end_head(self) -> None:
        # A header row is not always wrapped in its own row events.
        if self.current_row or self.in_cell:
            self.end_row()
        self.in_head = False

    def start_row(self) -> None:
        self.current_row = []

    def end_row(self) -> None:
        if self.in_cell:
            self.end_cell()
        if not self.current_row:
            return
        if self.in_head and self.header is None:
            self.header = self.current_row
        else:
            self.rows.append(self.current_row)
        self.current_row = []

    def start_cell(self) -> None:
        if self.in_cell:
            self.end_cell()
        self.current_cell = [""]
        self.in_cell = True

    def end_cell(self) -> None:
        if not self.in_cell:
            return
        lines = [line.strip() for line in self.current_cell]
        while len(lines) > 1 and not lines[-1]:
            lines.pop()
        self.current_row.append(TableCell(tuple(lines)))
        self.current_cell = [""]
        self.in_cell = False

    def push_text(self, text: str) -> None:
        if not self.in_cell:
            return
        self.current_cell[-1] += text.replace("\n", " ")

    def push_code(self, text: str) -> None:
        if not self.in_cell:
            return
        self.current_cell[-1] += f"`{text}`"

    def push_html(self, html: str) -> None:
        if _BR_TAG_RE.fullmatch(html.strip()):
            self.push_hard_break()
            return
        self.push_text(html)

    def push_soft_break(self) -> None:
        if not self.in_cell:
            return
        if not self.current_cell[-1].endswith(" "):
            self.current_cell[-1] += " "

    def push_hard_break(self) -> None:
        if not self.in_cell:
            return
        self.current_cell.append("")

    def into_lines(self, max_width: int | None = None) -> list[Line]:
        if self.in_cell:
            self.end_cell()
        if self.current_row:
            self.end_row()
        return layout_table(self.header, self.rows, self.alignments, max_width)


def fit_column_widths(natural: list[int], max_width: int | None) -> list[int]:
    """Shrink ``natural`` column widths so the bordered grid fits ``max_width``.

    Each column costs its width plus three border/padding columns, and the
    grid has one extra border column. Widths are scaled proportionally with a
    floor of ``MIN_COLUMN_WIDTH``; rounding drift is removed one unit at a time
    from the widest column (first on ties) and any remaining slack is handed
    out round-robin from the first column.
    """
    columns = len(natural)
    if columns == 0:
        return []
    overhead = 3 * columns + 1
    total = sum(natural)
    if max_width is None or overhead + total <= max_width:
        return list(natural)

    available = max_width - overhead
    if MIN_COLUMN_WIDTH * columns >= available:
        return [MIN_COLUMN_WIDTH] * columns

    widths = [max(MIN_COLUMN_WIDTH, (width * available) // total) for width in natural]
    while sum(widths) > available:
        widest = max(range(columns), key=lambda idx: widths[idx])
        widths[widest] -= 1
    idx = 0
    while sum(widths) < available:
        widths[idx % columns] += 1
        idx += 1
    return widths


def wrap_words(text: str, width: int) -> list[str]:
    """Greedy word wrap by display width.

    Words longer than ``width`` are force-broken. Always returns at least one
    (possibly empty) line.
    """
    words = text.split()
    if not words or width <= 0:
        return [""]

    lines: list[str] = []
    current = ""
    current_width = 0
    for word in words:
        word_width = display_width(word)
        if current and current_width + 1 + word_width <= width:
            current = f"{current} {word}"
            current_width += 1 + word_width
            continue
        if current:
            lines.append(current)
            current = ""
            current_width = 0
        if word_width <= width:
            current = word
            current_width = word_width
            continue
        chunks = split_by_width(word, width)
        lines.extend(chunks[:-1])
        current = chunks[-1]
        current_width = display_width(current)
    if current:
        lines.append(current)
    return lines or [""]


def wrap_cell(cell: TableCell, width: int) -> list[str]:
    wrapped: list[str] = []
    for line in cell.lines:
        wrapped.extend(wrap_words(line, width))
    return wrapped or [""]


def align_text(text: str, width: int, alignment: str) -> str:
    padding = max(0, width - display_width(text))
    if alignment == ALIGN_RIGHT:
        return " " * padding + text
    if alignment == ALIGN_CENTER:
        left = padding // 2
        return " " * left + text + " " * (padding - left)
    return text + " " * padding


def _border_line(widths: list[int], border: _Border) -> Line:
    segments = [border.fill * (width + 2) for width in widths]
    text = border.left + border.junction.join(segments) + border.right
    return Line((Span(text, TABLE_BORDER_STYLE),))


def _row_lines(
    cells: list[TableCell],
    widths: list[int],
    alignments: list[str],
    cell_style: Style,
) -> list[Line]:
    wrapped_columns: list[list[str]] = []
    for idx, width in enumerate(widths):
        cell = cells[idx] if idx < len(cells) else TableCell()
        wrapped_columns.append(wrap_cell(cell, width))
    height = max(len(column) for column in wrapped_columns)

    lines: list[Line] = []
    for row_idx in range(height):
        spans: list[Span] = [Span(VERTICAL, TABLE_BORDER_STYLE)]
        for col_idx, width in enumerate(widths):
            column = wrapped_columns[col_idx]
            text = column[row_idx] if row_idx < len(column) else ""
            padded = align_text(text, width, alignments[col_idx])
            spans.append(Span(f" {padded} ", cell_style))
            spans.append(Span(VERTICAL, TABLE_BORDER_STYLE))
        lines.append(Line(tuple(spans)))
    return lines


def layout_table(
    header: list[TableCell] | None,
    rows: list[list[TableCell]],
    alignments: list[str],
    max_width: int | None = None,
) -> list[Line]:
    """Render a bordered grid; returns no lines when there are no columns."""
    columns = len(alignments)
    if header is not None:
        columns = max(columns, len(header))
    for row in rows:
        columns = max(columns, len(row))
    if columns == 0:
        return []

    aligns = [
        ALIGN_LEFT if alignment == ALIGN_NONE else alignment
        for alignment in list(alignments)[:columns]
    ]
    aligns.extend([ALIGN_LEFT] * (columns - len(aligns)))

    natural = [MIN_COLUMN_WIDTH] * columns
    for row in ([header] if header is not None else []) + rows:
        for idx, cell in enumerate(row):
            natural[idx] = max(natural[idx], cell.natural_width())
    widths = fit_column_widths(natural, max_width)

    lines = [_border_line(widths, TOP_BORDER)]
    if header is not None:
        lines.extend(_row_lines(header, widths, aligns, TABLE_HEADER_STYLE))
        lines.append(_border_line(widths, HEADER_SEPARATOR))
    for idx, row in enumerate(rows):
        if idx > 0:
            lines.append(_border_line(widths, ROW_SEPARATOR))
        lines.extend(_row_lines(row, widths, aligns, TABLE_CELL_STYLE))
    lines.append(_border_line(widths, BOTTOM_BORDER))
    return lines
