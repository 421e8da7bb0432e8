"""Overlay painting for the visible window of a document.

Overlays never change document text; they become ``CellOverride`` runs that a
render surface layers over already-composed cells. Only rows inside
``[scroll, scroll + height)`` are painted, and overlays that start above or
end below the window are clipped to it.

Code-block frames use the blank separator rows the compiler keeps around
every code block: the top border sits on the row just above the block and
the bottom border on the row just below it. When that separator row lies
outside the window (or the document), the border is drawn on the block's own
edge row instead, so a block whose edge is visible always shows that edge.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import clip_to_width, display_width
from ..document import RenderedMarkdown
from ..markdown.palette import (
    CODE_BLOCK_BORDER_STYLE,
    CODE_BLOCK_BG,
    RULE_GLYPH,
    RULE_STYLE,
    heading_block_colors,
)
from ..style import Style
from .rows import RowMap


@dataclass(frozen=True)
class CellOverride:
    """Style (and optionally glyph) override for one horizontal run of cells.

    ``row`` is relative to the top of the viewport; the run covers columns
    ``[col_start, col_end)``. When ``text`` is set its glyphs replace the cell
    characters from ``col_start``.
    """

    row: int
    col_start: int
    col_end: int
    style: Style
    text: str | None = None


@dataclass(frozen=True)
class _Window:
    start: int
    end: int

    def contains(self, row: int) -> bool:
        return self.start <= row < self.end

    def clip(self, row_start: int, row_end: int) -> range:
        return range(max(row_start, self.start), min(row_end, self.end))


def frame_border(width: int, left: str, right: str, label: str | None = None) -> str:
    """Build a border row of exactly ``width`` columns with an optional label."""
    if width <= 0:
        return ""
    if width < 2:
        return "─" * width
    inner = width - 2
    title = ""
    if label and inner >= 5:
        title = clip_to_width(f" {label} ", inner - 1)
    fill = "─" * max(0, inner - 1 - display_width(title)) if title else "─" * inner
    middle = f"─{title}{fill}" if title else fill
    return f"{left}{middle}{right}"


def _paint_code_blocks(
    rendered: RenderedMarkdown,
    row_map: RowMap,
    window: _Window,
    scroll: int,
    width: int,
) -> list[CellOverride]:
    out: list[CellOverride] = []
    fill_style = Style(bg=CODE_BLOCK_BG)
    for block in rendered.code_blocks:
        rows = row_map.rows_of(block.line_start, block.line_end)
        if rows is None:
            continue
        first_row, end_row = rows
        top_row = first_row - 1
        if top_row + 1 >= window.end or end_row < window.start:
            continue

        for row in window.clip(first_row, end_row):
            out.append(CellOverride(row - scroll, 0, width, fill_style))

        if window.contains(first_row):
            # Fall back to the block's own first row when the separator is cut off.
            border_row = top_row if top_row >= 0 and window.contains(top_row) else first_row
            out.append(
                CellOverride(
                    border_row - scroll,
                    0,
                    width,
                    CODE_BLOCK_BORDER_STYLE,
                    frame_border(width, "┌", "┐", block.language),
                )
            )
        last_row = end_row - 1
        if window.contains(last_row):
            border_row = end_row if end_row < row_map.total_rows and window.contains(end_row) else last_row
            out.append(
                CellOverride(
                    border_row - scroll,
                    0,
                    width,
                    CODE_BLOCK_BORDER_STYLE,
                    frame_border(width, "└", "┘"),
                )
            )
    return out


def _paint_headings(
    rendered: RenderedMarkdown,
    row_map: RowMap,
    window: _Window,
    scroll: int,
    width: int,
) -> list[CellOverride]:
    out: list[CellOverride] = []
    for heading in rendered.headings:
        rows = row_map.rows_of(heading.line, heading.line + 1)
        if rows is None:
            continue
        bg, _fg = heading_block_colors(heading.level)
        band = Style(bg=bg)
        for row in window.clip(*rows):
            out.append(CellOverride(row - scroll, 0, width, band))
    return out


def _paint_rules(
    rendered: RenderedMarkdown,
    row_map: RowMap,
    window: _Window,
    scroll: int,
    width: int,
) -> list[CellOverride]:
    out: list[CellOverride] = []
    glyphs = RULE_GLYPH * width
    for line_index in rendered.rules:
        rows = row_map.rows_of(line_index, line_index + 1)
        if rows is None:
            continue
        for row in window.clip(*rows):
            out.append(CellOverride(row - scroll, 0, width, RULE_STYLE, glyphs))
    return out


def paint_overlays(
    rendered: RenderedMarkdown,
    row_map: RowMap,
    scroll_offset: int,
    viewport_height: int,
    viewport_width: int,
) -> list[CellOverride]:
    """Return cell overrides for every overlay intersecting the visible window.

    Code-block frames are emitted first, then heading bands, then rules, so a
    surface applying overrides in order lets later kinds win on shared cells.
    """
    if viewport_height <= 0 or viewport_width <= 0:
        return []
    scroll = max(0, scroll_offset)
    window = _Window(scroll, scroll + viewport_height)
    overrides: list[CellOverride] = []
    overrides.extend(_paint_code_blocks(rendered, row_map, window, scroll, viewport_width))
    overrides.extend(_paint_headings(rendered, row_map, window, scroll, viewport_width))
    overrides.extend(_paint_rules(rendered, row_map, window, scroll, viewport_width))
    return overrides
