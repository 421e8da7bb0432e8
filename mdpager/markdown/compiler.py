"""Markdown event stream to styled document compiler.

``MarkdownCompiler`` owns all traversal state (style stack, list stack,
blockquote depth, active code block and table) and turns events into styled
lines plus heading, code-block and rule overlays. Compilation is total:
constructs it does not understand degrade to literal text.

Blank-line accounting: block constructs open and close with at most one
blank separator line, and two blank lines are never emitted back to back.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..document import CodeBlockOverlay, HeadingOverlay, Line, RenderedMarkdown, Span
from ..style import STRIKETHROUGH as STRIKETHROUGH_MODIFIER
from ..style import BOLD, ITALIC, Style, StyleStack
from . import events as ev
from .palette import (
    BLOCKQUOTE_STYLE,
    CODE_BLOCK_BG,
    CODE_BLOCK_STYLE,
    CODE_INDENT,
    INLINE_CODE_STYLE,
    LINK_STYLE,
    LIST_MARKER_STYLE,
    QUOTE_MARKER,
    QUOTE_MARKER_STYLE,
    bullet_glyph,
    heading_text_style,
)
from .table import TableBuilder

CODE_TAB_WIDTH = 4
EMPTY_TABLE_PLACEHOLDER = "(empty table)"

_INLINE_PATCHES: dict[str, Style] = {
    ev.EMPHASIS: Style(modifiers=frozenset({ITALIC})),
    ev.STRONG: Style(modifiers=frozenset({BOLD})),
    ev.STRIKETHROUGH: Style(modifiers=frozenset({STRIKETHROUGH_MODIFIER})),
    ev.LINK: LINK_STYLE,
}


@dataclass(frozen=True)
class CompileOptions:
    """Per-render compile parameters.

    ``max_table_width`` bounds the width of table grids; ``None`` leaves
    tables at their natural width.
    """

    max_table_width: int | None = None


@dataclass
class ListState:
    ordered: bool
    next_index: int = 1


@dataclass
class CodeBlockState:
    line_start: int
    language: str | None = None


class MarkdownCompiler:
    def __init__(self, options: CompileOptions | None = None) -> None:
        self.options = options or CompileOptions()
        self.lines: list[Line] = []
        self.current: list[Span] = []
        self.styles = StyleStack()
        self.list_stack: list[ListState] = []
        self.blockquote_depth = 0
        self.code_block: CodeBlockState | None = None
        self.table: TableBuilder | None = None
        self.heading_level: int | None = None
        self.line_start = True
        self.last_blank = True
        self.headings: list[HeadingOverlay] = []
        self.code_blocks: list[CodeBlockOverlay] = []
        self.rules: list[int] = []
        self.has_tables = False

    # -- event dispatch -------------------------------------------------------

    def handle_event(self, event: ev.Event) -> None:
        if isinstance(event, ev.Start):
            self.start_tag(event.tag)
        elif isinstance(event, ev.End):
            self.end_tag(event.tag)
        elif isinstance(event, ev.Text):
            if not self._table_cell_active():
                self.push_text(event.text)
            else:
                self.table.push_text(event.text)
        elif isinstance(event, ev.Code):
            if not self._table_cell_active():
                self.push_code_span(event.text)
            else:
                self.table.push_code(event.text)
        elif isinstance(event, ev.Html):
            if not self._table_cell_active():
                self.push_text(event.text)
            else:
                self.table.push_html(event.text)
        elif isinstance(event, ev.SoftBreak):
            if not self._table_cell_active():
                self.soft_break()
            else:
                self.table.push_soft_break()
        elif isinstance(event, ev.HardBreak):
            if not self._table_cell_active():
                self.hard_break()
            else:
                self.table.push_hard_break()
        elif isinstance(event, ev.Rule):
            self.push_rule()
        elif isinstance(event, ev.FootnoteRef):
            self._push_inline_literal(f"[^{event.label}]")
        elif isinstance(event, ev.TaskMarker):
            self._push_inline_literal("[x] " if event.checked else "[ ] ")

    def _push_inline_literal(self, text: str) -> None:
        if self._table_cell_active():
            self.table.push_text(text)
        else:
            self.push_text(text)

    def _table_cell_active(self) -> bool:
        return self.table is not None and self.table.is_collecting()

    # -- block starts ---------------------------------------------------------

    def start_tag(self, tag: ev.Tag) -> None:
        kind = tag.kind
        if kind == ev.TABLE:
            self.flush_line(False)
            self.ensure_block_gap()
            self.table = TableBuilder(alignments=list(tag.alignments))
            return
        if kind in (ev.TABLE_HEAD, ev.TABLE_BODY, ev.TABLE_ROW, ev.TABLE_CELL):
            if self.table is not None:
                if kind == ev.TABLE_HEAD:
                    self.table.start_head()
                elif kind == ev.TABLE_ROW:
                    self.table.start_row()
                elif kind == ev.TABLE_CELL:
                    self.table.start_cell()
            return

        if self._table_cell_active():
            if kind in ev.INLINE_STYLE_KINDS or kind in (ev.PARAGRAPH, ev.IMAGE):
                return

        if kind in (ev.PARAGRAPH, ev.HTML_BLOCK):
            self.ensure_block_gap()
        elif kind == ev.HEADING:
            self.ensure_block_gap()
            self.heading_level = tag.level
            self.styles = self.styles.push(heading_text_style(tag.level))
        elif kind == ev.BLOCKQUOTE:
            self.ensure_block_gap()
            self.blockquote_depth += 1
            self.styles = self.styles.push(BLOCKQUOTE_STYLE)
        elif kind == ev.LIST:
            if not self.list_stack:
                self.flush_line(False)
                self.ensure_block_gap()
            self.list_stack.append(
                ListState(ordered=tag.start is not None, next_index=tag.start if tag.start is not None else 1)
            )
        elif kind == ev.ITEM:
            self.start_list_item()
        elif kind == ev.CODE_BLOCK:
            self.start_code_block(tag)
        elif kind in _INLINE_PATCHES:
            self.styles = self.styles.push_patch(_INLINE_PATCHES[kind])
        elif kind == ev.IMAGE:
            self.ensure_block_gap()
            label = f"![{tag.title}]({tag.dest})" if tag.title else f"![image]({tag.dest})"
            self.push_text(label)
            self.soft_break()
        elif kind == ev.FOOTNOTE_DEFINITION:
            self.ensure_block_gap()
            self.push_text(f"[^{tag.label}]: ")

    def start_list_item(self) -> None:
        self.flush_line(False)
        if self.line_start and self.blockquote_depth:
            self.insert_prefixes()
        depth = len(self.list_stack)
        padding = " " * (max(0, depth - 1) * 2)
        if self.list_stack:
            state = self.list_stack[-1]
            if state.ordered:
                marker = f"{padding}{state.next_index}. "
                state.next_index += 1
            else:
                marker = f"{padding}{bullet_glyph(depth - 1)} "
        else:
            marker = f"{bullet_glyph(0)} "
        self.current.append(Span(marker, LIST_MARKER_STYLE))
        self.line_start = False

    def start_code_block(self, tag: ev.Tag) -> None:
        self.flush_line(False)
        self.ensure_block_gap()
        if not self.lines:
            # The frame's top border is painted on the row above the block.
            self.lines.append(Line())
            self.last_blank = True
        language = tag.info.strip() if tag.fenced else ""
        self.code_block = CodeBlockState(line_start=len(self.lines), language=language or None)
        self.styles = self.styles.push(CODE_BLOCK_STYLE)

    # -- block ends -----------------------------------------------------------

    def end_tag(self, tag: ev.Tag) -> None:
        kind = tag.kind
        if kind == ev.TABLE:
            self.end_table()
            return
        if kind in (ev.TABLE_HEAD, ev.TABLE_BODY, ev.TABLE_ROW, ev.TABLE_CELL):
            if self.table is not None:
                if kind == ev.TABLE_HEAD:
                    self.table.end_head()
                elif kind == ev.TABLE_ROW:
                    self.table.end_row()
                elif kind == ev.TABLE_CELL:
                    self.table.end_cell()
            return

        if self._table_cell_active() and kind in ev.INLINE_STYLE_KINDS:
            return

        if kind in (ev.PARAGRAPH, ev.HTML_BLOCK):
            self.flush_line(False)
            self.push_blank_line()
        elif kind == ev.HEADING:
            self.end_heading(tag.level)
        elif kind == ev.BLOCKQUOTE:
            self.flush_line(False)
            self.blockquote_depth = max(0, self.blockquote_depth - 1)
            self.styles = self.styles.pop()
            self.push_blank_line()
        elif kind == ev.LIST:
            self.flush_line(False)
            if self.list_stack:
                self.list_stack.pop()
            if not self.list_stack:
                self.push_blank_line()
        elif kind == ev.ITEM:
            self.flush_line(False)
        elif kind == ev.CODE_BLOCK:
            self.end_code_block()
        elif kind in _INLINE_PATCHES:
            self.styles = self.styles.pop()

    def end_heading(self, level: int) -> None:
        if self.heading_level is None:
            self.flush_line(False)
            return
        self.heading_level = None
        self.styles = self.styles.pop()
        if not self.current:
            # An empty heading leaves neither a line nor a band.
            self.line_start = True
            return
        self.flush_line(False)
        self.headings.append(HeadingOverlay(line=len(self.lines) - 1, level=level))
        self.push_blank_line()

    def end_code_block(self) -> None:
        self.flush_line(False)
        state = self.code_block
        if state is None:
            return
        if state.line_start == len(self.lines):
            # A code block always occupies at least one row.
            self.lines.append(Line())
        line_end = len(self.lines)
        if line_end > state.line_start:
            self.code_blocks.append(
                CodeBlockOverlay(line_start=state.line_start, line_end=line_end, language=state.language)
            )
        self.styles = self.styles.pop()
        self.code_block = None
        self.last_blank = False
        self.push_blank_line()

    def end_table(self) -> None:
        self.flush_line(False)
        table = self.table
        self.table = None
        if table is None:
            return
        prefix = QUOTE_MARKER * self.blockquote_depth
        max_width = self.options.max_table_width
        if prefix and max_width is not None:
            max_width = max(1, max_width - len(prefix))
        rendered = table.into_lines(max_width)
        if not rendered:
            rendered = [Line.from_text(EMPTY_TABLE_PLACEHOLDER)]
        if prefix:
            marker = Span(prefix, QUOTE_MARKER_STYLE)
            rendered = [Line((marker,) + line.spans) for line in rendered]
        self.lines.extend(rendered)
        self.has_tables = True
        self.last_blank = False
        self.push_blank_line()

    # -- inline content -------------------------------------------------------

    def push_text(self, text: str) -> None:
        if not text:
            return
        if self.code_block is None:
            self.push_text_segment(text.replace("\n", " "))
            return
        segments = text.split("\n")
        for segment in segments[:-1]:
            self.push_text_segment(segment)
            self.flush_line(True)
        self.push_text_segment(segments[-1])

    def push_text_segment(self, text: str) -> None:
        if not text:
            return
        if self.code_block is not None:
            text = text.expandtabs(CODE_TAB_WIDTH)
        else:
            text = text.replace("\t", " " * CODE_TAB_WIDTH)
        if self.line_start:
            self.insert_prefixes()
        self.current.append(Span(text, self.styles.current))
        self.last_blank = False

    def push_code_span(self, text: str) -> None:
        if self.line_start:
            self.insert_prefixes()
        style = self.styles.current.patch(INLINE_CODE_STYLE)
        self.current.append(Span(f"`{text}`", style))
        self.last_blank = False

    def insert_prefixes(self) -> None:
        if self.code_block is not None:
            self.current.append(Span(CODE_INDENT, CODE_BLOCK_STYLE))
        if self.blockquote_depth > 0:
            style = QUOTE_MARKER_STYLE
            if self.code_block is not None:
                style = style.with_bg(CODE_BLOCK_BG)
            self.current.append(Span(QUOTE_MARKER * self.blockquote_depth, style))
        self.line_start = False

    def soft_break(self) -> None:
        if self.heading_level is not None:
            self.push_text_segment(" ")
            return
        self.flush_line(False)

    def hard_break(self) -> None:
        self.flush_line(True)

    # -- line buffer ----------------------------------------------------------

    def flush_line(self, allow_empty: bool) -> None:
        if self.current:
            self.lines.append(Line(tuple(self.current)))
            self.current = []
            self.last_blank = False
        elif allow_empty:
            self.lines.append(Line())
            # Blank source lines inside a code block are content, not separators.
            self.last_blank = self.code_block is None
        self.line_start = True

    def ensure_block_gap(self) -> None:
        """Guarantee one blank line before a block unless one already exists.

        Pending spans (a list marker or footnote label) mean the block
        continues that line, so no separator is inserted.
        """
        if self.current:
            return
        if self.lines and not self.last_blank:
            self.lines.append(Line())
            self.last_blank = True
        self.line_start = True

    def push_blank_line(self) -> None:
        if not self.last_blank:
            self.lines.append(Line())
            self.last_blank = True
        self.line_start = True

    def push_rule(self) -> None:
        self.flush_line(False)
        self.ensure_block_gap()
        self.rules.append(len(self.lines))
        self.lines.append(Line())
        # The rule row is drawn by an overlay, so it counts as content.
        self.last_blank = False
        self.push_blank_line()

    # -- finalization ---------------------------------------------------------

    def finalize(self) -> RenderedMarkdown:
        if self.table is not None:
            self.end_table()
        if self.code_block is not None:
            self.end_code_block()
        if self.current:
            self.lines.append(Line(tuple(self.current)))
            self.current = []
        return RenderedMarkdown(
            lines=tuple(self.lines),
            headings=tuple(self.headings),
            code_blocks=tuple(self.code_blocks),
            rules=tuple(self.rules),
            has_tables=self.has_tables,
        )


def compile_events(
    events: Iterable[ev.Event],
    options: CompileOptions | None = None,
) -> RenderedMarkdown:
    """Compile a markdown event stream into a document and its overlays."""
    compiler = MarkdownCompiler(options)
    for event in events:
        compiler.handle_event(event)
    return compiler.finalize()
