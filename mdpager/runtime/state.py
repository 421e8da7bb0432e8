"""Viewer state: the cached document, its row map, and scroll position.

Document, overlays and row map are always replaced together. A reload that
fails to read or compile leaves every cached value untouched and only
updates the status message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..document import Line, RenderedMarkdown
from ..markdown import CompileOptions, markdown_to_render
from ..source import read_text
from ..viewport.rows import RowMap

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "Press ? for help, q to quit"
RELOADED_STATUS = "Reloaded file"
EMPTY_DOCUMENT_PLACEHOLDER = "(file is empty)"
DEFAULT_VIEWPORT_WIDTH = 80


def ensure_non_empty(rendered: RenderedMarkdown) -> RenderedMarkdown:
    if rendered.lines:
        return rendered
    return RenderedMarkdown(lines=(Line.from_text(EMPTY_DOCUMENT_PLACEHOLDER),))


def effective_table_width(viewport_width: int, max_table_width: int | None) -> int:
    """Tables never exceed the viewport; a configured cap can narrow them further."""
    width = max(1, viewport_width)
    if max_table_width is None:
        return width
    return max(1, min(width, max_table_width))


def render_source(source: str, table_width: int) -> RenderedMarkdown:
    options = CompileOptions(max_table_width=table_width)
    return ensure_non_empty(markdown_to_render(source, options))


@dataclass
class ViewerState:
    path: Path
    source: str
    rendered: RenderedMarkdown
    row_map: RowMap
    viewport_width: int = DEFAULT_VIEWPORT_WIDTH
    viewport_height: int = 0
    max_table_width: int | None = None
    scroll: int = 0
    status: str | None = DEFAULT_STATUS
    show_help: bool = False
    dirty: bool = True

    @classmethod
    def from_source(
        cls,
        path: Path,
        source: str,
        *,
        viewport_width: int = DEFAULT_VIEWPORT_WIDTH,
        viewport_height: int = 0,
        max_table_width: int | None = None,
    ) -> ViewerState:
        width = max(1, viewport_width)
        rendered = render_source(source, effective_table_width(width, max_table_width))
        return cls(
            path=path,
            source=source,
            rendered=rendered,
            row_map=RowMap.build(rendered.lines, width),
            viewport_width=width,
            viewport_height=max(0, viewport_height),
            max_table_width=max_table_width,
        )

    @classmethod
    def load(cls, path: Path, **kwargs) -> ViewerState:
        """Read and compile ``path``; ``OSError`` propagates to the caller."""
        return cls.from_source(path, read_text(path), **kwargs)

    # -- content replacement ---------------------------------------------------

    def _replace_content(self, source: str, rendered: RenderedMarkdown) -> None:
        self.source = source
        self.rendered = rendered
        self.row_map = RowMap.build(rendered.lines, self.viewport_width)
        self.dirty = True

    def reload(self) -> bool:
        """Re-read the file and swap in the new document atomically.

        On success scroll returns to the top. On failure the previous document,
        overlays, row map and scroll are kept and the status explains why.
        """
        try:
            source = read_text(self.path)
            rendered = render_source(source, self.table_width())
        except Exception as exc:
            logger.warning("reload of %s failed: %s", self.path, exc)
            self.set_status(f"Reload failed: {exc}")
            return False
        self._replace_content(source, rendered)
        self.scroll = 0
        self.set_status(RELOADED_STATUS)
        return True

    def table_width(self) -> int:
        return effective_table_width(self.viewport_width, self.max_table_width)

    def resize(self, width: int, height: int) -> None:
        """Apply new viewport geometry, recompiling when table layout depends on it."""
        width = max(1, width)
        height = max(0, height)
        if height != self.viewport_height:
            self.viewport_height = height
            self.dirty = True
        if width != self.viewport_width:
            self.viewport_width = width
            if self.rendered.has_tables:
                self._replace_content(self.source, render_source(self.source, self.table_width()))
            else:
                self.row_map = RowMap.build(self.rendered.lines, width)
            self.dirty = True
        self.scroll = min(self.scroll, self.max_scroll())

    # -- scrolling ---------------------------------------------------------------

    def total_rows(self) -> int:
        return self.row_map.total_rows

    def max_scroll(self) -> int:
        return self.row_map.max_scroll(self.viewport_height)

    def scroll_to(self, row: int) -> None:
        target = max(0, min(row, self.max_scroll()))
        if target != self.scroll:
            self.scroll = target
            self.dirty = True

    def scroll_up(self, rows: int) -> None:
        if rows > 0:
            self.scroll_to(self.scroll - rows)

    def scroll_down(self, rows: int) -> None:
        if rows > 0:
            self.scroll_to(self.scroll + rows)

    def page_up(self) -> None:
        self.scroll_up(max(1, self.viewport_height))

    def page_down(self) -> None:
        self.scroll_down(max(1, self.viewport_height))

    def scroll_to_end(self) -> None:
        self.scroll_to(self.max_scroll())

    # -- chrome ------------------------------------------------------------------

    def set_status(self, message: str | None) -> None:
        self.status = message
        self.dirty = True

    def toggle_help(self) -> None:
        self.show_help = not self.show_help
        self.dirty = True
