"""Document model produced by one markdown compile pass.

A document is an ordered tuple of styled lines plus overlay metadata that
references line indices. All values are immutable once returned so content
and overlays can only ever be replaced together.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ansi import display_width
from .style import Style


@dataclass(frozen=True)
class Span:
    """A run of text sharing one style."""

    text: str
    style: Style = Style()


@dataclass(frozen=True)
class Line:
    """One logical document line; zero spans means a blank separator."""

    spans: tuple[Span, ...] = ()

    @classmethod
    def from_text(cls, text: str, style: Style = Style()) -> Line:
        if not text:
            return cls()
        return cls((Span(text, style),))

    def width(self) -> int:
        return sum(display_width(span.text) for span in self.spans)

    def plain_text(self) -> str:
        return "".join(span.text for span in self.spans)

    def is_empty(self) -> bool:
        return not self.spans


@dataclass(frozen=True)
class HeadingOverlay:
    line: int
    level: int


@dataclass(frozen=True)
class CodeBlockOverlay:
    """Half-open line range ``[line_start, line_end)`` of one code block."""

    line_start: int
    line_end: int
    language: str | None = None


@dataclass(frozen=True)
class RenderedMarkdown:
    lines: tuple[Line, ...] = ()
    headings: tuple[HeadingOverlay, ...] = ()
    code_blocks: tuple[CodeBlockOverlay, ...] = ()
    rules: tuple[int, ...] = ()
    has_tables: bool = False

    def plain_lines(self) -> list[str]:
        return [line.plain_text() for line in self.lines]

    def plain_text(self) -> str:
        return "\n".join(self.plain_lines())
