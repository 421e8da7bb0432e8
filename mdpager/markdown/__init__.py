"""Markdown to styled-document pipeline.

``markdown_to_render`` is the one-call entry point: sanitize, parse with
markdown-it, and compile the resulting event stream.
"""

from __future__ import annotations

from ..document import RenderedMarkdown
from ..source import sanitize_terminal_text
from .compiler import CompileOptions, MarkdownCompiler, compile_events
from .parser import parse_events


def markdown_to_render(markdown: str, options: CompileOptions | None = None) -> RenderedMarkdown:
    """Compile markdown source into a document and its overlays."""
    return compile_events(parse_events(sanitize_terminal_text(markdown)), options)


__all__ = [
    "CompileOptions",
    "MarkdownCompiler",
    "compile_events",
    "markdown_to_render",
    "parse_events",
]
