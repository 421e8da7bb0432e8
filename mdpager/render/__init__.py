"""Frame rendering for the interactive viewer.

Composes the title row, the visible document rows, the status row and, when
open, the help modal into one escape-sequence string and writes it at once.
"""

from __future__ import annotations

import os
import sys

from ..ansi import clip_to_width, display_width
from ..ui_theme import UITheme
from .help import STATUS_HINTS, render_help_modal
from .screen import compose_viewport

CHROME_ROWS = 2


def content_rows(term_height: int) -> int:
    """Rows available to the document between title and status bars."""
    return max(0, term_height - CHROME_ROWS)


def build_title_row(path: str, line_count: int, width: int, theme: UITheme) -> str:
    meta = f" ({line_count} lines)"
    path_width = max(0, width - display_width(meta))
    shown_path = clip_to_width(path, path_width)
    shown_meta = clip_to_width(meta, max(0, width - display_width(shown_path)))
    return f"{theme.title_path}{shown_path}{theme.reset}{theme.title_meta}{shown_meta}{theme.reset}"


def build_status_row(message: str | None, width: int, theme: UITheme) -> str:
    if not message:
        return f"{theme.status_hint}{clip_to_width(STATUS_HINTS, width)}{theme.reset}"
    shown_message = clip_to_width(message, width)
    remaining = width - display_width(shown_message) - 2
    if remaining <= 0:
        return f"{theme.status_message}{shown_message}{theme.reset}"
    hints = clip_to_width(STATUS_HINTS, remaining)
    return f"{theme.status_message}{shown_message}{theme.reset}  {theme.status_hint}{hints}{theme.reset}"


def build_frame(state, theme: UITheme, width: int, height: int) -> str:
    """Return the full frame for ``state`` as one string."""
    out: list[str] = ["\033[H\033[J"]
    if width <= 0 or height <= 0:
        return "".join(out)
    out.append(build_title_row(str(state.path), len(state.rendered.lines), width, theme))

    rows = content_rows(height)
    buffer = compose_viewport(state.rendered, state.row_map, state.scroll, rows, width)
    for row in range(buffer.height):
        out.append("\r\n")
        out.append(buffer.encode_row(row, color=theme.document_color))

    if height > 1:
        out.append(f"\033[{height};1H")
        out.append(build_status_row(state.status, width, theme))

    if state.show_help:
        out.append(render_help_modal(width, height, theme))
    return "".join(out)


def render_frame(state, theme: UITheme, width: int, height: int) -> None:
    """Write one composed frame to stdout."""
    frame = build_frame(state, theme, width, height)
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = [
    "CHROME_ROWS",
    "build_frame",
    "build_status_row",
    "build_title_row",
    "content_rows",
    "render_frame",
]
