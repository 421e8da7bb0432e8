"""Viewer bootstrap: load the document, then either dump or run the loop."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path

from ..render import content_rows
from ..render.dump import render_dump
from ..ui_theme import UITheme
from .loop import run_main_loop
from .state import ViewerState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def run_viewer(path: Path, theme: UITheme, max_table_width: int | None = None) -> None:
    """Open ``path`` in the interactive viewer.

    When stdin or stdout is not a terminal the document is printed once as
    static output instead.
    """
    term = shutil.get_terminal_size((80, 24))
    state = ViewerState.load(
        path,
        viewport_width=term.columns,
        viewport_height=content_rows(term.lines),
        max_table_width=max_table_width,
    )
    logger.info("opened %s (%d lines)", path, len(state.rendered.lines))

    if not os.isatty(sys.stdin.fileno()) or not os.isatty(sys.stdout.fileno()):
        sys.stdout.write(render_dump(state.rendered, state.viewport_width, color=theme.document_color))
        return

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    run_main_loop(state, terminal, stdin_fd, theme)
