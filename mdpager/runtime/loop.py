"""Main interactive event loop and key dispatch.

Each iteration syncs viewport geometry with the terminal, redraws when the
state is dirty, then waits briefly for one key token.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable

from ..render import content_rows, render_frame
from ..ui_theme import UITheme, next_theme
from .config import save_theme_name
from .keys import read_key
from .state import ViewerState
from .terminal import TerminalController

KEY_POLL_MS = 120
WHEEL_SCROLL_ROWS = 3

QUIT_KEYS = frozenset({"q", "Q", "CTRL_C"})
THEME_KEY = "t"


def _scroll_action(key: str) -> Callable[[ViewerState], None] | None:
    if key in {"j", "DOWN", "ENTER"}:
        return lambda state: state.scroll_down(1)
    if key in {"k", "UP"}:
        return lambda state: state.scroll_up(1)
    if key in {" ", "n", "PAGE_DOWN"}:
        return ViewerState.page_down
    if key in {"p", "PAGE_UP"}:
        return ViewerState.page_up
    if key in {"g", "HOME"}:
        return lambda state: state.scroll_to(0)
    if key in {"G", "END"}:
        return ViewerState.scroll_to_end
    if key.startswith("MOUSE_WHEEL_UP:"):
        return lambda state: state.scroll_up(WHEEL_SCROLL_ROWS)
    if key.startswith("MOUSE_WHEEL_DOWN:"):
        return lambda state: state.scroll_down(WHEEL_SCROLL_ROWS)
    return None


def handle_key(state: ViewerState, key: str) -> bool:
    """Apply ``key`` to ``state``. Returns ``False`` when the viewer should quit."""
    if not key:
        return True
    if key in QUIT_KEYS:
        return False
    if state.show_help:
        if key in {"?", "ESC"}:
            state.toggle_help()
        return True
    if key == "?":
        state.toggle_help()
        return True
    if key in {"r", "R"}:
        state.reload()
        return True
    action = _scroll_action(key)
    if action is not None:
        action(state)
    return True


def cycle_theme(state: ViewerState, theme: UITheme) -> UITheme:
    """Switch to the next chrome theme and remember it for later sessions."""
    if state.show_help:
        return theme
    new_theme = next_theme(theme)
    if new_theme is theme:
        state.set_status("Themes are off with --no-color")
        return theme
    save_theme_name(new_theme.name)
    state.set_status(f"Theme: {new_theme.name}")
    return new_theme


def sync_geometry(state: ViewerState) -> tuple[int, int]:
    """Resize ``state`` to the current terminal and return ``(width, height)``."""
    size = shutil.get_terminal_size((80, 24))
    width = max(1, size.columns)
    height = max(1, size.lines)
    state.resize(width, content_rows(height))
    return width, height


def run_main_loop(
    state: ViewerState,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
) -> None:
    """Run the interactive loop until a quit key arrives."""
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            size = sync_geometry(state)
            if size != last_size:
                state.dirty = True
                last_size = size
            if state.dirty:
                render_frame(state, theme, *size)
                state.dirty = False
            key = read_key(stdin_fd, timeout_ms=KEY_POLL_MS)
            if key == THEME_KEY:
                theme = cycle_theme(state, theme)
                continue
            if not handle_key(state, key):
                break
