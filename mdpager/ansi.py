"""Terminal width measurement and SGR encoding utilities.

Width helpers count East Asian wide glyphs as two columns so grids built from
rendered text stay aligned. SGR helpers translate ``Style`` values into escape
sequences for the interactive screen and the static exporter.
"""

from __future__ import annotations

import re
import unicodedata

from .style import (
    BOLD,
    DIM,
    ITALIC,
    STRIKETHROUGH,
    UNDERLINE,
    Color,
    Style,
)

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
ANSI_RESET = "\033[0m"
TAB_STOP = 8

_BASIC_COLOR_CODES: dict[str, tuple[int, int]] = {
    "black": (30, 40),
    "red": (31, 41),
    "green": (32, 42),
    "yellow": (33, 43),
    "blue": (34, 44),
    "magenta": (35, 45),
    "cyan": (36, 46),
    "gray": (37, 47),
    "dark_gray": (90, 100),
    "light_red": (91, 101),
    "light_green": (92, 102),
    "light_yellow": (93, 103),
    "light_blue": (94, 104),
    "light_magenta": (95, 105),
    "light_cyan": (96, 106),
    "white": (97, 107),
}

_MODIFIER_CODES: tuple[tuple[str, str], ...] = (
    (BOLD, "1"),
    (DIM, "2"),
    (ITALIC, "3"),
    (UNDERLINE, "4"),
    (STRIKETHROUGH, "9"),
)


def char_display_width(ch: str, col: int = 0) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies."""
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def split_by_width(text: str, width: int) -> list[str]:
    """Hard-split ``text`` into chunks of at most ``width`` columns.

    A glyph never straddles two chunks; a chunk ends early when the next
    wide glyph would not fit.
    """
    if width <= 0:
        return [text] if text else [""]
    chunks: list[str] = []
    current: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col + w > width and current:
            chunks.append("".join(current))
            current = []
            col = 0
            w = char_display_width(ch, col)
        current.append(ch)
        col += w
    if current or not chunks:
        chunks.append("".join(current))
    return chunks


def clip_to_width(text: str, max_cols: int) -> str:
    """Trim plain text to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""
    return split_by_width(text, max_cols)[0]


def color_code(color: Color, is_fg: bool) -> str:
    if color.rgb is not None:
        r, g, b = color.rgb
        base = 38 if is_fg else 48
        return f"{base};2;{r};{g};{b}"
    codes = _BASIC_COLOR_CODES.get(color.name)
    if codes is None:
        return "39" if is_fg else "49"
    return str(codes[0] if is_fg else codes[1])


def style_sgr(style: Style, default_bg: Color | None = None) -> str:
    """Return the SGR escape selecting ``style`` (empty for the plain style).

    ``default_bg`` is used when the style carries no background of its own.
    """
    codes: list[str] = []
    if style.fg is not None:
        codes.append(color_code(style.fg, True))
    bg = style.bg if style.bg is not None else default_bg
    if bg is not None:
        codes.append(color_code(bg, False))
    for modifier, code in _MODIFIER_CODES:
        if modifier in style.modifiers:
            codes.append(code)
    if not codes:
        return ""
    return f"\033[{';'.join(codes)}m"


def styled(text: str, style: Style, default_bg: Color | None = None) -> str:
    """Wrap ``text`` in the SGR sequence for ``style`` followed by a reset."""
    prefix = style_sgr(style, default_bg)
    if not prefix:
        return text
    return f"{prefix}{text}{ANSI_RESET}"
