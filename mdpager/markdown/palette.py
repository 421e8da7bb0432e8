"""Fixed colors and glyphs used by the markdown layout."""

from __future__ import annotations

from ..style import (
    BOLD,
    CYAN,
    DARK_GRAY,
    DIM,
    GRAY,
    ITALIC,
    LIGHT_BLUE,
    LIGHT_MAGENTA,
    MAGENTA,
    UNDERLINE,
    YELLOW,
    Color,
    Style,
)

CODE_BLOCK_FG = Color.from_rgb(225, 228, 235)
CODE_BLOCK_BG = Color.from_rgb(12, 16, 26)
CODE_BLOCK_BORDER_FG = Color.from_rgb(150, 160, 175)

CODE_BLOCK_STYLE = Style(fg=CODE_BLOCK_FG, bg=CODE_BLOCK_BG)
CODE_BLOCK_BORDER_STYLE = Style(fg=CODE_BLOCK_BORDER_FG, bg=CODE_BLOCK_BG)
CODE_INDENT = "    "

INLINE_CODE_STYLE = Style(fg=YELLOW, modifiers=frozenset({DIM}))
LINK_STYLE = Style(fg=CYAN, modifiers=frozenset({UNDERLINE}))
BLOCKQUOTE_STYLE = Style(fg=GRAY, modifiers=frozenset({ITALIC}))
QUOTE_MARKER = "> "
QUOTE_MARKER_STYLE = Style(fg=DARK_GRAY)
LIST_MARKER_STYLE = Style(fg=GRAY)
BULLET_GLYPHS: tuple[str, ...] = ("•", "◦", "▪", "‣")

RULE_GLYPH = "─"
RULE_STYLE = Style(fg=DARK_GRAY)

TABLE_BORDER_STYLE = Style(fg=DARK_GRAY)
TABLE_HEADER_STYLE = Style(modifiers=frozenset({BOLD}))
TABLE_CELL_STYLE = Style()

# (background, foreground) per heading level, darkening from H1 to H6.
_HEADING_BLOCK_COLORS: dict[int, tuple[Color, Color]] = {
    1: (Color.from_rgb(48, 52, 70), Color.from_rgb(235, 235, 245)),
    2: (Color.from_rgb(40, 44, 60), Color.from_rgb(225, 225, 235)),
    3: (Color.from_rgb(35, 39, 54), Color.from_rgb(210, 210, 225)),
    4: (Color.from_rgb(30, 34, 48), Color.from_rgb(200, 200, 215)),
    5: (Color.from_rgb(28, 32, 44), Color.from_rgb(190, 190, 205)),
    6: (Color.from_rgb(24, 28, 38), Color.from_rgb(180, 180, 195)),
}

_HEADING_TEXT_STYLES: dict[int, Style] = {
    1: Style(fg=CYAN, modifiers=frozenset({BOLD})),
    2: Style(fg=LIGHT_BLUE, modifiers=frozenset({BOLD})),
    3: Style(fg=LIGHT_MAGENTA, modifiers=frozenset({BOLD})),
    4: Style(fg=MAGENTA),
    5: Style(fg=MAGENTA, modifiers=frozenset({ITALIC})),
    6: Style(fg=GRAY, modifiers=frozenset({ITALIC})),
}


def clamp_heading_level(level: int) -> int:
    return max(1, min(6, level))


def heading_block_colors(level: int) -> tuple[Color, Color]:
    """Return the ``(background, foreground)`` band colors for ``level``."""
    return _HEADING_BLOCK_COLORS[clamp_heading_level(level)]


def heading_text_style(level: int) -> Style:
    return _HEADING_TEXT_STYLES[clamp_heading_level(level)]


def bullet_glyph(depth: int) -> str:
    """Return the unordered-list bullet for a zero-based nesting depth."""
    return BULLET_GLYPHS[max(0, depth) % len(BULLET_GLYPHS)]
