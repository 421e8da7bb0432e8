"""Composable text styles for rendered markdown.

A ``Style`` holds optional foreground/background colors plus a modifier set.
Styles compose attribute by attribute with the most recently applied value
winning, and ``StyleStack`` tracks the nesting of styled constructs.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

BOLD = "bold"
ITALIC = "italic"
UNDERLINE = "underline"
DIM = "dim"
STRIKETHROUGH = "strikethrough"


@dataclass(frozen=True)
class Color:
    """A named 16-color terminal color or a 24-bit RGB triple."""

    name: str = ""
    rgb: tuple[int, int, int] | None = None

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> Color:
        return cls(rgb=(r, g, b))


RED = Color("red")
YELLOW = Color("yellow")
MAGENTA = Color("magenta")
CYAN = Color("cyan")
GRAY = Color("gray")
DARK_GRAY = Color("dark_gray")
LIGHT_BLUE = Color("light_blue")
LIGHT_MAGENTA = Color("light_magenta")


@dataclass(frozen=True)
class Style:
    fg: Color | None = None
    bg: Color | None = None
    modifiers: frozenset[str] = field(default_factory=frozenset)

    def with_fg(self, color: Color | None) -> Style:
        return replace(self, fg=color)

    def with_bg(self, color: Color | None) -> Style:
        return replace(self, bg=color)

    def add_modifier(self, *modifiers: str) -> Style:
        return replace(self, modifiers=self.modifiers | frozenset(modifiers))

    def patch(self, other: Style) -> Style:
        """Layer ``other`` on top of this style.

        Colors set on ``other`` replace ours; unset colors fall through.
        Modifier sets accumulate.
        """
        return Style(
            fg=other.fg if other.fg is not None else self.fg,
            bg=other.bg if other.bg is not None else self.bg,
            modifiers=self.modifiers | other.modifiers,
        )


@dataclass(frozen=True)
class StyleStack:
    """Immutable stack of styles; the bottom entry is never popped."""

    entries: tuple[Style, ...] = (Style(),)

    @property
    def current(self) -> Style:
        if not self.entries:
            return Style()
        return self.entries[-1]

    def push(self, style: Style) -> StyleStack:
        return StyleStack(self.entries + (style,))

    def push_patch(self, style: Style) -> StyleStack:
        """Push ``style`` layered over the current top entry."""
        return self.push(self.current.patch(style))

    def pop(self) -> StyleStack:
        if len(self.entries) <= 1:
            return self
        return StyleStack(self.entries[:-1])

    def __len__(self) -> int:
        return len(self.entries)
