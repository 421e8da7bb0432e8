"""UI theme definitions and selection helpers.

Themes are chrome-only ANSI palettes (title bar, status bar, help modal).
Document colors come from the markdown palette; the plain theme additionally
turns document colors off.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    title_path: str
    title_meta: str
    status_hint: str
    status_message: str
    help_heading: str
    help_key: str
    help_modal_title: str
    help_modal_border: str
    document_color: bool = True


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    title_path="\033[36m",
    title_meta="\033[37m",
    status_hint="\033[2;38;5;250m",
    status_message="\033[33m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_modal_title="\033[1;38;5;45m",
    help_modal_border="\033[38;5;45m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    title_path="\033[1;38;5;45m",
    title_meta="\033[38;5;110m",
    status_hint="\033[2;38;5;110m",
    status_message="\033[38;5;215m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_modal_title="\033[1;38;5;39m",
    help_modal_border="\033[38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    title_path="",
    title_meta="",
    status_hint="",
    status_message="",
    help_heading="",
    help_key="",
    help_modal_title="",
    help_modal_border="",
    document_color=False,
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def next_theme(theme: UITheme) -> UITheme:
    """Return the theme after ``theme`` in name order; the plain theme stays put."""
    names = available_theme_names()
    if theme.name not in names:
        return theme
    return _THEMES[names[(names.index(theme.name) + 1) % len(names)]]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "next_theme",
    "normalize_theme_name",
    "resolve_theme",
]
