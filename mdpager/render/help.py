"""Help modal content and rendering.

Rendering helpers here are presentation-only and side-effect free: they
return escape-sequence strings for the caller to write.
"""

from __future__ import annotations

from ..ansi import clip_to_width, display_width
from ..ui_theme import UITheme

HELP_TITLE = "Help (? / Esc to close)"

# (key, description) rows grouped under section headings.
HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Navigation",
        (
            ("Space / n", "page down"),
            ("p", "page up"),
            ("j / k or arrow keys", "line scroll"),
            ("PgUp / PgDn", "page scroll"),
            ("g or Home", "top  |  G or End: bottom"),
            ("r", "reload file  |  q or Ctrl+C: quit"),
            ("t", "cycle color theme (remembered)"),
            ("?", "toggle this help overlay"),
        ),
    ),
    (
        "Heading Styles",
        (
            ("", "H1/H2 headings use tinted bands for major sections."),
            ("", "H3-H6 darken progressively to show nested hierarchy."),
            ("", "Highlights span the full width behind the text."),
        ),
    ),
    (
        "Tips",
        (
            ("", "Edit in another window, press r to refresh instantly."),
            ("", "Use Space/PgDn to skim; g/G jump to top/bottom."),
            ("", "Arrow keys still work for fine-grained scrolling."),
        ),
    ),
)

STATUS_HINTS = "Space or n: page ↓  p: page ↑  j/k: line  g/G: top/end  r: reload  q: quit"


def help_lines(theme: UITheme, inner_width: int) -> list[str]:
    """Return styled help body lines clipped to ``inner_width`` columns."""
    lines: list[str] = []
    for section_idx, (heading, rows) in enumerate(HELP_SECTIONS):
        if section_idx:
            lines.append("")
        lines.append(f"{theme.help_heading}{clip_to_width(heading, inner_width)}{theme.reset}")
        for key, description in rows:
            if key:
                plain = f"  • {key}: {description}"
                if display_width(plain) <= inner_width:
                    lines.append(f"  • {theme.help_key}{key}{theme.reset}: {description}")
                else:
                    lines.append(clip_to_width(plain, inner_width))
            else:
                lines.append(clip_to_width(f"  • {description}", inner_width))
    return lines


def render_help_modal(width: int, height: int, theme: UITheme) -> str:
    """Return escape sequences drawing the centered help modal."""
    if width < 4 or height < 4:
        return ""
    out: list[str] = []
    modal_w = min(width, max(40, (width * 4) // 5))
    modal_h = min(height, max(8, (height * 4) // 5))
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)
    inner_w = max(1, modal_w - 2)
    inner_h = max(1, modal_h - 2)

    out.append(f"\033[{y + 1};{x + 1}H{theme.help_modal_border}╭")
    out.append("─" * inner_w)
    out.append(f"╮{theme.reset}")
    for i in range(inner_h):
        out.append(f"\033[{y + 2 + i};{x + 1}H{theme.help_modal_border}│{theme.reset}")
        out.append(" " * inner_w)
        out.append(f"{theme.help_modal_border}│{theme.reset}")
    out.append(f"\033[{y + modal_h};{x + 1}H{theme.help_modal_border}╰")
    out.append("─" * inner_w)
    out.append(f"╯{theme.reset}")

    title = clip_to_width(HELP_TITLE, max(0, inner_w - 2))
    title_x = x + 1 + max(1, (inner_w - display_width(title)) // 2)
    out.append(f"\033[{y + 1};{title_x + 1}H{theme.help_modal_title}{title}{theme.reset}")

    body = help_lines(theme, max(1, inner_w - 2))
    for i, line in enumerate(body[:inner_h]):
        out.append(f"\033[{y + 2 + i};{x + 3}H{line}{theme.reset}")
    return "".join(out)
