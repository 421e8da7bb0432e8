"""Static ANSI export of a rendered document.

Flattens every document line (no scrolling, no wrapping) and bakes in the
overlay backgrounds: heading bands and code-block backgrounds are padded to
``width`` columns and rule lines become a full-width rule.
"""

from __future__ import annotations

from ..ansi import ANSI_RESET, display_width, style_sgr, styled
from ..document import RenderedMarkdown
from ..markdown.palette import CODE_BLOCK_BG, RULE_GLYPH, RULE_STYLE, heading_block_colors
from ..style import Color, Style


def _line_backgrounds(rendered: RenderedMarkdown) -> dict[int, Color]:
    backgrounds: dict[int, Color] = {}
    for block in rendered.code_blocks:
        for idx in range(block.line_start, block.line_end):
            backgrounds[idx] = CODE_BLOCK_BG
    for heading in rendered.headings:
        bg, _fg = heading_block_colors(heading.level)
        backgrounds[heading.line] = bg
    return backgrounds


def render_dump(rendered: RenderedMarkdown, width: int, color: bool = True) -> str:
    """Return the whole document as newline-terminated text.

    With ``color`` disabled only glyphs are emitted; rule lines still draw.
    """
    width = max(1, width)
    backgrounds = _line_backgrounds(rendered) if color else {}
    rules = set(rendered.rules)
    out: list[str] = []
    for idx, line in enumerate(rendered.lines):
        if idx in rules:
            glyphs = RULE_GLYPH * width
            out.append(styled(glyphs, RULE_STYLE) if color else glyphs)
            out.append("\n")
            continue
        base_bg = backgrounds.get(idx)
        rendered_width = 0
        for span in line.spans:
            if color:
                prefix = style_sgr(span.style, base_bg)
                out.append(f"{prefix}{span.text}{ANSI_RESET}" if prefix else span.text)
            else:
                out.append(span.text)
            rendered_width += display_width(span.text)
        if base_bg is not None and rendered_width < width:
            filler = Style(bg=base_bg)
            out.append(f"{style_sgr(filler)}{' ' * (width - rendered_width)}{ANSI_RESET}")
        out.append("\n")
    return "".join(out)
