"""markdown-it-py token stream to compiler events.

markdown-it produces a flat list of block tokens whose inline content lives
in ``token.children``. This adapter walks both levels and yields the closed
event set from ``events.py``. Unknown tokens fall back to their literal
content so nothing the parser reports is silently dropped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from . import events as ev

_ALIGN_RE = re.compile(r"text-align:\s*(left|center|right)")
_TASK_CHECKBOX_CLASS = "task-list-item-checkbox"
_TASK_CHECKED_ATTR = 'checked="checked"'

_BLOCK_TAGS: dict[str, str] = {
    "blockquote": ev.BLOCKQUOTE,
    "list_item": ev.ITEM,
    "thead": ev.TABLE_HEAD,
    "tbody": ev.TABLE_BODY,
    "tr": ev.TABLE_ROW,
    "th": ev.TABLE_CELL,
    "td": ev.TABLE_CELL,
}

_INLINE_TAGS: dict[str, str] = {
    "em": ev.EMPHASIS,
    "strong": ev.STRONG,
    "s": ev.STRIKETHROUGH,
}

logger = logging.getLogger(__name__)

# Block nesting depth handed to markdown-it (its own default is 20). Each list
# level costs two, each blockquote level one.
MAX_NESTING = 100

# Containers whose children markdown-it tokenizes in a nested pass.
_NESTED_CONTAINERS = frozenset({"list_item_open", "blockquote_open", "footnote_open"})

_PARSER: MarkdownIt | None = None


def build_parser() -> MarkdownIt:
    """Create a CommonMark parser with GFM tables, strikethrough, tasks and footnotes."""
    return (
        MarkdownIt("commonmark", {"maxNesting": MAX_NESTING})
        .enable("table")
        .enable("strikethrough")
        .use(tasklists_plugin)
        .use(footnote_plugin)
    )


def _shared_parser() -> MarkdownIt:
    global _PARSER
    if _PARSER is None:
        _PARSER = build_parser()
    return _PARSER


def parse_events(source: str, parser: MarkdownIt | None = None) -> list[ev.Event]:
    """Parse ``source`` and return the full event stream."""
    md = parser or _shared_parser()
    tokens = md.parse(source)
    lines = source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    max_nesting = md.options.get("maxNesting", MAX_NESTING)
    return list(iter_block_events(tokens, lines, max_nesting))


def iter_literal_paragraphs(lines: Sequence[str]) -> Iterator[ev.Event]:
    """Emit raw source lines as plain paragraphs, one per run of non-blank lines."""
    tag = ev.Tag(ev.PARAGRAPH)
    in_paragraph = False
    for line in lines:
        text = line.strip()
        if not text:
            if in_paragraph:
                yield ev.End(tag)
                in_paragraph = False
            continue
        if in_paragraph:
            yield ev.SoftBreak()
        else:
            yield ev.Start(tag)
            in_paragraph = True
        yield ev.Text(text)
    if in_paragraph:
        yield ev.End(tag)


def _cell_alignment(token: Token) -> str:
    style = token.attrGet("style")
    if not isinstance(style, str):
        return ev.ALIGN_NONE
    match = _ALIGN_RE.search(style)
    return match.group(1) if match else ev.ALIGN_NONE


def table_alignments(tokens: Sequence[Token], table_open_idx: int) -> tuple[str, ...]:
    """Collect column alignments from the first row after ``table_open``."""
    alignments: list[str] = []
    for token in tokens[table_open_idx + 1 :]:
        if token.type in {"th_open", "td_open"}:
            alignments.append(_cell_alignment(token))
        elif token.type in {"tr_close", "table_close"}:
            break
    return tuple(alignments)


def _list_start(token: Token) -> int:
    raw = token.attrGet("start")
    if raw is None:
        return 1
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 1


def _footnote_label(token: Token) -> str:
    meta = token.meta or {}
    label = meta.get("label")
    if isinstance(label, str) and label:
        return label
    footnote_id = meta.get("id")
    if isinstance(footnote_id, int):
        return str(footnote_id + 1)
    return "?"


def iter_block_events(
    tokens: Sequence[Token],
    lines: Sequence[str] = (),
    max_nesting: int = MAX_NESTING,
) -> Iterator[ev.Event]:
    """Walk block tokens in order.

    markdown-it silently skips the children of a container opened at the
    nesting limit. Those source lines are re-emitted as literal paragraphs
    inside the container so later content is never lost.
    """
    for idx, token in enumerate(tokens):
        kind = token.type
        if kind == "inline":
            yield from iter_inline_events(token.children or [])
        elif kind in {"paragraph_open", "paragraph_close"}:
            # Tight-list paragraphs are hidden and render inline with the marker.
            if token.hidden:
                continue
            tag = ev.Tag(ev.PARAGRAPH)
            yield ev.Start(tag) if kind.endswith("_open") else ev.End(tag)
        elif kind in {"heading_open", "heading_close"}:
            tag = ev.Tag(ev.HEADING, level=int(token.tag[1:]) if token.tag[1:].isdigit() else 1)
            yield ev.Start(tag) if kind.endswith("_open") else ev.End(tag)
        elif kind == "bullet_list_open":
            yield ev.Start(ev.Tag(ev.LIST))
        elif kind == "bullet_list_close":
            yield ev.End(ev.Tag(ev.LIST))
        elif kind == "ordered_list_open":
            yield ev.Start(ev.Tag(ev.LIST, start=_list_start(token)))
        elif kind == "ordered_list_close":
            yield ev.End(ev.Tag(ev.LIST, start=1))
        elif kind in {"fence", "code_block"}:
            tag = ev.Tag(ev.CODE_BLOCK, fenced=kind == "fence", info=token.info or "")
            yield ev.Start(tag)
            if token.content:
                yield ev.Text(token.content)
            yield ev.End(tag)
        elif kind == "hr":
            yield ev.Rule()
        elif kind == "html_block":
            tag = ev.Tag(ev.HTML_BLOCK)
            yield ev.Start(tag)
            for line_idx, line in enumerate(token.content.rstrip("\n").split("\n")):
                if line_idx:
                    yield ev.SoftBreak()
                yield ev.Html(line)
            yield ev.End(tag)
        elif kind == "table_open":
            yield ev.Start(ev.Tag(ev.TABLE, alignments=table_alignments(tokens, idx)))
        elif kind == "table_close":
            yield ev.End(ev.Tag(ev.TABLE))
        elif kind == "footnote_open":
            yield ev.Start(ev.Tag(ev.FOOTNOTE_DEFINITION, label=_footnote_label(token)))
        elif kind == "footnote_close":
            yield ev.End(ev.Tag(ev.FOOTNOTE_DEFINITION))
        elif kind in {"footnote_block_open", "footnote_block_close"}:
            continue
        elif kind.endswith("_open") and kind[: -len("_open")] in _BLOCK_TAGS:
            yield ev.Start(ev.Tag(_BLOCK_TAGS[kind[: -len("_open")]]))
        elif kind.endswith("_close") and kind[: -len("_close")] in _BLOCK_TAGS:
            yield ev.End(ev.Tag(_BLOCK_TAGS[kind[: -len("_close")]]))
        elif token.content:
            yield ev.Text(token.content)

        if kind in _NESTED_CONTAINERS and token.level >= max_nesting - 1 and token.map:
            start, end = token.map
            logger.debug("nesting limit %d reached at line %d", max_nesting, start + 1)
            yield from iter_literal_paragraphs(lines[start:end])


def iter_inline_events(children: Sequence[Token]) -> Iterator[ev.Event]:
    after_task_marker = False
    for token in children:
        kind = token.type
        if kind == "text":
            content = token.content
            if after_task_marker and content.startswith(" "):
                # The marker already ends with a space.
                content = content[1:]
            after_task_marker = False
            if content:
                yield ev.Text(content)
        elif kind == "softbreak":
            yield ev.SoftBreak()
        elif kind == "hardbreak":
            yield ev.HardBreak()
        elif kind == "code_inline":
            yield ev.Code(token.content)
        elif kind == "html_inline":
            if _TASK_CHECKBOX_CLASS in token.content:
                yield ev.TaskMarker(_TASK_CHECKED_ATTR in token.content)
                after_task_marker = True
            else:
                yield ev.Html(token.content)
        elif kind == "link_open":
            href = token.attrGet("href")
            title = token.attrGet("title")
            yield ev.Start(ev.Tag(ev.LINK, dest=str(href or ""), title=str(title or "")))
        elif kind == "link_close":
            yield ev.End(ev.Tag(ev.LINK))
        elif kind == "image":
            src = token.attrGet("src")
            title = token.attrGet("title")
            tag = ev.Tag(ev.IMAGE, dest=str(src or ""), title=str(title or ""))
            yield ev.Start(tag)
            yield from iter_inline_events(token.children or [])
            yield ev.End(tag)
        elif kind == "footnote_ref":
            yield ev.FootnoteRef(_footnote_label(token))
        elif kind == "footnote_anchor":
            continue
        elif kind.endswith("_open") and kind[: -len("_open")] in _INLINE_TAGS:
            yield ev.Start(ev.Tag(_INLINE_TAGS[kind[: -len("_open")]]))
        elif kind.endswith("_close") and kind[: -len("_close")] in _INLINE_TAGS:
            yield ev.End(ev.Tag(_INLINE_TAGS[kind[: -len("_close")]]))
        elif token.content:
            yield ev.Text(token.content)
