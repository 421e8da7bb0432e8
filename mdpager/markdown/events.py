"""Markdown event stream consumed by the layout compiler.

The compiler only understands this closed set of events, so any parser that
can produce them (see ``parser.py``) can drive it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

PARAGRAPH = "paragraph"
HEADING = "heading"
BLOCKQUOTE = "blockquote"
LIST = "list"
ITEM = "item"
CODE_BLOCK = "code_block"
HTML_BLOCK = "html_block"
TABLE = "table"
TABLE_HEAD = "table_head"
TABLE_BODY = "table_body"
TABLE_ROW = "table_row"
TABLE_CELL = "table_cell"
EMPHASIS = "emphasis"
STRONG = "strong"
STRIKETHROUGH = "strikethrough"
LINK = "link"
IMAGE = "image"
FOOTNOTE_DEFINITION = "footnote_definition"

INLINE_STYLE_KINDS = frozenset({EMPHASIS, STRONG, STRIKETHROUGH, LINK})

ALIGN_NONE = "none"
ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"


@dataclass(frozen=True)
class Tag:
    """Block or inline construct opened by ``Start`` and closed by ``End``.

    Only the fields relevant to ``kind`` are populated: ``level`` for
    headings, ``start`` for ordered lists (``None`` means unordered),
    ``fenced``/``info`` for code blocks, ``alignments`` for tables,
    ``dest``/``title`` for links and images, ``label`` for footnotes.
    """

    kind: str
    level: int = 0
    start: int | None = None
    fenced: bool = False
    info: str = ""
    alignments: tuple[str, ...] = ()
    dest: str = ""
    title: str = ""
    label: str = ""


@dataclass(frozen=True)
class Start:
    tag: Tag


@dataclass(frozen=True)
class End:
    tag: Tag


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Code:
    text: str


@dataclass(frozen=True)
class Html:
    text: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class FootnoteRef:
    label: str


@dataclass(frozen=True)
class TaskMarker:
    checked: bool


Event = Union[Start, End, Text, Code, Html, SoftBreak, HardBreak, Rule, FootnoteRef, TaskMarker]
