"""Tag to semantic role classification.

Every node the emitter meets is mapped to one role from a closed set. The
tag table is built once at import time and is read-only afterwards, so it
can be shared by concurrent conversions without locking. Supporting a new
tag is a one-line edit to TAG_TABLE.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .dom import DomNode, NodeKind


class NodeRole(Enum):
    """Semantic role of a node in the markdown output."""
    DOCUMENT = "document"
    TEXT = "text"
    IGNORABLE = "ignorable"
    TRANSPARENT = "transparent"
    BLOCK = "block"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    INLINE_CODE = "inline_code"
    ANCHOR = "anchor"
    IMAGE = "image"
    LINE_BREAK = "line_break"
    HORIZONTAL_RULE = "horizontal_rule"
    LIST = "list"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    PREFORMATTED = "preformatted"
    TABLE = "table"
    TABLE_CAPTION = "table_caption"
    TABLE_SECTION = "table_section"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"


@dataclass(frozen=True)
class Classification:
    """Role of a node plus the per-tag parameters the emitter needs.

    Attributes:
        role: Semantic role
        level: Heading level 1-6 (headings only)
        ordered: True for ordered lists
        header: True for header cells (th)
        void: True for elements that never have children
        inline: True for inline-flow roles
        marker: Wrapping delimiter for emphasis and strong
    """
    role: NodeRole
    level: int = 0
    ordered: bool = False
    header: bool = False
    void: bool = False
    inline: bool = False
    marker: str = ""


TEXT = Classification(NodeRole.TEXT, inline=True)
IGNORABLE = Classification(NodeRole.IGNORABLE)
TRANSPARENT = Classification(NodeRole.TRANSPARENT, inline=True)
DOCUMENT = Classification(NodeRole.DOCUMENT)

_BLOCK = Classification(NodeRole.BLOCK)
_EMPHASIS = Classification(NodeRole.EMPHASIS, inline=True, marker="*")
_STRONG = Classification(NodeRole.STRONG, inline=True, marker="**")
_CODE = Classification(NodeRole.INLINE_CODE, inline=True)
_UNORDERED = Classification(NodeRole.LIST, ordered=False)
_SECTION = Classification(NodeRole.TABLE_SECTION)
_VOID_TRANSPARENT = Classification(NodeRole.TRANSPARENT, inline=True, void=True)

IGNORED_TAGS = frozenset({
    "script", "style", "noscript", "template",
    "head", "title", "svg", "iframe", "canvas",
})

BLOCK_CONTAINER_TAGS = frozenset({
    "div", "section", "article", "main", "header", "footer", "nav", "aside",
    "figure", "figcaption", "address", "details", "summary", "fieldset",
    "form", "dl", "dt", "dd", "center", "hgroup",
})

_table = {}
_table.update({tag: IGNORABLE for tag in IGNORED_TAGS})
_table.update({tag: _BLOCK for tag in BLOCK_CONTAINER_TAGS})
_table.update({
    f"h{level}": Classification(NodeRole.HEADING, level=level)
    for level in range(1, 7)
})
_table.update({tag: _EMPHASIS for tag in ("em", "i", "cite", "dfn")})
_table.update({tag: _STRONG for tag in ("strong", "b")})
_table.update({tag: _CODE for tag in ("code", "kbd", "samp", "tt")})
_table.update({tag: _SECTION for tag in ("thead", "tbody", "tfoot")})
_table.update({
    tag: _VOID_TRANSPARENT
    for tag in ("input", "wbr", "meta", "link", "area", "col", "source",
                "track", "embed", "param", "base")
})
_table.update({
    "p": Classification(NodeRole.PARAGRAPH),
    "a": Classification(NodeRole.ANCHOR, inline=True),
    "img": Classification(NodeRole.IMAGE, inline=True, void=True),
    "br": Classification(NodeRole.LINE_BREAK, inline=True, void=True),
    "hr": Classification(NodeRole.HORIZONTAL_RULE, void=True),
    "ul": _UNORDERED,
    "menu": _UNORDERED,
    "ol": Classification(NodeRole.LIST, ordered=True),
    "li": Classification(NodeRole.LIST_ITEM),
    "blockquote": Classification(NodeRole.BLOCKQUOTE),
    "pre": Classification(NodeRole.PREFORMATTED),
    "table": Classification(NodeRole.TABLE),
    "caption": Classification(NodeRole.TABLE_CAPTION),
    "tr": Classification(NodeRole.TABLE_ROW),
    "td": Classification(NodeRole.TABLE_CELL),
    "th": Classification(NodeRole.TABLE_CELL, header=True),
})

TAG_TABLE: Mapping[str, Classification] = MappingProxyType(_table)
del _table


def classify_tag(tag: str) -> Classification:
    """Classify an element by tag name; unknown tags are transparent."""
    return TAG_TABLE.get(tag.lower(), TRANSPARENT)


def classify(node: DomNode) -> Classification:
    """Classify a DOM node.

    Args:
        node: Node to classify

    Returns:
        Classification for the node
    """
    if node.kind is NodeKind.TEXT:
        return TEXT
    if node.kind is NodeKind.ELEMENT:
        return classify_tag(node.tag or "")
    if node.kind is NodeKind.DOCUMENT:
        return DOCUMENT
    return IGNORABLE
