"""Recursive-descent DOM walker that emits markdown.

The emitter walks the tree depth-first, asks the classifier for each node's
role and renders block containers into their own OutputBuffer. Nested
structure (list indentation, blockquote prefixes) is applied to a child's
rendered text by its parent, so each block is self-contained markdown.

List item continuation lines are indented by the marker width plus one:
two columns under "-", three under "1." and four under "10.". A nested
list therefore starts where its parent item's text starts, and the indent
grows by one marker width per level rather than by a fixed step. Markers
come from the innermost open list frame, so a nested ordered list numbers
its items independently of its parent.

Two walking modes exist:
    block mode: children of block containers; blocks are separated
        by blank lines and inline runs become paragraphs
    inline mode: children of inline elements, headings and table cells;
        block descendants are flattened into the surrounding line
"""

import logging
import re
from contextlib import contextmanager
from typing import Iterator, List, Optional, Set, Tuple

from src.models.conversion_options import ConversionOptions

from .buffer import LIST_SEPARATOR, UNORDERED, OutputBuffer, list_kind
from .classifier import Classification, NodeRole, classify
from .context import (
    BlockquoteFrame,
    ConversionContext,
    ListFrame,
    PreformattedFrame,
    TableRowFrame,
)
from .dom import DomNode, DomTree, NodeKind
from .errors import DepthExceededError, MalformedTreeError
from .escaper import (
    code_fence,
    code_span,
    collapse_whitespace,
    escape,
    escape_heading_closer,
    escape_table_cell,
    escape_text,
    format_link_destination,
)
from .resolver import LinkResolver

logger = logging.getLogger(__name__)

LANGUAGE_CLASS_PREFIXES = ("language-", "lang-")
MAX_COLSPAN = 1000

_LINE_BREAKS = re.compile(r"[ \t]*\n[ \t]*")
_LANGUAGE_SAFE = re.compile(r"^[^\s`]+$")
_OWN_BLOCK_ROLES = frozenset({
    NodeRole.HEADING,
    NodeRole.BLOCKQUOTE,
    NodeRole.PREFORMATTED,
    NodeRole.TABLE,
    NodeRole.HORIZONTAL_RULE,
})


class MarkdownEmitter:
    """Emits markdown for one DomTree.

    An emitter serves a single conversion: it owns the context stack, the
    resolver bound to the run's base URL and the set of visited nodes.

    Attributes:
        tree: Document being converted
        options: Conversion options
        resolver: Resolver bound to the document base URL
        context: Context frame stack and depth guard
    """

    def __init__(
        self,
        tree: DomTree,
        base_url: Optional[str] = None,
        options: Optional[ConversionOptions] = None
    ):
        self.tree = tree
        self.options = options or ConversionOptions()
        self.resolver = LinkResolver(base_url)
        self.context = ConversionContext(max_depth=self.options.max_depth)
        self._visited: Set[int] = set()
        self._open_markers: List[str] = []

    def emit(self) -> str:
        """Render the whole tree into raw (not yet post-processed) markdown.

        Raises:
            MalformedTreeError: If a node is reached twice during the walk
            DepthExceededError: If nesting exceeds options.max_depth
        """
        buffer = OutputBuffer()
        self._mark_visited(DomTree.ROOT)
        try:
            self._emit_children(DomTree.ROOT, buffer)
        except RecursionError as e:
            raise DepthExceededError(self.context.depth, self.options.max_depth) from e
        return buffer.render()

    # ------------------------------------------------------------------
    # Traversal bookkeeping
    # ------------------------------------------------------------------

    def _mark_visited(self, index: int) -> None:
        if index in self._visited:
            raise MalformedTreeError(index, "node visited twice during conversion")
        self._visited.add(index)

    @contextmanager
    def _visit(self, index: int) -> Iterator[None]:
        self._mark_visited(index)
        with self.context.descend():
            yield

    # ------------------------------------------------------------------
    # Block mode
    # ------------------------------------------------------------------

    def _emit_children(self, index: int, buffer: OutputBuffer) -> None:
        for child in self.tree.children(index):
            self._emit_node(child, buffer)

    def _emit_node(self, index: int, buffer: OutputBuffer) -> None:
        node = self.tree.node(index)
        info = classify(node)
        role = info.role

        if role is NodeRole.IGNORABLE:
            return
        if role is NodeRole.TEXT:
            self._mark_visited(index)
            buffer.append_inline(escape(node.text, self.context))
            return

        with self._visit(index):
            if role in (NodeRole.TRANSPARENT, NodeRole.DOCUMENT):
                self._emit_children(index, buffer)
            elif info.inline:
                buffer.append_inline(self._render_inline_element(index, node, info))
            elif role is NodeRole.LIST:
                block = self._render_list(index, node, info.ordered)
                kind = list_kind(info.ordered)
                buffer.append_block(block, first_list=kind, last_list=kind)
            elif role is NodeRole.LIST_ITEM:
                # Stray item outside any list
                body, _ = self._render_list_item_body(index)
                block = self._format_list_item(self.options.bullet, body)
                buffer.append_block(block, first_list=UNORDERED, last_list=UNORDERED)
            elif role in _OWN_BLOCK_ROLES:
                buffer.append_block(self._render_block(index, node, info))
            else:
                # Paragraphs, generic containers and table parts found outside a table
                sub = OutputBuffer()
                self._emit_children(index, sub)
                block = sub.render()
                buffer.append_block(block, first_list=sub.first_list, last_list=sub.last_list)

    def _render_block(self, index: int, node: DomNode, info: Classification) -> str:
        role = info.role
        if role is NodeRole.HEADING:
            return self._render_heading(index, info.level)
        if role is NodeRole.BLOCKQUOTE:
            return self._render_blockquote(index)
        if role is NodeRole.PREFORMATTED:
            return self._render_preformatted(index, node)
        if role is NodeRole.TABLE:
            return self._render_table(index)
        return "---"

    def _render_heading(self, index: int, level: int) -> str:
        content = _LINE_BREAKS.sub(" ", self._render_inline_children(index)).strip()
        if not content:
            return ""
        return f"{'#' * level} {escape_heading_closer(content)}"

    def _render_blockquote(self, index: int) -> str:
        with self.context.frame(BlockquoteFrame()):
            sub = OutputBuffer()
            self._emit_children(index, sub)
            body = sub.render()
        if not body:
            return ""
        return "\n".join(f"> {line}" if line else ">" for line in body.split("\n"))

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _list_start(self, index: int, node: DomNode) -> int:
        hint = node.get_attr("start")
        if hint is None:
            for child in self.tree.children(index):
                child_node = self.tree.node(child)
                if classify(child_node).role is NodeRole.LIST_ITEM:
                    hint = child_node.get_attr("value")
                    break
        try:
            start = int((hint or "").strip())
        except ValueError:
            return 1
        return start if start >= 0 else 1

    def _next_marker(self) -> str:
        """Marker for the next item of the innermost open list."""
        frame = self.context.current_list
        if frame is None or not frame.ordered:
            return self.options.bullet
        marker = f"{frame.counter}."
        frame.counter += 1
        return marker

    def _render_list(self, index: int, node: DomNode, ordered: bool) -> str:
        start = self._list_start(index, node) if ordered else 1
        # (marker, body, kind of the nested list the body ends inside)
        items: List[Tuple[str, str, Optional[str]]] = []

        with self.context.frame(ListFrame(ordered=ordered, counter=start)):
            for child in self.tree.children(index):
                child_node = self.tree.node(child)
                info = classify(child_node)
                role = info.role

                if role is NodeRole.IGNORABLE:
                    continue
                if role is NodeRole.TEXT and not child_node.text.strip():
                    self._mark_visited(child)
                    continue

                if role is NodeRole.LIST and items:
                    # <ul><li>a</li><ul>...</ul></ul>: belongs to the previous item
                    with self._visit(child):
                        nested = self._render_list(child, child_node, info.ordered)
                    if nested:
                        marker, body, last_list = items[-1]
                        kind = list_kind(info.ordered)
                        if last_list == kind:
                            body = f"{body}\n{LIST_SEPARATOR}\n{nested}"
                        elif body:
                            body = f"{body}\n{nested}"
                        else:
                            body = nested
                        items[-1] = (marker, body, kind)
                    continue

                marker = self._next_marker()
                if role is NodeRole.LIST_ITEM:
                    with self._visit(child):
                        body, last_list = self._render_list_item_body(child)
                else:
                    # Stray content directly inside the list becomes an item
                    sub = OutputBuffer(tight_lists=True)
                    self._emit_node(child, sub)
                    body, last_list = sub.render(), sub.last_list
                items.append((marker, body, last_list))

        logger.debug(
            f"Rendered {'ordered' if ordered else 'unordered'} list with "
            f"{len(items)} items at list depth {self.context.list_depth + 1}"
        )
        return "\n".join(self._format_list_item(marker, body) for marker, body, _ in items)

    def _render_list_item_body(self, index: int) -> Tuple[str, Optional[str]]:
        sub = OutputBuffer(tight_lists=True)
        self._emit_children(index, sub)
        return sub.render(), sub.last_list

    @staticmethod
    def _format_list_item(marker: str, body: str) -> str:
        """Prefix body with marker and align continuation lines under it."""
        if not body:
            return marker
        indent = " " * (len(marker) + 1)
        first, *rest = body.split("\n")
        lines = [f"{marker} {first}"]
        lines.extend(f"{indent}{line}" if line else "" for line in rest)
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Preformatted code
    # ------------------------------------------------------------------

    def _code_language(self, index: int, node: DomNode) -> Optional[str]:
        candidates = [node]
        for child in self.tree.children(index):
            child_node = self.tree.node(child)
            if child_node.kind is NodeKind.ELEMENT and child_node.tag == "code":
                candidates.append(child_node)
                break
        for candidate in candidates:
            for token in (candidate.get_attr("class") or "").split():
                for prefix in LANGUAGE_CLASS_PREFIXES:
                    language = token[len(prefix):]
                    if token.startswith(prefix) and _LANGUAGE_SAFE.match(language):
                        return language
        return None

    def _raw_text(self, index: int) -> str:
        """Concatenate the text of a subtree without recursion.

        Line breaks become newlines and ignorable subtrees are skipped.
        """
        pieces = []
        stack = list(reversed(self.tree.children(index)))
        while stack:
            child = stack.pop()
            node = self.tree.node(child)
            info = classify(node)
            if info.role is NodeRole.IGNORABLE:
                continue
            self._mark_visited(child)
            if node.kind is NodeKind.TEXT:
                pieces.append(node.text)
            elif info.role is NodeRole.LINE_BREAK:
                pieces.append("\n")
            else:
                stack.extend(reversed(self.tree.children(child)))
        return "".join(pieces)

    def _render_preformatted(self, index: int, node: DomNode) -> str:
        language = self._code_language(index, node)
        with self.context.frame(PreformattedFrame()):
            content = escape(self._raw_text(index), self.context)
        if content.endswith("\n"):
            content = content[:-1]
        fence = code_fence(content)
        body = f"{content}\n" if content else ""
        return f"{fence}{language or ''}\n{body}{fence}"

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _render_table(self, index: int) -> str:
        caption = ""
        rows: List[List[str]] = []

        for child in self.tree.children(index):
            child_node = self.tree.node(child)
            role = classify(child_node).role
            if role is NodeRole.TABLE_ROW:
                with self._visit(child):
                    rows.append(self._render_table_row(child))
            elif role is NodeRole.TABLE_SECTION:
                with self._visit(child):
                    for grandchild in self.tree.children(child):
                        if classify(self.tree.node(grandchild)).role is NodeRole.TABLE_ROW:
                            with self._visit(grandchild):
                                rows.append(self._render_table_row(grandchild))
            elif role is NodeRole.TABLE_CAPTION:
                with self._visit(child):
                    caption = _LINE_BREAKS.sub(" ", self._render_inline_children(child)).strip()

        width = max((len(row) for row in rows), default=0)
        if not width:
            return caption

        padded = [row + [""] * (width - len(row)) for row in rows]
        lines = [_format_row(padded[0]), _format_row(["---"] * width)]
        lines.extend(_format_row(row) for row in padded[1:])
        table = "\n".join(lines)
        return f"{caption}\n\n{table}" if caption else table

    def _render_table_row(self, index: int) -> List[str]:
        cells: List[str] = []
        with self.context.frame(TableRowFrame()):
            for child in self.tree.children(index):
                child_node = self.tree.node(child)
                if classify(child_node).role is not NodeRole.TABLE_CELL:
                    continue
                with self._visit(child):
                    content = self._render_inline_children(child)
                content = escape_table_cell(_LINE_BREAKS.sub(" ", content).strip())
                colspan = _colspan(child_node)
                cells.append(content)
                cells.extend([""] * (colspan - 1))
        return cells

    # ------------------------------------------------------------------
    # Inline mode
    # ------------------------------------------------------------------

    def _render_inline_children(self, index: int) -> str:
        sink = OutputBuffer(nested=True)
        for child in self.tree.children(index):
            self._emit_inline(child, sink)
        return sink.inline_text()

    def _emit_inline(self, index: int, sink: OutputBuffer) -> None:
        node = self.tree.node(index)
        info = classify(node)
        role = info.role

        if role is NodeRole.IGNORABLE:
            return
        if role is NodeRole.TEXT:
            self._mark_visited(index)
            sink.append_inline(escape(node.text, self.context))
            return

        with self._visit(index):
            if role in (NodeRole.TRANSPARENT, NodeRole.DOCUMENT):
                for child in self.tree.children(index):
                    self._emit_inline(child, sink)
            elif info.inline:
                sink.append_inline(self._render_inline_element(index, node, info))
            elif role is NodeRole.PREFORMATTED:
                content = collapse_whitespace(self._raw_text(index))
                if content.strip():
                    sink.append_inline(f" {code_span(content)} ")
            elif role is NodeRole.HORIZONTAL_RULE:
                sink.append_inline(" ")
            else:
                # Block content inside inline flow is flattened onto the line
                sink.append_inline(" ")
                for child in self.tree.children(index):
                    self._emit_inline(child, sink)
                sink.append_inline(" ")

    def _render_inline_element(self, index: int, node: DomNode, info: Classification) -> str:
        role = info.role
        if role is NodeRole.LINE_BREAK:
            return "<br>" if self.context.in_table_row else "\n"
        if role is NodeRole.IMAGE:
            return self._render_image(node)
        if role is NodeRole.INLINE_CODE:
            content = collapse_whitespace(self._raw_text(index))
            if not content.strip():
                return " " if content else ""
            return code_span(content)
        if role is NodeRole.ANCHOR:
            return self._render_anchor(index, node)
        return self._render_emphasis(index, info.marker)

    def _render_emphasis(self, index: int, marker: str) -> str:
        if marker in self._open_markers:
            return self._render_inline_children(index)
        self._open_markers.append(marker)
        try:
            content = self._render_inline_children(index)
        finally:
            self._open_markers.pop()
        return _wrap(content, marker)

    def _render_anchor(self, index: int, node: DomNode) -> str:
        label = self._render_inline_children(index)
        href = (node.get_attr("href") or "").strip()
        if not href or not self.options.include_links:
            return label

        url = self.resolver.resolve(href).url
        text = _LINE_BREAKS.sub(" ", label).strip()
        if not text:
            text = escape_text(url)
        leading, trailing = _edge_whitespace(label)
        destination = format_link_destination(url, node.get_attr("title"))
        return f"{leading}[{text}]({destination}){trailing}"

    def _render_image(self, node: DomNode) -> str:
        src = (node.get_attr("src") or "").strip()
        if not src or not self.options.include_images:
            return ""
        url = self.resolver.resolve(src).url
        alt = escape_text(collapse_whitespace(node.get_attr("alt") or "").strip())
        return f"![{alt}]({format_link_destination(url, node.get_attr('title'))})"


def _edge_whitespace(text: str) -> Tuple[str, str]:
    stripped = text.strip()
    if not stripped:
        return text, ""
    start = text.index(stripped)
    return text[:start], text[start + len(stripped):]


def _wrap(content: str, marker: str) -> str:
    """Wrap content in marker, keeping edge whitespace outside it."""
    leading, trailing = _edge_whitespace(content)
    core = content.strip()
    if not core:
        return content
    return f"{leading}{marker}{core}{marker}{trailing}"


def _colspan(node: DomNode) -> int:
    value = (node.get_attr("colspan") or "").strip()
    if not value.isdigit():
        return 1
    return max(1, min(MAX_COLSPAN, int(value)))


def _format_row(cells: List[str]) -> str:
    return "| " + " | ".join(cells) + " |"
