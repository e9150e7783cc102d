"""Arena-backed, read-only document tree consumed by the converter.

Nodes live in a flat list and refer to their parent and children by index,
so a tree handed over by the parser adapter cannot accidentally own itself.
Trees built elsewhere can still be malformed; validate() checks them before
conversion.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .errors import MalformedTreeError


class NodeKind(Enum):
    """Kinds of node the converter understands."""
    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


@dataclass
class DomNode:
    """Single node of a DomTree.

    Attributes:
        kind: Node kind
        tag: Lower-cased tag name (elements only)
        attrs: Attribute values; multi-valued attributes are space-joined
        text: Payload of text and comment nodes
        parent: Index of the parent node (None for the document root)
        children: Ordered child indices
    """
    kind: NodeKind
    tag: Optional[str] = None
    attrs: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)

    def get_attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attrs.get(name, default)


class DomTree:
    """Document tree stored as an index-addressed arena.

    Index 0 is always the document node.

    Example:
        >>> tree = DomTree()
        >>> p = tree.add_element(DomTree.ROOT, "p")
        >>> tree.add_text(p, "Hello")
        2
    """

    ROOT = 0

    def __init__(self):
        self.nodes: List[DomNode] = [DomNode(kind=NodeKind.DOCUMENT)]

    @classmethod
    def from_nodes(cls, nodes: Iterable[DomNode]) -> "DomTree":
        """Wrap a caller-built arena without checking it.

        Call validate() before trusting the result.
        """
        tree = cls.__new__(cls)
        tree.nodes = list(nodes)
        return tree

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, index: int) -> DomNode:
        if not 0 <= index < len(self.nodes):
            raise MalformedTreeError(index, "node index out of range")
        return self.nodes[index]

    def children(self, index: int) -> List[int]:
        return self.node(index).children

    def add_element(
        self,
        parent: int,
        tag: str,
        attrs: Optional[Dict[str, str]] = None
    ) -> int:
        return self._append(parent, DomNode(
            kind=NodeKind.ELEMENT,
            tag=tag.lower(),
            attrs=dict(attrs or {}),
        ))

    def add_text(self, parent: int, text: str) -> int:
        return self._append(parent, DomNode(kind=NodeKind.TEXT, text=text))

    def add_comment(self, parent: int, text: str) -> int:
        return self._append(parent, DomNode(kind=NodeKind.COMMENT, text=text))

    def _append(self, parent: int, node: DomNode) -> int:
        parent_node = self.node(parent)
        if parent_node.kind not in (NodeKind.DOCUMENT, NodeKind.ELEMENT):
            raise MalformedTreeError(
                parent, f"{parent_node.kind.value} nodes cannot have children"
            )
        node.parent = parent
        self.nodes.append(node)
        index = len(self.nodes) - 1
        parent_node.children.append(index)
        return index

    def validate(self) -> None:
        """Verify the arena forms a single rooted, acyclic tree.

        Walks iteratively from the root so arbitrarily deep trees are checked
        without recursion.

        Raises:
            MalformedTreeError: If the root is not a parent-less document,
                a child index is out of range, a parent link disagrees with
                the child list, or a node is reachable more than once
        """
        if not self.nodes or self.nodes[self.ROOT].kind is not NodeKind.DOCUMENT:
            raise MalformedTreeError(self.ROOT, "root is not a document node")
        if self.nodes[self.ROOT].parent is not None:
            raise MalformedTreeError(self.ROOT, "document root has a parent")

        seen = {self.ROOT}
        stack = [self.ROOT]
        while stack:
            index = stack.pop()
            for child in self.nodes[index].children:
                if not 0 <= child < len(self.nodes):
                    raise MalformedTreeError(
                        child, f"child index out of range under node {index}"
                    )
                if child in seen:
                    raise MalformedTreeError(
                        child, "node is reachable more than once (cycle or shared subtree)"
                    )
                if self.nodes[child].parent != index:
                    raise MalformedTreeError(
                        child,
                        f"parent link {self.nodes[child].parent} does not match "
                        f"listing parent {index}"
                    )
                seen.add(child)
                stack.append(child)
