"""Adapter from BeautifulSoup's parse tree to the converter's DomTree.

The error-tolerant HTML parsing itself is delegated to BeautifulSoup and its
parser backend (lxml by default); this module only copies the resulting tree
into the index-based arena.
"""

import logging
from typing import Dict

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import CData, Comment, NavigableString, PreformattedString, Tag

from .dom import DomTree
from .errors import ParserUnavailableError

logger = logging.getLogger(__name__)


class HtmlTreeBuilder:
    """Parses HTML into a DomTree.

    Attributes:
        parser: BeautifulSoup parser backend name ("lxml", "html.parser",
            "html5lib", ...)
    """

    def __init__(self, parser: str = "lxml"):
        self.parser = parser

    def parse(self, html: str) -> DomTree:
        """Parse an HTML string into a DomTree.

        Raises:
            ParserUnavailableError: If the parser backend is not installed
        """
        try:
            soup = BeautifulSoup(html, self.parser)
        except FeatureNotFound as e:
            raise ParserUnavailableError(self.parser) from e
        tree = self.from_soup(soup)
        logger.debug(f"Parsed {len(html)} chars of HTML into {len(tree)} nodes")
        return tree

    def from_soup(self, soup: Tag) -> DomTree:
        """Copy a BeautifulSoup tree (or any Tag subtree) into a DomTree."""
        tree = DomTree()
        stack = [(soup, DomTree.ROOT)]
        while stack:
            source, parent = stack.pop()
            for child in source.children:
                if isinstance(child, Tag):
                    index = tree.add_element(parent, child.name, self._attributes(child))
                    stack.append((child, index))
                elif isinstance(child, Comment):
                    tree.add_comment(parent, str(child))
                elif isinstance(child, CData):
                    tree.add_text(parent, str(child))
                elif isinstance(child, PreformattedString):
                    # Doctype, declarations and processing instructions
                    continue
                elif isinstance(child, NavigableString):
                    tree.add_text(parent, str(child))
        return tree

    @staticmethod
    def _attributes(tag: Tag) -> Dict[str, str]:
        attrs = {}
        for name, value in tag.attrs.items():
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            attrs[name.lower()] = "" if value is None else str(value)
        return attrs
