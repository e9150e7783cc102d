"""HTML to markdown converter facade.

This module ties the conversion pipeline together: parse (external parser
via the tree builder) -> validate -> emit -> post-process. Every call builds
its own emitter, context and buffer, so one MarkdownConverter can serve
concurrent conversions.
"""

import logging
from typing import Optional

from src.models.conversion_options import ConversionOptions
from src.models.conversion_result import ConversionResult

from .dom import DomTree
from .emitter import MarkdownEmitter
from .post_processor import finalize
from .tree_builder import HtmlTreeBuilder

logger = logging.getLogger(__name__)


class MarkdownConverter:
    """Converts HTML documents and parsed trees to markdown.

    Attributes:
        options: Conversion options applied to every call
        tree_builder: Parser adapter used for raw HTML input

    Example:
        >>> MarkdownConverter().html_to_markdown("<h1>Title</h1>")
        '# Title\\n'
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        self.options = options or ConversionOptions()
        self.tree_builder = HtmlTreeBuilder(parser=self.options.parser)

    def convert(self, tree: DomTree, base_url: Optional[str] = None) -> ConversionResult:
        """Convert a parsed document tree.

        Args:
            tree: Document tree (root must be the document node)
            base_url: Absolute URL used to resolve relative links and images

        Returns:
            ConversionResult with the markdown and run metadata

        Raises:
            MalformedTreeError: If the tree is cyclic or otherwise malformed
            DepthExceededError: If nesting exceeds options.max_depth
        """
        tree.validate()
        raw = MarkdownEmitter(tree, base_url=base_url, options=self.options).emit()
        markdown = finalize(raw)
        logger.debug(
            f"Converted {len(tree)} nodes into {len(markdown)} chars of markdown"
            + (f" (base URL {base_url})" if base_url else "")
        )
        return ConversionResult(
            markdown=markdown,
            metadata={'base_url': base_url, 'node_count': len(tree)},
        )

    def tree_to_markdown(self, tree: DomTree, base_url: Optional[str] = None) -> str:
        """Convert a parsed document tree and return only the markdown."""
        return self.convert(tree, base_url=base_url).markdown

    def html_to_markdown(self, html: str, base_url: Optional[str] = None) -> str:
        """Parse and convert an HTML string.

        Args:
            html: HTML document or fragment
            base_url: Absolute URL used to resolve relative links and images

        Returns:
            Markdown string (empty for empty input)

        Raises:
            ConversionError: If parsing or conversion fails
        """
        if not html:
            return ""
        tree = self.tree_builder.parse(html)
        return self.tree_to_markdown(tree, base_url=base_url)


def html_to_markdown(
    html: str,
    base_url: Optional[str] = None,
    options: Optional[ConversionOptions] = None
) -> str:
    """Convert HTML to markdown with a one-off converter."""
    return MarkdownConverter(options).html_to_markdown(html, base_url=base_url)
