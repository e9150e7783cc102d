"""HTML to markdown conversion engine.

This package walks a parsed HTML document and emits markdown that keeps its
semantic structure (headings, emphasis, lists, links, images, code,
blockquotes, tables) while dropping presentation-only markup.

Key classes:
    MarkdownConverter: Public entry point (HTML or DomTree in, markdown out)
    MarkdownEmitter: Depth-first DOM walker producing raw markdown
    HtmlTreeBuilder: Adapter from BeautifulSoup to the arena DomTree
    DomTree: Index-based, read-only document tree
    LinkResolver: Soft-failing URL resolution against the base URL
"""

from .dom import DomNode, DomTree, NodeKind
from .errors import (
    GetMdError,
    ConversionError,
    MalformedTreeError,
    DepthExceededError,
    UnresolvableUrlError,
    ParserUnavailableError,
)
from .classifier import Classification, NodeRole, classify
from .resolver import LinkResolver, ResolvedUrl, resolve_url
from .emitter import MarkdownEmitter
from .post_processor import finalize
from .tree_builder import HtmlTreeBuilder
from .markdown_converter import MarkdownConverter, html_to_markdown

__all__ = [
    # Main interface
    'MarkdownConverter',
    'html_to_markdown',
    # Core classes
    'MarkdownEmitter',
    'HtmlTreeBuilder',
    'LinkResolver',
    'ResolvedUrl',
    'resolve_url',
    'finalize',
    'classify',
    'Classification',
    'NodeRole',
    # Tree model
    'DomTree',
    'DomNode',
    'NodeKind',
    # Errors
    'GetMdError',
    'ConversionError',
    'MalformedTreeError',
    'DepthExceededError',
    'UnresolvableUrlError',
    'ParserUnavailableError',
]
