"""Typed exception hierarchy for HTML to markdown conversion errors.

This module defines all custom exceptions raised by the conversion engine.
All exceptions inherit from GetMdError so callers can catch any application
error with a single clause. Fatal errors abort the whole conversion; soft
errors are handled inside the engine and never reach the caller.
"""

from typing import Optional


class GetMdError(Exception):
    """Base exception for all getmd errors.

    Use this to catch any application-level error from the converter,
    the request handler or the CLI.
    """
    pass


class ConversionError(GetMdError):
    """Base exception for all conversion engine errors."""
    pass


class MalformedTreeError(ConversionError):
    """Raised when the input tree is cyclic, shared or otherwise not a tree."""

    def __init__(self, node_index: Optional[int], reason: str):
        if node_index is None:
            message = f"Malformed document tree: {reason}"
        else:
            message = f"Malformed document tree at node {node_index}: {reason}"
        super().__init__(message)
        self.node_index = node_index
        self.reason = reason


class DepthExceededError(ConversionError):
    """Raised when element nesting exceeds the configured maximum depth."""

    def __init__(self, depth: int, limit: int):
        super().__init__(
            f"Document nesting depth {depth} exceeds the limit of {limit}"
        )
        self.depth = depth
        self.limit = limit


class UnresolvableUrlError(ConversionError):
    """Raised when a URL cannot be resolved against the base URL.

    Soft error: the resolver catches it and keeps the original URL text.
    """

    def __init__(self, url: str, base_url: Optional[str], reason: str):
        super().__init__(
            f"Cannot resolve URL '{url}' against base '{base_url}': {reason}"
        )
        self.url = url
        self.base_url = base_url
        self.reason = reason


class ParserUnavailableError(ConversionError):
    """Raised when the requested HTML parser backend is not installed."""

    def __init__(self, parser: str):
        super().__init__(
            f"HTML parser '{parser}' is not available. Install it "
            f"(e.g. pip install {parser}) or choose another parser"
        )
        self.parser = parser
