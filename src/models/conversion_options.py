"""Conversion options data model."""

from dataclasses import dataclass

# Each nesting level costs a few interpreter frames; this stays well inside
# the default recursion limit.
DEFAULT_MAX_DEPTH = 200

VALID_BULLETS = ('-', '*', '+')


@dataclass
class ConversionOptions:
    """Options controlling a single HTML to markdown conversion.

    Attributes:
        include_links: Emit [text](url) for anchors (False keeps only the text)
        include_images: Emit ![alt](src) for images (False drops them)
        bullet: Marker for unordered list items ('-', '*' or '+')
        max_depth: Maximum element nesting depth before failing fast
        parser: BeautifulSoup parser backend used for raw HTML input
    """
    include_links: bool = True
    include_images: bool = True
    bullet: str = '-'
    max_depth: int = DEFAULT_MAX_DEPTH
    parser: str = 'lxml'
