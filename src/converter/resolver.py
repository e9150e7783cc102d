"""Resolution of link and image URLs against the document base URL.

Resolution fails soft: a URL that cannot be resolved is kept exactly as the
document wrote it, because a broken link is preferable to a dropped one.
No network access is ever performed.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin, urlsplit

from .errors import UnresolvableUrlError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedUrl:
    """Outcome of resolving one URL.

    Attributes:
        url: Absolute URL, or the original candidate when unresolved
        resolved: False when resolution failed and url is the fallback
    """
    url: str
    resolved: bool


def _is_absolute(url: str) -> bool:
    parts = urlsplit(url)
    return bool(parts.scheme) and bool(parts.netloc)


def resolve_url(base_url: Optional[str], candidate: str) -> str:
    """Resolve candidate against base_url using standard URL semantics.

    Handles scheme-relative (//host/x), path-relative (../x, x) and
    fragment-only (#x) references. Candidates that already carry a scheme
    are returned unchanged.

    Args:
        base_url: Absolute base URL of the document, or None
        candidate: URL as written in the document

    Returns:
        Absolute URL

    Raises:
        UnresolvableUrlError: If candidate is empty or unparseable, or no
            usable base URL is available for a relative candidate
    """
    cleaned = candidate.strip() if candidate else ""
    if not cleaned:
        raise UnresolvableUrlError(candidate, base_url, "empty URL")

    try:
        if urlsplit(cleaned).scheme and not cleaned.startswith("//"):
            return cleaned
        if not base_url:
            raise UnresolvableUrlError(candidate, base_url, "no base URL")
        if not _is_absolute(base_url):
            raise UnresolvableUrlError(candidate, base_url, "base URL is not absolute")
        return urljoin(base_url, cleaned)
    except ValueError as e:
        raise UnresolvableUrlError(candidate, base_url, str(e)) from e


class LinkResolver:
    """Resolves document URLs against one immutable base URL.

    Example:
        >>> LinkResolver("https://ex.com/a/").resolve("/x").url
        'https://ex.com/x'
    """

    def __init__(self, base_url: Optional[str] = None):
        self._base_url = base_url.strip() if base_url else None

    @property
    def base_url(self) -> Optional[str]:
        return self._base_url

    def resolve(self, candidate: str) -> ResolvedUrl:
        """Resolve a URL, falling back to the candidate on failure."""
        try:
            return ResolvedUrl(url=resolve_url(self._base_url, candidate), resolved=True)
        except UnresolvableUrlError as e:
            logger.debug(f"Keeping URL as written: {e}")
            return ResolvedUrl(url=candidate, resolved=False)
