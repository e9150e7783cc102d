"""Data models for the conversion request handler.

All models use dataclasses, following the patterns established in
src/models/.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import urlsplit

from .errors import InvalidRequestError


@dataclass
class ConvertRequest:
    """Body of a POST conversion request.

    Attributes:
        url: Absolute http(s) URL of the page to convert
        include_links: Emit markdown links for anchors
        include_images: Emit markdown images

    Example:
        >>> ConvertRequest.from_json('{"url": "https://example.com"}').url
        'https://example.com'
    """
    url: str
    include_links: bool = True
    include_images: bool = True

    @classmethod
    def from_json(cls, body: Optional[str]) -> "ConvertRequest":
        """Parse and validate a JSON request body.

        Raises:
            InvalidRequestError: If the body is not a JSON object, url is
                missing or not an absolute http(s) URL, or a flag is not
                a boolean
        """
        if not body:
            raise InvalidRequestError("request body is empty")
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise InvalidRequestError(f"body is not valid JSON ({e.msg})") from e
        if not isinstance(data, dict):
            raise InvalidRequestError("body must be a JSON object")

        url = data.get('url')
        if not isinstance(url, str) or not url.strip():
            raise InvalidRequestError("must be a non-empty string", field='url')
        url = url.strip()
        parts = urlsplit(url)
        if parts.scheme not in ('http', 'https') or not parts.netloc:
            raise InvalidRequestError("must be an absolute http(s) URL", field='url')

        flags = {}
        for name in ('include_links', 'include_images'):
            value = data.get(name, True)
            if not isinstance(value, bool):
                raise InvalidRequestError("must be a boolean", field=name)
            flags[name] = value

        return cls(url=url, **flags)


@dataclass
class FetchedPage:
    """HTML document retrieved for conversion.

    Attributes:
        url: Final URL after redirects (used as the conversion base URL)
        html: Decoded response body
        status_code: HTTP status of the final response
    """
    url: str
    html: str
    status_code: int = 200


@dataclass
class HandlerResponse:
    """Framework-neutral HTTP response produced by the request handler."""
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""
