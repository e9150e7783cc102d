"""Hosting request handler for HTML to markdown conversion.

The handler accepts a JSON POST body naming a page URL, fetches the page,
converts it with the fetched (post-redirect) URL as base URL, and maps every
outcome to an HTTP status. It is framework neutral: hosting code passes in
the method and body and writes out the returned HandlerResponse.
"""

import logging
from dataclasses import replace
from typing import Dict, Optional

from src.converter.errors import ConversionError
from src.converter.markdown_converter import MarkdownConverter
from src.models.conversion_options import ConversionOptions

from .errors import FetchError, InvalidRequestError, RetryExhaustedError
from .fetcher import PageFetcher
from .models import ConvertRequest, HandlerResponse

logger = logging.getLogger(__name__)

CORS_HEADERS: Dict[str, str] = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type',
}
MARKDOWN_CONTENT_TYPE = 'text/markdown; charset=utf-8'
TEXT_CONTENT_TYPE = 'text/plain; charset=utf-8'


class RequestHandler:
    """Handles one conversion request per call.

    Attributes:
        fetcher: Page fetcher used for POST requests
        options: Base conversion options; request flags override them
    """

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        options: Optional[ConversionOptions] = None
    ):
        self.fetcher = fetcher or PageFetcher()
        self.options = options or ConversionOptions()

    def handle(self, method: str, body: Optional[str] = None) -> HandlerResponse:
        """Dispatch a request by HTTP method.

        Args:
            method: HTTP method name
            body: Raw request body (POST only)

        Returns:
            HandlerResponse ready to be written by the hosting framework
        """
        method = (method or '').upper()
        if method == 'OPTIONS':
            return HandlerResponse(status=204, headers=dict(CORS_HEADERS))
        if method == 'POST':
            return self._handle_post(body)
        return self._error(405, "Method Not Allowed", extra_headers={'Allow': 'POST, OPTIONS'})

    def _handle_post(self, body: Optional[str]) -> HandlerResponse:
        try:
            request = ConvertRequest.from_json(body)
        except InvalidRequestError as e:
            logger.warning(f"Rejected request: {e}")
            return self._error(400, str(e))

        try:
            page = self.fetcher.fetch(request.url)
        except RetryExhaustedError as e:
            logger.warning(f"Source unavailable for {request.url}: {e}")
            return self._error(503, f"Source unavailable: {e}")
        except FetchError as e:
            logger.warning(str(e))
            return self._error(502, str(e))

        options = replace(
            self.options,
            include_links=request.include_links,
            include_images=request.include_images,
        )
        try:
            markdown = MarkdownConverter(options).html_to_markdown(page.html, base_url=page.url)
        except ConversionError as e:
            logger.error(f"Conversion failed for {page.url}: {e}")
            return self._error(422, f"Conversion failed: {e}")

        logger.info(f"Converted {page.url} ({len(markdown)} chars)")
        return HandlerResponse(
            status=200,
            headers={
                'Access-Control-Allow-Origin': CORS_HEADERS['Access-Control-Allow-Origin'],
                'Content-Type': MARKDOWN_CONTENT_TYPE,
            },
            body=markdown,
        )

    @staticmethod
    def _error(
        status: int,
        message: str,
        extra_headers: Optional[Dict[str, str]] = None
    ) -> HandlerResponse:
        headers = {
            'Access-Control-Allow-Origin': CORS_HEADERS['Access-Control-Allow-Origin'],
            'Content-Type': TEXT_CONTENT_TYPE,
        }
        headers.update(extra_headers or {})
        return HandlerResponse(status=status, headers=headers, body=message)
