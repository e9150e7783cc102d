"""Hosting request handler for the HTML to markdown converter.

Key classes:
    RequestHandler: Maps a conversion request to an HTTP response
    PageFetcher: Downloads source pages with requests
    ConvertRequest: Validated JSON request body
"""

from .errors import ServiceError, InvalidRequestError, FetchError, RetryExhaustedError
from .models import ConvertRequest, FetchedPage, HandlerResponse
from .fetcher import PageFetcher
from .request_handler import RequestHandler

__all__ = [
    'RequestHandler',
    'PageFetcher',
    'ConvertRequest',
    'FetchedPage',
    'HandlerResponse',
    'ServiceError',
    'InvalidRequestError',
    'FetchError',
    'RetryExhaustedError',
]
