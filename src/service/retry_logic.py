"""Retry logic with exponential backoff for transient fetch failures.

This module retries page fetches that fail with a rate limit (429) or
service unavailable (503) response. It implements exponential backoff
(1s, 2s, 4s) and fails fast for every other error.
"""

import time
import logging
from typing import Callable, TypeVar

from .errors import RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3
TRANSIENT_STATUS_CODES = frozenset({429, 503})


def retry_on_transient(func: Callable[..., T], *args, **kwargs) -> T:
    """Retry function on 429/503 responses with exponential backoff.

    Executes the given function with the provided arguments, retrying up to 3
    times with exponential backoff (1s, 2s, 4s) when a transient error is
    encountered. Fails fast for all other errors.

    Args:
        func: The function to execute with retry logic
        *args: Positional arguments to pass to the function
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The return value of the function

    Raises:
        RetryExhaustedError: If the transient failure persists after 3 retries
        Other exceptions: Passed through immediately without retry

    Example:
        >>> page = retry_on_transient(fetcher.fetch_once, "https://example.com")
    """
    for retry_num in range(MAX_RETRIES + 1):  # 0, 1, 2, 3 = 4 attempts total
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_transient_error(e):
                raise

            if retry_num >= MAX_RETRIES:
                logger.error(
                    f"Transient failure persisted after {MAX_RETRIES} retries, giving up"
                )
                raise RetryExhaustedError(MAX_RETRIES + 1, e) from e

            wait_time = 2 ** retry_num
            logger.info(
                f"Transient failure ({e}), retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{MAX_RETRIES})"
            )
            time.sleep(wait_time)

    # Unreachable: the loop either returns or raises
    raise RetryExhaustedError(MAX_RETRIES + 1)


def _is_transient_error(exception: Exception) -> bool:
    """Check if an exception represents a 429 or 503 response.

    Looks for a status_code attribute (FetchError and most HTTP libraries)
    and for response.status_code (requests library pattern).
    """
    status_code = getattr(exception, 'status_code', None)
    if status_code in TRANSIENT_STATUS_CODES:
        return True

    response = getattr(exception, 'response', None)
    if response is not None and getattr(response, 'status_code', None) in TRANSIENT_STATUS_CODES:
        return True

    return False
