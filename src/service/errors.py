"""Typed exception hierarchy for request handling and page fetching errors.

All exceptions inherit from ServiceError, itself a GetMdError, and include
descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.converter.errors import GetMdError


class ServiceError(GetMdError):
    """Base exception for all request handler errors."""
    pass


class InvalidRequestError(ServiceError):
    """Raised when a conversion request body is malformed or invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        if field:
            full_message = f"Invalid request field '{field}': {message}"
        else:
            full_message = f"Invalid request: {message}"
        super().__init__(full_message)
        self.field = field
        self.original_message = message


class FetchError(ServiceError):
    """Raised when the source page cannot be fetched."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class RetryExhaustedError(ServiceError):
    """Raised when a transient failure persists after all retries."""

    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        message = f"Giving up after {attempts} attempts"
        if last_error is not None:
            message += f": {last_error}"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
