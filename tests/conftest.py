"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest

from src.converter.markdown_converter import MarkdownConverter
from src.models.conversion_options import ConversionOptions

# Fetching is always mocked in tests, but keep urllib3 quiet if a test
# exercises a real requests.Session object.
logging.getLogger("urllib3").setLevel(logging.WARNING)


@pytest.fixture
def converter():
    """MarkdownConverter with default options."""
    return MarkdownConverter()


@pytest.fixture
def convert():
    """Convert an HTML string with optional base URL and option overrides.

    Example:
        >>> convert("<p>x</p>", include_links=False)
    """
    def _convert(html, base_url=None, **option_overrides):
        options = ConversionOptions(**option_overrides)
        return MarkdownConverter(options).html_to_markdown(html, base_url=base_url)

    return _convert


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers the CLI attaches to the 'src' logger between tests."""
    yield
    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        handler.close()
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)
