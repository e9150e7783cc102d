"""Command-line interface for HTML to markdown conversion.

This package provides the `getmd` CLI tool, which reads HTML from a file,
standard input or a URL, converts it with the converter engine and writes
the markdown to stdout or a file.
"""

from .models import ExitCode
from .config import ConfigLoader
from .errors import (
    CLIError,
    ConfigError,
    InputReadError,
    OutputWriteError,
)

__all__ = [
    'ExitCode',
    'ConfigLoader',
    'CLIError',
    'ConfigError',
    'InputReadError',
    'OutputWriteError',
]
