"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI.
All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.converter.errors import GetMdError


class CLIError(GetMdError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigError(CLIError):
    """Raised when options file validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class InputReadError(CLIError):
    """Raised when an input or options file cannot be read."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Cannot read {source}: {reason}")
        self.source = source
        self.reason = reason


class OutputWriteError(CLIError):
    """Raised when the converted markdown cannot be written."""

    def __init__(self, destination: str, reason: str):
        super().__init__(f"Cannot write {destination}: {reason}")
        self.destination = destination
        self.reason = reason
