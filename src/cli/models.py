"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for the getmd command.

    - SUCCESS (0): Conversion completed and output written
    - GENERAL_ERROR (1): Bad options, unreadable input, unwritable output
    - CONVERSION_ERROR (2): Malformed or too deeply nested document
    - NETWORK_ERROR (3): Source URL could not be fetched

    Example:
        >>> raise typer.Exit(ExitCode.SUCCESS)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONVERSION_ERROR = 2
    NETWORK_ERROR = 3
