"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI status output.
Markdown goes to stdout untouched; status, warnings and errors go to stderr
through a Rich console so they never mix with the converted document.
"""

from typing import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape
from rich.spinner import Spinner
from rich.live import Live


class OutputHandler:
    """Handles terminal status output using Rich library.

    Attributes:
        verbosity: Logging verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console writing to stderr

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Converted page.html")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        self.verbosity = verbosity
        self.console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a single operation runs.

        Example:
            >>> with handler.spinner("Fetching page..."):
            ...     page = fetcher.fetch(url)
        """
        if self.verbosity < 1 or not self.console.is_terminal:
            yield
            return
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield
