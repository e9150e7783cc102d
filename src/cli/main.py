"""Main CLI entry point for the getmd command.

This module provides the Typer application that converts an HTML file,
standard input or a web page into markdown. It uses options on a single
command rather than subcommands.
"""

import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlsplit

import typer

from src.cli.config import ConfigLoader
from src.cli.errors import ConfigError, InputReadError, OutputWriteError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.converter.errors import ConversionError
from src.converter.markdown_converter import MarkdownConverter
from src.models.conversion_options import ConversionOptions
from src.service.errors import FetchError, RetryExhaustedError
from src.service.fetcher import PageFetcher

VERSION = "0.1.0"

app = typer.Typer(
    name="getmd",
    help="""Convert HTML to markdown.

EXAMPLES:
  getmd page.html                                  # File to stdout
  getmd https://example.com/docs/ -o docs.md       # Fetch a page and convert it
  cat page.html | getmd - --base-url https://example.com/
""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)

USAGE_MESSAGE = """Usage: getmd SOURCE [OPTIONS]

SOURCE is an HTML file path, '-' for standard input, or an http(s) URL.
Run 'getmd --help' for all options."""


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    # Configure app-specific logger (not root) to avoid affecting libraries
    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"getmd_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _is_url(source: str) -> bool:
    parts = urlsplit(source)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def _build_options(
    config: Optional[str],
    no_links: bool,
    no_images: bool,
    max_depth: Optional[int],
    parser: Optional[str]
) -> ConversionOptions:
    """Merge the options file (if any) with command-line overrides."""
    options = ConfigLoader.load(config) if config else ConversionOptions()
    overrides = {}
    if no_links:
        overrides["include_links"] = False
    if no_images:
        overrides["include_images"] = False
    if max_depth is not None:
        overrides["max_depth"] = max_depth
    if parser:
        overrides["parser"] = parser
    return replace(options, **overrides)


def _read_source(source: str, output: OutputHandler) -> Tuple[str, Optional[str]]:
    """Read the HTML to convert.

    Returns:
        Tuple of (html, base URL implied by the source or None)
    """
    if source == "-":
        return sys.stdin.read(), None

    if _is_url(source):
        with output.spinner(f"Fetching {source}..."):
            page = PageFetcher().fetch(source)
        output.info(f"Fetched {page.url}")
        return page.html, page.url

    try:
        return Path(source).read_text(encoding="utf-8", errors="replace"), None
    except FileNotFoundError:
        raise InputReadError(source, "File not found")
    except IsADirectoryError:
        raise InputReadError(source, "Is a directory")
    except PermissionError:
        raise InputReadError(source, "Permission denied")
    except OSError as e:
        raise InputReadError(source, str(e))


def _write_output(markdown: str, destination: Optional[str]) -> None:
    if destination is None:
        typer.echo(markdown, nl=False)
        return
    try:
        path = Path(destination)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(destination, str(e))


@app.command()
def main_command(
    source: Optional[str] = typer.Argument(
        None,
        help="HTML file path, '-' for stdin, or an http(s) URL to fetch",
        show_default=False,
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Absolute URL used to resolve relative links (defaults to the fetched URL)",
        metavar="URL",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write markdown to FILE instead of stdout",
        metavar="FILE",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help="YAML options file (command-line flags take precedence)",
        metavar="FILE",
    ),
    no_links: bool = typer.Option(
        False,
        "--no-links",
        help="Keep link text but drop link markup",
    ),
    no_images: bool = typer.Option(
        False,
        "--no-images",
        help="Drop images",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        min=1,
        help="Maximum element nesting depth before giving up",
    ),
    parser: Optional[str] = typer.Option(
        None,
        "--parser",
        help="BeautifulSoup parser backend (lxml, html.parser, html5lib)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=errors only, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Convert HTML to markdown.

    \b
    EXAMPLES:
      getmd page.html                                  # File to stdout
      getmd https://example.com/docs/ -o docs.md       # Fetch a page and convert it
      cat page.html | getmd - --base-url https://example.com/
    """
    if version:
        typer.echo(f"getmd version {VERSION}")
        raise typer.Exit()

    if source is None:
        typer.echo(USAGE_MESSAGE, err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        options = _build_options(config, no_links, no_images, max_depth, parser)
        html, fetched_url = _read_source(source, output)
        markdown = MarkdownConverter(options).html_to_markdown(
            html, base_url=base_url or fetched_url
        )
        _write_output(markdown, output_path)

    except (ConfigError, InputReadError, OutputWriteError) as e:
        logger.error(str(e))
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except (FetchError, RetryExhaustedError) as e:
        logger.error(f"Fetch failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.NETWORK_ERROR)

    except ConversionError as e:
        logger.error(f"Conversion failed: {e}")
        output.error(f"Conversion failed: {e}")
        raise typer.Exit(ExitCode.CONVERSION_ERROR)

    except Exception as e:
        logger.exception("Unexpected error during conversion")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if output_path:
        output.success(f"Wrote {len(markdown)} chars to {output_path}")
    raise typer.Exit(ExitCode.SUCCESS)
