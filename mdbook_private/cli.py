"""Command-line interface for mdbook-private.

Provides a Click-based CLI speaking mdBook's preprocessor protocol:
mdBook first asks ``mdbook-private supports <renderer>``, then runs
``mdbook-private`` with ``[context, book]`` JSON on stdin and reads the
processed book from stdout.
"""

import dataclasses
import json
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version as get_version
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from .domain import Book, PrivateConfig
from .services import PrivatePreprocessor, RenderService, SectionService

try:
    __version__ = get_version("mdbook-private")
except PackageNotFoundError:
    __version__ = "0.0.0"  # Fallback version

LOG_LEVEL_ENV = "MDBOOK_PRIVATE_LOG"

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Send package logs to stderr through rich.

    stdout is reserved for the processed book.

    Args:
        verbose: If True, log at DEBUG level.
    """
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING")
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    package_logger = logging.getLogger("mdbook_private")
    package_logger.handlers.clear()
    package_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    )
    package_logger.setLevel(level)


def parse_input(raw: str) -> tuple[dict, Book]:
    """Parse the ``[context, book]`` pair mdBook writes to stdin.

    Raises:
        ValueError: If the input is not valid preprocessor JSON.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON input: {e}") from e

    if not isinstance(data, list) or len(data) != 2:
        raise ValueError("Expected a JSON array of [context, book]")

    context, book = data
    if not isinstance(context, dict):
        raise ValueError("Preprocessor context must be an object")
    return context, Book.from_dict(book)


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr.")
@click.version_option(version=__version__, prog_name="mdbook-private")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """mdbook-private - Hide or highlight private content in an mdBook.

    Without a subcommand, runs as an mdBook preprocessor: reads
    [context, book] JSON from stdin and writes the book to stdout.
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is not None:
        return

    try:
        context, book = parse_input(click.get_text_stream("stdin").read())
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    book = PrivatePreprocessor().run(context, book)
    click.echo(json.dumps(book.to_dict()))


@cli.command()
@click.argument("renderer")
def supports(renderer: str) -> None:
    """Check whether RENDERER is supported (exit status 0 if so)."""
    if not PrivatePreprocessor().supports_renderer(renderer):
        sys.exit(1)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Read [preprocessor.private] from this book.toml.",
)
@click.option("--remove/--keep", default=None, help="Remove private sections.")
@click.option("--style/--no-style", default=None, help="Style retained sections.")
@click.option("--notice", default=None, help="Label shown on styled sections.")
@click.option("--html", "as_html", is_flag=True, help="Render to an HTML page.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write to this file instead of stdout.",
)
def render(
    file: str,
    config_path: str | None,
    remove: bool | None,
    style: bool | None,
    notice: str | None,
    as_html: bool,
    output: str | None,
) -> None:
    """Preview the transformation of one markdown FILE.

    Options given on the command line override the book.toml values.
    """
    try:
        config = PrivateConfig.load(Path(config_path)) if config_path else PrivateConfig()
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    overrides = {
        key: value
        for key, value in (("remove", remove), ("style", style), ("notice", notice))
        if value is not None
    }
    config = dataclasses.replace(config, **overrides)

    path = Path(file)
    result = SectionService(config).transform(path.read_text(encoding="utf-8"))
    if as_html:
        result = RenderService().render_page(result, title=path.stem)

    if output:
        Path(output).write_text(result, encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(result, nl=False)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
