"""CLI command implementations"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from foldaq._version import __version__
from foldaq.config import Settings, load_config
from foldaq.core.emit import SerializationError
from foldaq.core.models import MDBOOK_VERSION, PreprocessorContext, dump_book, parse_input
from foldaq.core.pipeline import FoldPreprocessor, fold_text


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(book_config: dict = None, overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(book_config=book_config, overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _configure_logging(settings: Settings) -> None:
    """Send log records to stderr; stdout carries the book JSON."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)


def _warn_on_version_mismatch(ctx: PreprocessorContext) -> None:
    if ctx.mdbook_version != MDBOOK_VERSION:
        logger.warning(
            "The foldaq preprocessor was built against version %s of mdbook, "
            "but we're being called from version %s",
            MDBOOK_VERSION,
            ctx.mdbook_version,
        )


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"foldaq {__version__}")
        raise typer.Exit()


def preprocess_cmd() -> None:
    """Read [context, book] JSON from stdin and write the folded book to stdout."""
    raw = sys.stdin.read()
    try:
        ctx, book = parse_input(raw)
    except ValueError as e:
        _fail("Invalid preprocessor input", e)

    settings = _settings(book_config=ctx.preprocessor_config(FoldPreprocessor.name))
    _configure_logging(settings)
    _warn_on_version_mismatch(ctx)

    try:
        book = FoldPreprocessor(settings).run(ctx, book)
    except (SerializationError, ValueError) as e:
        _fail(str(e))
    typer.echo(dump_book(book))


def supports_cmd(
    renderer: Annotated[str, typer.Argument(help="Renderer name, e.g. html")],
    ):
    """Check whether a renderer is supported: exit 0 if it is, 1 otherwise."""
    supported = FoldPreprocessor().supports_renderer(renderer)
    raise typer.Exit(0 if supported else 1)


def fold_cmd(
    path: Annotated[Optional[Path], typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file; stdin when omitted")] = None,
    newlines: Annotated[Optional[int], typer.Option("--newlines-after-codeblock", help="Newlines after a fenced code block")] = None,
    ):
    """Fold a single markdown file and print the result (preview)."""
    settings = _settings(overrides={"newlines_after_codeblock": newlines})
    _configure_logging(settings)
    content = path.read_text(encoding="utf-8") if path else sys.stdin.read()
    try:
        folded = fold_text(content, settings)
    except (SerializationError, ValueError) as e:
        _fail(str(e))
    typer.echo(folded, nl=False)
