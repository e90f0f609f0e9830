"""
Command-line interface for potlatin.

Provides commands for:
- Pseudo-translating a .pot/.po catalog
- Listing the available word transforms

Usage:
    potlatin translate messages.pot                  # writes x-piglatin.po
    potlatin translate messages.pot -o -             # writes to stdout
    potlatin translate messages.pot --html require -o xx.po
    potlatin transforms
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from potlatin import __version__
from potlatin.catalog import CatalogScanner
from potlatin.config import (
    DEFAULT_POLICY,
    DEFAULT_TRANSFORM,
    ENV_POLICY,
    ENV_TRANSFORM,
    CatalogConfig,
)
from potlatin.dispatch import TranslationDispatcher
from potlatin.errors import ConfigurationError, PotlatinError
from potlatin.markup import transform_markup
from potlatin.transform import available_transforms, create_transform
from potlatin.words import transform_words

app = typer.Typer(
    name="potlatin",
    help="potlatin: pseudo-translate gettext catalogs, leaving markup intact",
    add_completion=False,
)
console = Console(stderr=True)
logger = logging.getLogger("potlatin")

PLAIN_SAMPLE = "Click here to open the window."
MARKUP_SAMPLE = "Click <b>here</b> to open the window."


def version_callback(value: bool):
    if value:
        console.print(f"potlatin v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """potlatin: pseudo-translate message catalogs."""
    pass


@app.command()
def translate(
    input_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Catalog to translate (.pot or .po)",
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o",
        help="Write output to file ('-' for stdout, default x-piglatin.po)",
    ),
    html: str = typer.Option(
        DEFAULT_POLICY.value, "--html",
        envvar=ENV_POLICY,
        help="How to handle HTML in translations (ignore, attempt, require)",
    ),
    transform: str = typer.Option(
        DEFAULT_TRANSFORM, "--transform", "-t",
        envvar=ENV_TRANSFORM,
        help="Word transform (see 'potlatin transforms')",
    ),
    verbose: bool = typer.Option(
        False, "--verbose",
        help="Log progress information",
    ),
):
    """Translate every msgstr of a catalog."""
    _configure_logging(verbose)

    try:
        config = CatalogConfig(policy=html, transform=transform, output=output)
        word_fn = create_transform(config.transform)
        dispatcher = TranslationDispatcher(word_fn, config.policy)
    except ConfigurationError as exc:
        console.print(f"[red]Error:[/] {exc}", style="bold")
        raise typer.Exit(1)
    logger.info("Translating %s with %s", input_file, config.to_dict())

    # Translate fully before opening the destination so a failure leaves no partial file
    buffer = io.StringIO()
    try:
        with input_file.open(encoding="utf-8") as src:
            result = CatalogScanner(dispatcher).scan(src, buffer)
    except PotlatinError as exc:
        lineno = getattr(exc, "lineno", None)
        where = f"{input_file}:{lineno}" if lineno else str(input_file)
        console.print(f"[red]Translation failed[/] ({where}): {exc}")
        raise typer.Exit(1)
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[red]Failed to read {input_file}:[/] {exc}")
        raise typer.Exit(1)

    if config.writes_stdout:
        typer.echo(buffer.getvalue(), nl=False)
    else:
        try:
            Path(config.output_path).write_text(buffer.getvalue(), encoding="utf-8")
        except OSError as exc:
            console.print(f"[red]Failed to write {config.output_path}:[/] {exc}")
            raise typer.Exit(1)
        console.print(f"[green]Saved to:[/] {config.output_path}")

    logger.info("Scan stats: %s", result.to_dict())
    if result.has_warnings:
        console.print(
            f"[yellow]{len(result.warnings)} entries fell back to plain-text translation[/]"
        )
    if not config.writes_stdout:
        console.print(f"[dim]Translated {result.entries_translated} entries[/]")


@app.command()
def transforms():
    """List available word transforms."""
    table = Table(title="Word transforms")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Sample")

    for name, word_fn in available_transforms().items():
        sample = transform_words(PLAIN_SAMPLE, word_fn)
        table.add_row(name, word_fn.description, sample)

    console.print(table)
    default = create_transform(DEFAULT_TRANSFORM)
    console.print("\nMarkup is preserved:")
    console.print(f"  {MARKUP_SAMPLE}", markup=False)
    console.print(f"  {transform_markup(MARKUP_SAMPLE, default)}", markup=False)
