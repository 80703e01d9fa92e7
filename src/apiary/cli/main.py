"""Apiary command line.

The commands only deal with files, flags and presentation; discovery, crawling
and rendering are delegated to `HtmlDocument` and `resolve_document`.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from apiary.adapters.html_document import HtmlDocument
from apiary.adapters.json_exporter import export_resolutions_json
from apiary.cli import doctor
from apiary.cli.ui_components import (
    build_metadata_table,
    build_missing_metadata_panel,
    build_placeholders_table,
    print_banner,
)
from apiary.core.config import AppSettings
from apiary.core.errors import FetchError, MissingMetadataError
from apiary.core.services.pipeline import ResolveResult, resolve_document

app = typer.Typer(no_args_is_help=True, help="Fill HTML placeholders with data from the W3C API.")
app.add_typer(doctor.app, name="doctor")

# Rendered HTML may go to stdout, so everything else goes to stderr.
_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; the fetcher already logs them at DEBUG.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _page_argument() -> Path:
    return typer.Argument(..., exists=True, dir_okay=False, readable=True, help="HTML page to process.")


@app.command()
def render(
    page: Path = _page_argument(),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the rendered page here (default: stdout)."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key to use when the page declares none."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Also export the resolutions as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request and crawl decision."),
) -> None:
    """Resolve every `apiary-*` placeholder of PAGE and write the result."""

    _configure_logging(verbose)
    settings = AppSettings()
    if api_key:
        settings = settings.model_copy(update={"api_key": api_key})

    document = HtmlDocument.from_path(page)
    result: ResolveResult | None = None
    failure: FetchError | None = None
    try:
        result = asyncio.run(resolve_document(document, settings=settings))
    except MissingMetadataError as exc:
        _console.print(build_missing_metadata_panel(exc))
        raise typer.Exit(code=1) from exc
    except FetchError as exc:
        failure = exc

    html = document.render()
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)

    _console.print(build_placeholders_table(document.placeholders()))
    if result is not None and json_path:
        export_resolutions_json(result=result, output_path=json_path)
        _console.print(f"[green]Resolutions exported to:[/green] {json_path}")

    if failure is not None:
        _console.print(f"[red]Fetch failed:[/red] {failure}")
        raise typer.Exit(code=1)


@app.command()
def inspect(page: Path = _page_argument()) -> None:
    """Show the metadata and placeholders of PAGE without calling the API."""

    print_banner(_console)
    document = HtmlDocument.from_path(page)
    _console.print(build_metadata_table(document.metadata()))
    _console.print(build_placeholders_table(document.placeholders()))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
