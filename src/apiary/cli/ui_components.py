"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels are reused by `render` and `inspect`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from apiary import __version__
from apiary.core.domain.models import PageMetadata
from apiary.core.domain.requests import Placeholder
from apiary.core.errors import MissingMetadataError


def print_banner(console: Console) -> None:
    title = Text(f"Apiary {__version__}", style="bold cyan")
    subtitle = Text("W3C API data • hypermedia crawling • HTML placeholders", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _show(value: object | None) -> str:
    return f"“{value}”" if value else "[red]missing[/red]"


def build_metadata_table(metadata: PageMetadata) -> Table:
    table = Table(title="Page metadata", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("apiKey", _show(metadata.api_key))
    table.add_row("type", _show(metadata.entity_type.value if metadata.entity_type else None))
    table.add_row("id", _show(metadata.entity_id))
    return table


def build_placeholders_table(placeholders: list[Placeholder]) -> Table:
    """Table of placeholders: name, element count, state and resolved key."""

    table = Table(title="Placeholders")
    table.add_column("Placeholder", style="cyan", no_wrap=True)
    table.add_column("Elements", justify="right")
    table.add_column("State")
    table.add_column("Key", style="magenta")
    table.add_column("Output", style="dim")
    for placeholder in placeholders:
        state = "[green]resolved[/green]" if not placeholder.pending else "[yellow]pending[/yellow]"
        if placeholder.pending:
            output = ""
        elif placeholder.fragment is None:
            output = "(no output)"
        else:
            output = placeholder.fragment if len(placeholder.fragment) <= 60 else placeholder.fragment[:59] + "…"
        table.add_row(
            placeholder.name,
            str(len(placeholder.targets)),
            state,
            placeholder.resolved_key or "",
            Text(output),
        )
    return table


def build_missing_metadata_panel(error: MissingMetadataError) -> Panel:
    body = Text()
    body.append("Could not get all necessary metadata.\n\n", style="bold")
    metadata = error.metadata
    body.append(f"apiKey: “{metadata.api_key or ''}”\n")
    body.append(f"type: “{metadata.entity_type.value if metadata.entity_type else ''}”\n")
    body.append(f"id: “{metadata.entity_id or ''}”")
    return Panel(body, title=Text(f"Apiary {__version__}: ERROR", style="bold red"), border_style="red")
