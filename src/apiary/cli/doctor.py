"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from apiary.adapters.http_client import build_async_client
from apiary.core.config import AppSettings, write_user_env_vars
from apiary.core.services.fetcher import with_credentials

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    url = with_credentials(settings.base_url, settings.api_key or "")
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
    except Exception as exc:
        return False, str(exc)
    return response.is_success, f"HTTP {response.status_code}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Apiary Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.api_key:
        table.add_row("API key", "OK", "Fallback key configured")
    else:
        table.add_row("API key", "OPTIONAL", "No fallback key -> pages must declare data-api-key")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("User profile URL", "OK", settings.user_profile_url)

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api and not settings.api_key:
        _console.print("\n[yellow]Note:[/yellow] run `apiary doctor setup` to store an API key.")


@app.command()
def setup() -> None:
    """Interactive setup (stores the API key in the user config .env)."""

    settings = AppSettings()
    api_key = typer.prompt("W3C API key", hide_input=True, confirmation_prompt=False).strip()
    base_url = typer.prompt("API base URL", default=settings.base_url, show_default=True).strip()

    if not api_key or not base_url:
        raise typer.BadParameter("api key and base URL are required")

    env_path = write_user_env_vars({"APIARY_API_KEY": api_key, "APIARY_BASE_URL": base_url})
    _console.print(f"[green]Saved Apiary config to:[/green] {env_path}")
