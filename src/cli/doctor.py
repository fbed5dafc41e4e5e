"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get("")
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="APOD-D2 Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.api_key:
        table.add_row("API key", "OK", "Personal key configured")
    else:
        table.add_row("API key", "OPTIONAL", "No key set -> DEMO_KEY (30 requests/hour)")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row(
        "Rate limit",
        "OK",
        f"{settings.rate_limit_permits} per {settings.rate_limit_window_seconds:g}s "
        f"({settings.rate_limit_segments} segments, queue {settings.rate_limit_queue})",
    )

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup-key")
def setup_key() -> None:
    """Store the NASA API key in the user config .env."""

    api_key = typer.prompt("NASA API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("api key is required")

    env_path = write_user_env_vars({"APOD_D2_API_KEY": api_key})
    _console.print(f"[green]Saved API key to:[/green] {env_path}")
