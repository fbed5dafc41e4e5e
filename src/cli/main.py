"""CLI principal (Typer).

Comandos:
- `today`, `random`, `date`, `range`: consultas APOD.
- `doctor`: diagnóstico de entorno y configuración de la API key.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from pathlib import Path
from typing import Awaitable, Callable

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.apod import Apod
from adapters.http_client import build_async_client
from adapters.json_exporter import export_pictures_json, pictures_to_json
from cli import doctor
from cli.ui_components import build_picture_panel, build_pictures_table, print_banner
from core.config import AppSettings
from core.domain.errors import ApodError
from core.domain.models import PictureOfDay

DEMO_KEY = "DEMO_KEY"

app = typer.Typer(no_args_is_help=True, help="NASA Astronomy Picture of the Day client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Envía los logs a stderr con Rich; DEBUG con `--verbose`."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    # httpx registra cada request a INFO/DEBUG, con la api_key en la URL.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
) -> None:
    configure_logging(verbose)


def _parse_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}") from exc


def resolve_api_key(api_key: str | None, settings: AppSettings) -> str:
    return api_key or settings.api_key or DEMO_KEY


async def _with_apod(
    api_key: str | None,
    action: Callable[[Apod], Awaitable[list[PictureOfDay]]],
) -> list[PictureOfDay]:
    settings = AppSettings()
    async with build_async_client(settings) as client:
        apod = Apod(client, resolve_api_key(api_key, settings), settings=settings)
        return await action(apod)


def _run(
    action: Callable[[Apod], Awaitable[list[PictureOfDay]]],
    *,
    api_key: str | None,
    as_json: bool,
    output: Path | None,
) -> None:
    try:
        pictures = asyncio.run(_with_apod(api_key, action))
    except (ApodError, httpx.HTTPError) as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if output is not None:
        path = export_pictures_json(pictures=pictures, output_path=output)
        _err_console.print(f"[green]Saved {len(pictures)} record(s) to:[/green] {path}")

    if as_json:
        typer.echo(pictures_to_json(pictures), nl=False)
        return

    print_banner(_console)
    if len(pictures) == 1:
        _console.print(build_picture_panel(pictures[0]))
    else:
        _console.print(build_pictures_table(pictures))


_API_KEY = typer.Option(None, "--api-key", help="NASA API key (default: APOD_D2_API_KEY or DEMO_KEY).")
_JSON = typer.Option(False, "--json", help="Print records as JSON.")
_OUTPUT = typer.Option(None, "--output", "-o", help="Also write records to a JSON file.")
_THUMB = typer.Option(False, "--thumb", help="Ask for video thumbnails.")


@app.command()
def today(
    api_key: str | None = _API_KEY,
    as_json: bool = _JSON,
    output: Path | None = _OUTPUT,
) -> None:
    """Today's picture."""

    async def action(apod: Apod) -> list[PictureOfDay]:
        return [await apod.get_today()]

    _run(action, api_key=api_key, as_json=as_json, output=output)


@app.command()
def random(
    count: int = typer.Argument(1, min=1, help="Number of random pictures."),
    api_key: str | None = _API_KEY,
    as_json: bool = _JSON,
    output: Path | None = _OUTPUT,
) -> None:
    """Random pictures."""

    async def action(apod: Apod) -> list[PictureOfDay]:
        return await apod.get_random(count)

    _run(action, api_key=api_key, as_json=as_json, output=output)


@app.command(name="date")
def on_date(
    day: str = typer.Argument(..., help="Day as YYYY-MM-DD."),
    thumb: bool = _THUMB,
    api_key: str | None = _API_KEY,
    as_json: bool = _JSON,
    output: Path | None = _OUTPUT,
) -> None:
    """The picture of a given day."""

    target = _parse_date(day)

    async def action(apod: Apod) -> list[PictureOfDay]:
        return [await apod.get_date(target, thumb=thumb)]

    _run(action, api_key=api_key, as_json=as_json, output=output)


@app.command(name="range")
def date_range(
    start: str = typer.Argument(..., help="First day (YYYY-MM-DD)."),
    end: str | None = typer.Argument(None, help="Last day (YYYY-MM-DD), defaults to today."),
    thumb: bool = _THUMB,
    api_key: str | None = _API_KEY,
    as_json: bool = _JSON,
    output: Path | None = _OUTPUT,
) -> None:
    """All pictures between two days (inclusive)."""

    first = _parse_date(start)
    last = _parse_date(end) if end else None

    async def action(apod: Apod) -> list[PictureOfDay]:
        return await apod.get_range(first, last, thumb=thumb)

    _run(action, api_key=api_key, as_json=as_json, output=output)


def run() -> None:
    app()
