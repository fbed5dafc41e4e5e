"""Componentes de UI para CLI (Rich).

Separados de los comandos para reutilizar tablas/paneles.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import PictureOfDay


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (se omite en modo `--json`)."""

    title = Text("APOD-D2", style="bold cyan")
    subtitle = Text("Astronomy Picture of the Day • NASA API", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _rights(picture: PictureOfDay) -> Text:
    if picture.is_public_domain:
        return Text("public domain", style="green")
    return Text(f"© {picture.copyright.strip()}", style="yellow")


def build_pictures_table(pictures: list[PictureOfDay]) -> Table:
    """Tabla con una fila por registro."""

    table = Table(title="Astronomy Pictures of the Day")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Rights")
    table.add_column("URL", style="magenta")
    for picture in pictures:
        table.add_row(
            picture.date.isoformat(),
            picture.title or "-",
            _rights(picture),
            picture.hd_url or picture.url or "-",
        )
    return table


def build_picture_panel(picture: PictureOfDay) -> Panel:
    """Panel con el detalle de un registro."""

    title = Text(picture.title or "(untitled)", style="bold yellow")
    body = Text()
    body.append(f"{picture.date.isoformat()}\n", style="cyan")
    body.append_text(_rights(picture))
    body.append("\n\n")
    if picture.explanation:
        body.append(picture.explanation.strip() + "\n")
    if picture.url:
        body.append(f"\nURL: {picture.url}", style="dim")
    if picture.hd_url:
        body.append(f"\nHD:  {picture.hd_url}", style="dim")

    return Panel(body, title=title, border_style="yellow")
