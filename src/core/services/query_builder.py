"""Construcción de la query de `planetary/apod`.

Orden fijo de parámetros: date, start_date, end_date, count, thumb y por
último api_key. Cada parámetro se omite cuando no aplica. No se valida
nada localmente: combinaciones inválidas las rechaza la API remota.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from core.domain.models import format_apod_date

APOD_ROUTE = "planetary/apod"


@dataclass(frozen=True)
class ApodQuery:
    """Consulta lógica: un día, un rango, N aleatorias o la de hoy."""

    date: dt.date | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    count: int = 1
    thumb: bool = False

    @property
    def expects_single(self) -> bool:
        """La API responde un objeto (no un array) para esta consulta."""

        return self.count == 1 and self.start_date is None and self.end_date is None


def build_query_string(query: ApodQuery, api_key: str) -> str:
    parts: list[str] = []
    if query.date is not None:
        parts.append(f"date={format_apod_date(query.date)}")
    if query.start_date is not None:
        parts.append(f"start_date={format_apod_date(query.start_date)}")
    if query.end_date is not None:
        parts.append(f"end_date={format_apod_date(query.end_date)}")
    if query.count != 1:
        parts.append(f"count={query.count}")
    if query.thumb:
        parts.append("thumb=true")
    # El token va siempre el último y sin codificar.
    parts.append(f"api_key={api_key}")
    return "&".join(parts)


def build_request_path(query: ApodQuery, api_key: str) -> str:
    """Ruta relativa a la base del servicio, con query incluida."""

    return f"{APOD_ROUTE}?{build_query_string(query, api_key)}"
