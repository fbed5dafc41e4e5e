"""Contrato de una fuente APOD.

Reglas de diseño:
- Todas las operaciones son asíncronas porque hacen I/O (HTTP).
- Cada llamada consume un permiso del rate limiter de la fuente.
"""

from __future__ import annotations

import datetime as dt
from typing import Protocol, runtime_checkable

from core.domain.models import PictureOfDay


@runtime_checkable
class ApodSource(Protocol):
    """Operaciones mínimas sobre Astronomy Picture of the Day."""

    async def get_today(self) -> PictureOfDay:
        """Devuelve la APOD de hoy."""

        ...

    async def get_random(self, count: int) -> list[PictureOfDay]:
        """Devuelve `count` APOD aleatorias."""

        ...

    async def get_date(self, day: dt.date, *, thumb: bool = False) -> PictureOfDay:
        ...

    async def get_range(
        self,
        start: dt.date,
        end: dt.date | None = None,
        *,
        thumb: bool = False,
    ) -> list[PictureOfDay]:
        ...
