"""Fuente APOD: fachada sobre `planetary/apod`.

Flujo de cada llamada:
- Permiso del rate limiter (si se deniega, `RateLimitExceeded` sin I/O).
- Query con `core.services.query_builder`.
- GET con el `httpx.AsyncClient` inyectado (`raise_for_status`).
- Mapeo con `core.services.response_mapper`.
"""

from __future__ import annotations

import datetime as dt
import logging

import httpx

from core.config import AppSettings
from core.domain.errors import EmptyResult, RateLimitExceeded
from core.domain.models import PictureOfDay
from core.interfaces.apod_source import ApodSource
from core.rate_limiter import SlidingWindowRateLimiter
from core.services.query_builder import ApodQuery, build_request_path
from core.services.response_mapper import map_response

logger = logging.getLogger(__name__)

REDACTED_KEY = "***"


def build_rate_limiter(settings: AppSettings | None = None) -> SlidingWindowRateLimiter:
    """Limiter con la política configurada (2000/h en 20 segmentos por defecto)."""

    settings = settings or AppSettings()
    return SlidingWindowRateLimiter(
        permit_limit=settings.rate_limit_permits,
        window_seconds=settings.rate_limit_window_seconds,
        segments_per_window=settings.rate_limit_segments,
        queue_limit=settings.rate_limit_queue,
    )


class Apod(ApodSource):
    """Cliente de Astronomy Picture of the Day.

    El cliente HTTP es del llamador y debe tener como `base_url` la raíz de
    la API (ver `adapters.http_client.build_async_client`). Cada instancia
    tiene su propio limiter salvo que se inyecte uno compartido.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        *,
        limiter: SlidingWindowRateLimiter | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._limiter = limiter or build_rate_limiter(settings)

    @property
    def limiter(self) -> SlidingWindowRateLimiter:
        return self._limiter

    async def get_today(self) -> PictureOfDay:
        return self._first(await self._fetch(ApodQuery(count=1)))

    async def get_random(self, count: int) -> list[PictureOfDay]:
        # count=1 se pide como count=2 y se recorta: la API no trata igual
        # "una aleatoria" que "dos aleatorias".
        if count == 1:
            return [self._first(await self._fetch(ApodQuery(count=2)))]
        return await self._fetch(ApodQuery(count=count))

    async def get_date(self, day: dt.date, *, thumb: bool = False) -> PictureOfDay:
        return self._first(await self._fetch(ApodQuery(date=day, thumb=thumb)))

    async def get_range(
        self,
        start: dt.date,
        end: dt.date | None = None,
        *,
        thumb: bool = False,
    ) -> list[PictureOfDay]:
        """APOD entre `start` y `end` (ambos incluidos; `end` por defecto hoy)."""

        return await self._fetch(ApodQuery(start_date=start, end_date=end, thumb=thumb))

    async def _fetch(self, query: ApodQuery) -> list[PictureOfDay]:
        if not self._limiter.try_acquire():
            raise RateLimitExceeded()

        path = build_request_path(query, self._api_key)
        logger.debug("GET %s", build_request_path(query, REDACTED_KEY))

        response = await self._client.get(path)
        response.raise_for_status()

        records = map_response(response.text, single=query.expects_single)
        logger.debug("APOD %s -> %d record(s)", response.status_code, len(records))
        return records

    @staticmethod
    def _first(records: list[PictureOfDay]) -> PictureOfDay:
        if not records:
            raise EmptyResult()
        return records[0]
