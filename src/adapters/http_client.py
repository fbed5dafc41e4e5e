"""Wrapper de httpx.

- Estandariza base URL y timeouts; sin headers propios salvo los de httpx.
- Se puede sustituir por un cliente con `httpx.MockTransport` en tests.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando a la raíz de la API.

    El cliente es del llamador: debe cerrarlo (`async with` o `aclose`).
    """

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=extra_headers,
        transport=transport,
    )
