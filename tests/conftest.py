"""Fixtures compartidas: reloj falso y servidor APOD simulado (httpx.MockTransport)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from adapters.http_client import build_async_client
from core.config import AppSettings


def user_env_file(root) -> Path:
    return root / "xdg" / "apod-d2" / ".env"


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeApodServer:
    """Responde siempre con el mismo cuerpo y guarda las peticiones."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = "null"

    def respond_json(self, payload: Any, status_code: int = 200) -> None:
        self.body = json.dumps(payload)
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)

    def client(self) -> httpx.AsyncClient:
        settings = AppSettings(base_url="https://api.nasa.gov/")
        return build_async_client(settings, transport=httpx.MockTransport(self.handler))

    @property
    def last_params(self) -> httpx.QueryParams:
        return self.requests[-1].url.params


def apod_item(day: str = "2023-05-01", **overrides: Any) -> dict[str, Any]:
    item: dict[str, Any] = {
        "date": day,
        "explanation": "A spiral galaxy.",
        "hdurl": f"https://apod.nasa.gov/apod/image/{day}_hd.jpg",
        "media_type": "image",
        "service_version": "v1",
        "title": f"Galaxy {day}",
        "url": f"https://apod.nasa.gov/apod/image/{day}.jpg",
    }
    item.update(overrides)
    return item


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def apod_server() -> FakeApodServer:
    return FakeApodServer()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Sin .env del proyecto, del usuario ni variables APOD_D2_* del entorno real."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    # `env_file` se resolvió al importar `core.config`.
    monkeypatch.setitem(AppSettings.model_config, "env_file", (".env", str(user_env_file(tmp_path))))
    for name in (
        "APOD_D2_API_KEY",
        "APOD_D2_BASE_URL",
        "APOD_D2_HTTP_TIMEOUT_SECONDS",
        "APOD_D2_RATE_LIMIT_PERMITS",
        "APOD_D2_RATE_LIMIT_WINDOW_SECONDS",
        "APOD_D2_RATE_LIMIT_SEGMENTS",
        "APOD_D2_RATE_LIMIT_QUEUE",
    ):
        monkeypatch.delenv(name, raising=False)
