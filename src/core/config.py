"""Configuración del Core.

Responsabilidad:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/APOD) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_DIR_NAME = "apod-d2"
ENV_PREFIX = "APOD_D2_"


def get_user_config_dir() -> Path:
    """Carpeta donde `doctor setup-key` guarda la API key de NASA.

    Windows: `%APPDATA%/apod-d2`; macOS: `~/Library/Application Support/apod-d2`;
    resto: `$XDG_CONFIG_HOME/apod-d2` o `~/.config/apod-d2`.
    """

    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _read_apod_vars(text: str) -> dict[str, str]:
    """Variables `APOD_D2_*` de un .env; el resto de líneas se descarta."""

    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        key, sep, value = raw_line.strip().partition("=")
        key = key.strip()
        if not sep or not key.upper().startswith(ENV_PREFIX):
            continue
        data[key.upper()] = value.strip().strip('"').strip("'")
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Guarda claves `APOD_D2_*` (p.ej. la API key) en el .env del usuario.

    Mezcla con lo que ya hubiera; los valores `None` no tocan la clave.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    stored = _read_apod_vars(env_path.read_text(encoding="utf-8")) if env_path.exists() else {}
    stored.update({k.upper(): v for k, v in values.items() if v is not None})

    lines = ["# APOD-D2 user config: NASA API key and rate limit overrides"]
    lines.extend(f"{key}={stored[key]}" for key in sorted(stored))
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Los valores por defecto del rate limit reproducen la cuota de una API key
    personal de NASA: 2000 peticiones por hora, ventana de 20 segmentos.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key de api.nasa.gov (se añade tal cual a cada query).",
    )
    base_url: str = Field(
        default="https://api.nasa.gov/",
        min_length=8,
        description="Raíz del servicio remoto.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    rate_limit_permits: int = Field(
        default=2000,
        ge=1,
        description="Permisos máximos dentro de la ventana deslizante.",
    )
    rate_limit_window_seconds: float = Field(
        default=3600.0,
        gt=0,
        description="Duración de la ventana deslizante (segundos).",
    )
    rate_limit_segments: int = Field(
        default=20,
        ge=1,
        le=3600,
        description="Segmentos en los que se divide la ventana.",
    )
    rate_limit_queue: int = Field(
        default=1,
        ge=0,
        description="Permisos que pueden quedar en cola esperando.",
    )
