"""Modelos del dominio (Pydantic v2).

Notas:
- `RawApod` refleja el JSON de la API tal cual llega (nombres del servicio).
- `PictureOfDay` es la entidad pública: inmutable, con `is_public_domain`
  derivado de `copyright` en construcción.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic.config import ConfigDict

from core.domain.errors import MalformedDateError

DATE_FORMAT = "%Y-%m-%d"


def parse_apod_date(value: object) -> dt.date:
    """Convierte `YYYY-MM-DD` en `date`; cualquier otra cosa es fatal."""

    if not isinstance(value, str):
        raise MalformedDateError(value)
    try:
        return dt.datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise MalformedDateError(value) from exc


def format_apod_date(value: dt.date) -> str:
    return value.strftime(DATE_FORMAT)


class RawApod(BaseModel):
    """Espejo del objeto JSON de `planetary/apod`.

    `media_type` y `service_version` se aceptan pero no pasan a la entidad.
    Los nombres distinguen mayúsculas/minúsculas.
    """

    model_config = ConfigDict(extra="ignore")

    copyright: str | None = None
    date: str | None = None
    explanation: str | None = None
    hdurl: str | None = None
    media_type: str | None = None
    service_version: str | None = None
    title: str | None = None
    url: str | None = None


class PictureOfDay(BaseModel):
    """Una entrada APOD normalizada."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    copyright: str | None = Field(
        default=None,
        description="Titular del copyright; ausente si la imagen es de dominio público.",
    )
    date: dt.date = Field(
        ...,
        description="Día en el que la imagen fue APOD.",
    )
    explanation: str | None = Field(
        default=None,
        description="Texto explicativo de la imagen.",
    )
    hd_url: str | None = Field(
        default=None,
        description="URL de la imagen en alta definición.",
    )
    url: str | None = Field(
        default=None,
        description="URL de la imagen en definición estándar (o del vídeo).",
    )
    title: str | None = Field(
        default=None,
        description="Título de la imagen.",
    )

    @field_validator("copyright")
    @classmethod
    def _blank_copyright_is_absent(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_public_domain(self) -> bool:
        return self.copyright is None

    @classmethod
    def from_raw(cls, raw: RawApod) -> "PictureOfDay":
        """Construye la entidad desde el objeto de la API.

        Raises:
            MalformedDateError: si `raw.date` falta o no es `YYYY-MM-DD`.
        """

        return cls(
            copyright=raw.copyright,
            date=parse_apod_date(raw.date),
            explanation=raw.explanation,
            hd_url=raw.hdurl,
            url=raw.url,
            title=raw.title,
        )
