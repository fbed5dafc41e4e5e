"""Normalización de respuestas APOD.

Política de errores:
- Un cuerpo `null`, JSON inválido o con forma inesperada produce una lista
  vacía, sin excepción.
- Una fecha inválida dentro de un registro sí es fatal
  (`MalformedDateError`).
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import TypeAdapter, ValidationError

from core.domain.models import PictureOfDay, RawApod

_RAW_LIST = TypeAdapter(list[RawApod])


def _decode(body: str) -> Any:
    # JSONDecodeError es ValueError; también lo es un entero de más de 4300 dígitos.
    try:
        return json.loads(body)
    except (ValueError, RecursionError, TypeError):
        return None


def _raw_records(payload: Any, *, single: bool) -> list[RawApod]:
    if payload is None:
        return []
    try:
        if single:
            return [RawApod.model_validate(payload)]
        return _RAW_LIST.validate_python(payload)
    except ValidationError:
        return []


def map_response(body: str, *, single: bool) -> list[PictureOfDay]:
    """Convierte el cuerpo HTTP en cero o más `PictureOfDay`.

    `single=True` espera un objeto JSON (petición de un solo día sin rango);
    en otro caso espera un array de objetos.

    Raises:
        MalformedDateError: si algún registro trae una fecha inválida.
    """

    raws = _raw_records(_decode(body), single=single)
    return [PictureOfDay.from_raw(raw) for raw in raws]
