"""Exportación JSON de registros APOD.

Formato estable (claves ordenadas, UTF-8) para poder diffear exportaciones.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import PictureOfDay


def pictures_to_json(pictures: Iterable[PictureOfDay]) -> str:
    payload = [picture.model_dump(mode="json") for picture in pictures]
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_pictures_json(*, pictures: Iterable[PictureOfDay], output_path: Path) -> Path:
    """Exporta una lista de `PictureOfDay` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(pictures_to_json(pictures), encoding="utf-8")
    return output_path
