"""Errores del dominio APOD.

Los fallos de transporte (`httpx.HTTPError`) no se envuelven: llegan al
llamador tal cual los produce el cliente HTTP.
"""

from __future__ import annotations


class ApodError(Exception):
    """Base de todos los errores propios del cliente."""


class RateLimitExceeded(ApodError):
    """El limitador local denegó el permiso; no se hizo ninguna petición."""

    def __init__(self, message: str = "APOD rate limit hit, back off and retry later") -> None:
        super().__init__(message)


class EmptyResult(ApodError):
    """Se esperaba exactamente un registro y la respuesta no trajo ninguno."""

    def __init__(self, message: str = "APOD response contained no records") -> None:
        super().__init__(message)


class MalformedDateError(ApodError, ValueError):
    """La fecha de un registro no es una fecha de calendario válida."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid APOD date: {value!r}")
