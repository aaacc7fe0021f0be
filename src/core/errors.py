"""Errores del dominio.

Por qué una jerarquía propia:
- La CLI y los consumidores distinguen input inválido (antes de I/O) de fallos
  de transporte o de forma de la respuesta sin inspeccionar mensajes.
- Los mensajes ya vienen localizados; la causa original queda en `__cause__`.
"""

from __future__ import annotations


class DoubanError(Exception):
    """Base de todos los errores del catálogo."""


class ValidationError(DoubanError, ValueError):
    """Parámetros del llamador inválidos. Se lanza antes de cualquier request."""


class TransportError(DoubanError):
    """Status HTTP no-OK o fallo de red."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchTimeoutError(TransportError):
    """El upstream no respondió dentro del plazo configurado."""


class UpstreamShapeError(DoubanError):
    """JSON inválido o campos esperados ausentes en la respuesta de Douban."""
