"""Contratos del catálogo Douban.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el cliente real por un stub en UI/tests, e inyectar el
  resolver de proxy y el listener de fallos sin tocar estado global.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import (
    DoubanCategoriesParams,
    DoubanListParams,
    DoubanRecommendsParams,
    DoubanResult,
)


class ProxyResolver(Protocol):
    """Devuelve la base del proxy configurado o `None` (acceso directo/servidor)."""

    def __call__(self) -> str | None: ...


class FailureListener(Protocol):
    """Recibe un mensaje legible cuando un pipeline falla (banner/toast global)."""

    def __call__(self, message: str) -> None: ...


@runtime_checkable
class CatalogSource(Protocol):
    """Contrato mínimo de una fuente de catálogo.

    Reglas de diseño:
    - Los métodos son asíncronos porque hacen I/O (HTTP).
    - Siempre devuelven un `DoubanResult` normalizado o lanzan `DoubanError`.
    """

    async def get_categories(self, params: DoubanCategoriesParams) -> DoubanResult:
        ...

    async def get_list(self, params: DoubanListParams) -> DoubanResult:
        ...

    async def get_recommends(self, params: DoubanRecommendsParams) -> DoubanResult:
        ...
