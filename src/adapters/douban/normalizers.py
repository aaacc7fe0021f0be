"""Normalizadores de las tres respuestas de Douban.

Cada feed (categorías, búsqueda por tag, recomendaciones) tiene su propio
esquema upstream; aquí se validan con Pydantic y se mapean a `DoubanItem`.
Un payload mal formado lanza `pydantic.ValidationError`.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from core.domain.models import (
    CategoryApiResponse,
    DoubanItem,
    ListApiResponse,
    Picture,
    Rating,
    RecommendApiResponse,
)

_YEAR_RE = re.compile(r"([0-9]{4})")

RECOMMEND_ITEM_TYPES: frozenset[str] = frozenset({"movie", "tv"})


def extract_year(subtitle: str | None) -> str:
    """Primer bloque de 4 dígitos de `card_subtitle` ("2024 / 美国 / ...")."""

    if not subtitle:
        return ""
    match = _YEAR_RE.search(subtitle)
    return match.group(1) if match else ""


def format_rate(rating: Rating | None) -> str:
    if rating is None or not rating.value:
        return ""
    # Redondeo "half up" sobre el valor binario exacto (7.25 -> "7.3").
    return str(Decimal(rating.value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def pick_poster(pic: Picture | None) -> str:
    if pic is None:
        return ""
    return pic.normal or pic.large or ""


def normalize_categories(payload: Any) -> list[DoubanItem]:
    data = CategoryApiResponse.model_validate(payload)
    return [
        DoubanItem(
            id=item.id,
            title=item.title or "",
            poster=pick_poster(item.pic),
            rate=format_rate(item.rating),
            year=extract_year(item.card_subtitle),
        )
        for item in data.items
    ]


def normalize_list(payload: Any) -> list[DoubanItem]:
    data = ListApiResponse.model_validate(payload)
    return [
        DoubanItem(
            id=item.id,
            title=item.title or "",
            poster=item.cover or "",
            rate=item.rate or "",
            year=extract_year(item.card_subtitle),
        )
        for item in data.subjects
    ]


def normalize_recommends(payload: Any) -> list[DoubanItem]:
    # El feed mezcla anuncios/doulists; solo quedan películas y series.
    data = RecommendApiResponse.model_validate(payload)
    return [
        DoubanItem(
            id=item.id,
            title=item.title or "",
            poster=pick_poster(item.pic),
            rate=format_rate(item.rating),
            year=item.year or "",
        )
        for item in data.items
        if item.type in RECOMMEND_ITEM_TYPES
    ]
