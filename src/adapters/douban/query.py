"""Validación de parámetros y construcción de URLs de Douban.

Funciones puras: no hacen I/O, así que los tests pueden comprobar URLs,
filtros y tags sin tocar la red.
"""

from __future__ import annotations

import json
from urllib.parse import urlencode

from core.domain.language import Language
from core.domain.models import (
    DoubanCategoriesParams,
    DoubanListParams,
    DoubanRecommendsParams,
    RecommendFilters,
    SelectedCategories,
)
from core.errors import ValidationError
from core.messages import t

SUPPORTED_KINDS: tuple[str, ...] = ("tv", "movie")

PAGE_LIMIT_MIN = 1
PAGE_LIMIT_MAX = 100

# Valores "sin filtro" que manda la UI de Douban.
ALL_SENTINEL = "all"
SORT_SENTINEL = "T"


def _validate_page(page_limit: int, page_start: int, language: Language | None) -> None:
    if page_limit < PAGE_LIMIT_MIN or page_limit > PAGE_LIMIT_MAX:
        raise ValidationError(t("page_limit_range", language))
    if page_start < 0:
        raise ValidationError(t("page_start_negative", language))


def validate_categories_params(params: DoubanCategoriesParams, language: Language | None = None) -> None:
    if params.kind not in SUPPORTED_KINDS:
        raise ValidationError(t("kind_invalid", language))
    if not params.category or not params.type:
        raise ValidationError(t("category_type_required", language))
    _validate_page(params.page_limit, params.page_start, language)


def validate_list_params(params: DoubanListParams, language: Language | None = None) -> None:
    if not params.tag or not params.type:
        raise ValidationError(t("tag_type_required", language))
    if params.type not in SUPPORTED_KINDS:
        raise ValidationError(t("type_invalid", language))
    _validate_page(params.page_limit, params.page_start, language)


def categories_url(params: DoubanCategoriesParams, mobile_api_base: str) -> str:
    query = urlencode(
        [
            ("start", params.page_start),
            ("limit", params.page_limit),
            ("category", params.category),
            ("type", params.type),
        ]
    )
    return f"{mobile_api_base.rstrip('/')}/rexxar/api/v2/subject/recent_hot/{params.kind}?{query}"


def list_url(params: DoubanListParams, web_base: str) -> str:
    query = urlencode(
        [
            ("type", params.type),
            ("tag", params.tag),
            ("sort", "recommend"),
            ("page_limit", params.page_limit),
            ("page_start", params.page_start),
        ]
    )
    return f"{web_base.rstrip('/')}/j/search_subjects?{query}"


def _drop_sentinel(value: str | None, sentinel: str) -> str:
    if not value or value == sentinel:
        return ""
    return value


def normalize_recommend_filters(params: DoubanRecommendsParams) -> RecommendFilters:
    """Reescribe "all"/"T" a vacío sin tocar los parámetros originales."""

    return RecommendFilters(
        category=_drop_sentinel(params.category, ALL_SENTINEL),
        format=_drop_sentinel(params.format, ALL_SENTINEL),
        region=_drop_sentinel(params.region, ALL_SENTINEL),
        year=_drop_sentinel(params.year, ALL_SENTINEL),
        platform=_drop_sentinel(params.platform, ALL_SENTINEL),
        sort=_drop_sentinel(params.sort, SORT_SENTINEL),
    )


def build_selected_categories(filters: RecommendFilters) -> SelectedCategories:
    return SelectedCategories(
        type_=filters.category,
        form=filters.format or None,
        region=filters.region or None,
    )


def build_tags(filters: RecommendFilters) -> list[str]:
    """Orden: categoría (o formato si no hay categoría), región, año, plataforma."""

    tags: list[str] = []
    if filters.category:
        tags.append(filters.category)
    elif filters.format:
        tags.append(filters.format)
    for value in (filters.region, filters.year, filters.platform):
        if value:
            tags.append(value)
    return tags


def recommends_url(params: DoubanRecommendsParams, mobile_api_base: str) -> str:
    filters = normalize_recommend_filters(params)
    selected = build_selected_categories(filters).model_dump(by_alias=True, exclude_none=True)

    pairs: list[tuple[str, object]] = [
        ("refresh", "0"),
        ("start", params.page_start),
        ("count", params.page_limit),
        ("selected_categories", json.dumps(selected, ensure_ascii=False, separators=(",", ":"))),
        ("uncollect", "false"),
        ("score_range", "0,10"),
        ("tags", ",".join(build_tags(filters))),
    ]
    if filters.sort:
        pairs.append(("sort", filters.sort))

    return f"{mobile_api_base.rstrip('/')}/rexxar/api/v2/{params.kind}/recommend?{urlencode(pairs)}"
