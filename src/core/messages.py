"""Catálogo de mensajes localizados.

Por qué un catálogo:
- Los mensajes de éxito/error forman parte del contrato visible (UI).
- Evita strings sueltos en adapters y permite servir en/zh desde un solo sitio.
"""

from __future__ import annotations

from core.domain.language import Language

_MESSAGES: dict[str, dict[Language, str]] = {
    "success": {
        Language.CHINESE: "获取成功",
        Language.ENGLISH: "Success",
    },
    "kind_invalid": {
        Language.CHINESE: "kind 参数必须是 tv 或 movie",
        Language.ENGLISH: "kind must be tv or movie",
    },
    "type_invalid": {
        Language.CHINESE: "type 参数必须是 tv 或 movie",
        Language.ENGLISH: "type must be tv or movie",
    },
    "category_type_required": {
        Language.CHINESE: "category 和 type 参数不能为空",
        Language.ENGLISH: "category and type must not be empty",
    },
    "tag_type_required": {
        Language.CHINESE: "tag 和 type 参数不能为空",
        Language.ENGLISH: "tag and type must not be empty",
    },
    "page_limit_range": {
        Language.CHINESE: "pageLimit 必须在 1-100 之间",
        Language.ENGLISH: "pageLimit must be between 1 and 100",
    },
    "page_start_negative": {
        Language.CHINESE: "pageStart 不能小于 0",
        Language.ENGLISH: "pageStart must not be negative",
    },
    "categories_failed": {
        Language.CHINESE: "获取豆瓣分类数据失败",
        Language.ENGLISH: "Failed to fetch Douban categories",
    },
    "list_failed": {
        Language.CHINESE: "获取豆瓣列表数据失败",
        Language.ENGLISH: "Failed to fetch Douban list",
    },
    "recommends_failed": {
        Language.CHINESE: "获取豆瓣推荐数据失败",
        Language.ENGLISH: "Failed to fetch Douban recommendations",
    },
    "http_error": {
        Language.CHINESE: "HTTP error! Status: {status}",
        Language.ENGLISH: "HTTP error! Status: {status}",
    },
    "timeout": {
        Language.CHINESE: "请求超时 ({seconds}s)",
        Language.ENGLISH: "Request timed out after {seconds}s",
    },
}


def t(key: str, language: Language | None = None, **kwargs: object) -> str:
    """Resuelve `key` en el idioma pedido (por defecto chino)."""

    language = language or Language.default()
    template = _MESSAGES[key][language]
    return template.format(**kwargs) if kwargs else template
