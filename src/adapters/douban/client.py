"""Cliente del catálogo Douban (modo cliente / modo servidor).

Flujo por llamada:
- Con proxy configurado: request directa a Douban a través del proxy.
- Sin proxy: endpoint local `/api/douban/*`; si falla, una única request
  directa a Douban a través del relay CORS de fallback.

Nunca hay más de dos requests por llamada y nunca en paralelo.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx
import pydantic

from adapters.douban.normalizers import normalize_categories, normalize_list, normalize_recommends
from adapters.douban.query import (
    categories_url,
    list_url,
    recommends_url,
    validate_categories_params,
    validate_list_params,
)
from adapters.http_client import fetch_with_timeout
from core.config import AppSettings, settings_proxy_resolver
from core.domain.models import (
    DoubanCategoriesParams,
    DoubanItem,
    DoubanListParams,
    DoubanRecommendsParams,
    DoubanResult,
)
from core.errors import DoubanError, FetchTimeoutError, TransportError, UpstreamShapeError
from core.interfaces.catalog import CatalogSource, FailureListener, ProxyResolver
from core.messages import t

logger = logging.getLogger(__name__)

SUCCESS_CODE = 200


def _wrap_failure(exc: Exception, prefix: str) -> DoubanError:
    """Reclasifica `exc` con el prefijo localizado del pipeline."""

    message = f"{prefix}: {exc}"
    if isinstance(exc, FetchTimeoutError):
        return FetchTimeoutError(message, status_code=exc.status_code)
    if isinstance(exc, TransportError):
        return TransportError(message, status_code=exc.status_code)
    if isinstance(exc, httpx.HTTPError):
        return TransportError(message)
    return UpstreamShapeError(message)


class DoubanClient(CatalogSource):
    """Punto de entrada único para categorías, listas por tag y recomendaciones."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        proxy_resolver: ProxyResolver | None = None,
        on_failure: FailureListener | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._resolve_proxy = proxy_resolver or settings_proxy_resolver(self._settings)
        self._on_failure = on_failure
        self._transport = transport

    def should_use_client(self) -> bool:
        """Modo cliente si y solo si el resolver devuelve un proxy."""

        return self._resolve_proxy() is not None

    # -- API pública -------------------------------------------------------

    async def get_categories(self, params: DoubanCategoriesParams) -> DoubanResult:
        validate_categories_params(params, self._settings.default_language)
        if self.should_use_client():
            return await self.fetch_categories(params)

        result = await self._get_from_server(
            "/api/douban/categories",
            {
                "kind": params.kind,
                "category": params.category,
                "type": params.type,
                "limit": params.page_limit,
                "start": params.page_start,
            },
        )
        if result is None:
            return await self.fetch_categories(params, fallback_proxy=True)
        return result

    async def get_list(self, params: DoubanListParams) -> DoubanResult:
        validate_list_params(params, self._settings.default_language)
        if self.should_use_client():
            return await self.fetch_list(params)

        result = await self._get_from_server(
            "/api/douban",
            {
                "tag": params.tag,
                "type": params.type,
                "pageSize": params.page_limit,
                "pageStart": params.page_start,
            },
        )
        if result is None:
            return await self.fetch_list(params, fallback_proxy=True)
        return result

    async def get_recommends(self, params: DoubanRecommendsParams) -> DoubanResult:
        if self.should_use_client():
            return await self.fetch_recommends(params)

        result = await self._get_from_server(
            "/api/douban/recommands",
            {
                "kind": params.kind,
                "limit": params.page_limit,
                "start": params.page_start,
                "category": params.category or "",
                "format": params.format or "",
                "region": params.region or "",
                "year": params.year or "",
                "platform": params.platform or "",
                "sort": params.sort or "",
            },
        )
        if result is None:
            return await self.fetch_recommends(params, fallback_proxy=True)
        return result

    # -- Ruta cliente ------------------------------------------------------

    async def fetch_categories(
        self,
        params: DoubanCategoriesParams,
        fallback_proxy: bool = False,
    ) -> DoubanResult:
        validate_categories_params(params, self._settings.default_language)
        target = categories_url(params, self._settings.mobile_api_base)
        return await self._run_pipeline(
            target,
            fallback_proxy=fallback_proxy,
            normalize=normalize_categories,
            failure_key="categories_failed",
            notify=True,
        )

    async def fetch_list(
        self,
        params: DoubanListParams,
        fallback_proxy: bool = False,
    ) -> DoubanResult:
        validate_list_params(params, self._settings.default_language)
        target = list_url(params, self._settings.web_base)
        return await self._run_pipeline(
            target,
            fallback_proxy=fallback_proxy,
            normalize=normalize_list,
            failure_key="list_failed",
            notify=True,
        )

    async def fetch_recommends(
        self,
        params: DoubanRecommendsParams,
        fallback_proxy: bool = False,
    ) -> DoubanResult:
        # Sin validación: los filtros vienen de la UI de Douban tal cual.
        target = recommends_url(params, self._settings.mobile_api_base)
        logger.debug("douban recommend target: %s", target)
        return await self._run_pipeline(
            target,
            fallback_proxy=fallback_proxy,
            normalize=normalize_recommends,
            failure_key="recommends_failed",
            notify=False,
        )

    # -- Internos ----------------------------------------------------------

    async def _run_pipeline(
        self,
        target: str,
        *,
        fallback_proxy: bool,
        normalize: Callable[[Any], list[DoubanItem]],
        failure_key: str,
        notify: bool,
    ) -> DoubanResult:
        language = self._settings.default_language
        proxy_url = None if fallback_proxy else self._resolve_proxy()

        try:
            response = await fetch_with_timeout(
                target,
                fallback_proxy=fallback_proxy,
                settings=self._settings,
                proxy_url=proxy_url,
                transport=self._transport,
            )
            if not response.is_success:
                raise TransportError(
                    t("http_error", language, status=response.status_code),
                    status_code=response.status_code,
                )
            items = normalize(response.json())
        except Exception as exc:
            prefix = t(failure_key, language)
            logger.debug("%s (target=%s)", prefix, target, exc_info=True)
            if notify and self._on_failure is not None:
                self._on_failure(prefix)
            raise _wrap_failure(exc, prefix) from exc

        return DoubanResult(code=SUCCESS_CODE, message=t("success", language), items=items)

    async def _get_from_server(self, path: str, query: dict[str, Any]) -> DoubanResult | None:
        """Llama al endpoint local. Devuelve `None` cuando hay que usar el relay."""

        url = f"{self._settings.server_base_url.rstrip('/')}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.http_timeout_seconds),
                headers={"Accept": "application/json"},
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=query)
        except httpx.HTTPError as exc:
            logger.warning("server endpoint %s unreachable (%s); falling back to relay", path, exc)
            return None

        if not response.is_success:
            logger.warning(
                "server endpoint %s returned HTTP %s; falling back to relay",
                path,
                response.status_code,
            )
            return None

        try:
            return DoubanResult.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as exc:
            raise UpstreamShapeError(f"{path}: {exc}") from exc
