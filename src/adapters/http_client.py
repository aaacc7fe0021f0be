"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers de navegador y políticas de proxy para Douban.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote

import httpx

from core.config import AppSettings
from core.errors import FetchTimeoutError
from core.messages import t

logger = logging.getLogger(__name__)

# Equivalente a encodeURIComponent: deja sin escapar A-Z a-z 0-9 - _ . ! ~ * ' ( )
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con headers de navegador de escritorio.

    Douban rechaza o altera las respuestas sin User-Agent/Referer "creíbles".
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Referer": settings.referer,
        "Accept": settings.accept,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def build_target_url(
    url: str,
    *,
    fallback_proxy: bool,
    proxy_url: str | None,
    fallback_base: str,
) -> str:
    """Calcula la URL final según el modo de transporte.

    - relay de fallback: prefijo sin codificar
    - proxy configurado: URL destino codificada como componente
    - sin proxy: directo
    """

    if fallback_proxy:
        return f"{fallback_base}{url}"
    if proxy_url is not None:
        return f"{proxy_url}{quote(url, safe=_URI_COMPONENT_SAFE)}"
    return url


async def fetch_with_timeout(
    url: str,
    *,
    fallback_proxy: bool = False,
    settings: AppSettings,
    proxy_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """GET con plazo global de `settings.http_timeout_seconds`.

    Devuelve la respuesta sea cual sea el status; comprobarlo es cosa del
    llamador. Si vence el plazo la request en curso se cancela y se lanza
    `FetchTimeoutError`.
    """

    final_url = build_target_url(
        url,
        fallback_proxy=fallback_proxy,
        proxy_url=proxy_url,
        fallback_base=settings.fallback_proxy_base,
    )
    timeout_s = settings.http_timeout_seconds
    logger.debug("GET %s (fallback_proxy=%s)", final_url, fallback_proxy)

    try:
        async with build_async_client(settings, transport=transport) as client:
            return await asyncio.wait_for(client.get(final_url), timeout=timeout_s)
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        raise FetchTimeoutError(t("timeout", settings.default_language, seconds=timeout_s)) from exc
