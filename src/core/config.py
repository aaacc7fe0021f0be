"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El proxy de Douban se resuelve una sola vez y se inyecta en el cliente,
  en vez de leerse de estado global en cada llamada.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language

DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "douban-catalog"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "douban-catalog"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "douban-catalog"
    return Path.home() / ".config" / "douban-catalog"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Un valor `None` elimina la clave (p.ej. para desactivar el proxy).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    for key, value in values.items():
        if value is None:
            existing.pop(key, None)
        else:
            existing[key] = value

    lines = ["# douban-catalog user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOUBAN_CATALOG_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Plazo máximo por request a Douban (segundos).",
    )
    user_agent: str = Field(
        default=DESKTOP_USER_AGENT,
        min_length=1,
        description="User-Agent de navegador de escritorio; Douban rechaza clientes 'raros'.",
    )
    referer: str = Field(
        default="https://movie.douban.com/",
        min_length=1,
        description="Referer enviado a Douban.",
    )
    accept: str = Field(
        default="application/json, text/plain, */*",
        min_length=1,
        description="Cabecera Accept de las peticiones a Douban.",
    )

    proxy_url: str | None = Field(
        default=None,
        description="Proxy propio (la URL destino se concatena codificada). Activa el modo cliente.",
    )
    fallback_proxy_base: str = Field(
        default="https://cors-anywhere.com/",
        min_length=8,
        description="Relay CORS público usado cuando el endpoint del servidor falla.",
    )
    server_base_url: str = Field(
        default="http://localhost:3000",
        min_length=8,
        description="Base del servidor que expone /api/douban/*.",
    )

    mobile_api_base: str = Field(
        default="https://m.douban.com",
        min_length=8,
        description="Host de la API móvil (rexxar).",
    )
    web_base: str = Field(
        default="https://movie.douban.com",
        min_length=8,
        description="Host web de Douban Movie.",
    )

    default_language: Language = Field(
        default=Language.CHINESE,
        description="Idioma de los mensajes devueltos (zh/en).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI.",
    )

    @field_validator("proxy_url", mode="before")
    @classmethod
    def _blank_proxy_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def settings_proxy_resolver(settings: AppSettings) -> Callable[[], str | None]:
    """Devuelve un resolver sin argumentos ligado a `settings.proxy_url`."""

    proxy_url = settings.proxy_url

    def resolve() -> str | None:
        return proxy_url

    return resolve
