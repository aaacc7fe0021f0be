"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli.ui_components import print_banner
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and proxy configuration.")

_console = Console()

_PROXY_ENV_KEY = "DOUBAN_CATALOG_PROXY_URL"


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show the transport mode in use."""

    print_banner(_console)
    settings = AppSettings()

    table = Table(title="douban-catalog Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.proxy_url:
        table.add_row("Mode", "CLIENT", f"proxy {settings.proxy_url}")
    else:
        table.add_row("Mode", "SERVER", f"{settings.server_base_url} (relay fallback {settings.fallback_proxy_base})")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Language", "OK", settings.default_language.label())

    # Connectivity (best-effort)
    ok_server, detail_server = asyncio.run(_check_http(f"{settings.server_base_url.rstrip('/')}/api/douban", settings))
    table.add_row("Server endpoint", "OK" if ok_server else "FAIL", detail_server)

    ok_upstream, detail_upstream = asyncio.run(_check_http(settings.web_base, settings))
    table.add_row("Douban upstream", "OK" if ok_upstream else "FAIL", detail_upstream)

    _console.print(table)

    if not ok_server and not settings.proxy_url:
        _console.print(
            "\n[yellow]Note:[/yellow] Without a server endpoint every request goes through the public relay."
        )


@app.command(name="set-proxy")
def set_proxy(proxy_url: str = typer.Argument(..., help="Proxy base; the target URL is appended encoded.")) -> None:
    """Store a proxy URL in the user config .env (enables client mode)."""

    proxy_url = proxy_url.strip()
    if not proxy_url.startswith(("http://", "https://")):
        raise typer.BadParameter("proxy URL must start with http:// or https://")

    env_path = write_user_env_vars({_PROXY_ENV_KEY: proxy_url})
    _console.print(f"[green]Saved proxy to:[/green] {env_path}")


@app.command(name="clear-proxy")
def clear_proxy() -> None:
    """Remove the stored proxy URL (back to server mode)."""

    env_path = write_user_env_vars({_PROXY_ENV_KEY: None})
    _console.print(f"[green]Proxy removed from:[/green] {env_path}")
