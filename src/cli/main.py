"""CLI principal (Typer + Rich).

Por qué la CLI es delgada:
- Toda la lógica de transporte/normalización vive en `adapters.douban`.
- Aquí solo se traducen flags a parámetros, se registra el listener de fallos
  y se presenta el resultado (tabla, JSON o fichero).
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.douban import DoubanClient
from adapters.json_exporter import export_result_json
from cli import doctor
from cli.ui_components import build_items_table
from core.config import AppSettings
from core.domain.language import Language
from core.domain.models import (
    DoubanCategoriesParams,
    DoubanListParams,
    DoubanRecommendsParams,
    DoubanResult,
)
from core.errors import DoubanError, ValidationError


app = typer.Typer(no_args_is_help=True, help="Douban movie/TV catalog listings.")
app.add_typer(doctor.app, name="doctor")


_console = Console()
_err_console = Console(stderr=True)


def load_settings() -> AppSettings:
    return AppSettings()


def build_client(settings: AppSettings, *, on_failure: Callable[[str], None]) -> DoubanClient:
    return DoubanClient(settings, on_failure=on_failure)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _report_failure(message: str) -> None:
    _err_console.print(f"[red]{message}[/red]")


def _execute(
    call: Callable[[DoubanClient], Awaitable[DoubanResult]],
    *,
    title: str,
    proxy: str | None,
    language: Language | None,
    as_json: bool,
    output: Path | None,
    verbose: bool,
) -> None:
    settings = load_settings()
    _configure_logging("DEBUG" if verbose else settings.log_level)

    overrides: dict[str, object] = {}
    if proxy:
        overrides["proxy_url"] = proxy
    if language is not None:
        overrides["default_language"] = language
    if overrides:
        settings = settings.model_copy(update=overrides)

    client = build_client(settings, on_failure=_report_failure)
    try:
        result = asyncio.run(call(client))
    except ValidationError as exc:
        _err_console.print(f"[yellow]{exc}[/yellow]")
        raise typer.Exit(code=2) from exc
    except DoubanError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if output is not None:
        path = export_result_json(result=result, output_path=output)
        _err_console.print(f"[green]Saved:[/green] {path}")

    if as_json:
        typer.echo(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
    else:
        _console.print(build_items_table(result, title=title))


def _proxy_opt() -> Any:
    return typer.Option(None, "--proxy", help="Proxy base URL (forces client mode).")


def _json_opt() -> Any:
    return typer.Option(False, "--json", help="Print the raw result as JSON.")


def _output_opt() -> Any:
    return typer.Option(None, "--output", "-o", help="Also write the result to a JSON file.")


def _lang_opt() -> Any:
    return typer.Option(None, "--lang", help="Message language (zh/en).")


def _verbose_opt() -> Any:
    return typer.Option(False, "--verbose", "-v", help="Debug logging.")


@app.command()
def categories(
    kind: str = typer.Argument(..., help="tv | movie"),
    category: str = typer.Argument(..., help="e.g. 热门, 最新, tv, show"),
    type_: str = typer.Argument(..., metavar="TYPE", help="e.g. 全部, 华语, tv_domestic"),
    limit: int = typer.Option(20, "--limit", help="Page size (1-100)."),
    start: int = typer.Option(0, "--start", help="Offset."),
    proxy: Optional[str] = _proxy_opt(),
    as_json: bool = _json_opt(),
    output: Optional[Path] = _output_opt(),
    lang: Optional[Language] = _lang_opt(),
    verbose: bool = _verbose_opt(),
) -> None:
    """Recent-hot listings by category."""

    params = DoubanCategoriesParams(kind=kind, category=category, type=type_, page_limit=limit, page_start=start)
    _execute(
        lambda client: client.get_categories(params),
        title=f"{category} / {type_}",
        proxy=proxy,
        language=lang,
        as_json=as_json,
        output=output,
        verbose=verbose,
    )


@app.command(name="list")
def list_by_tag(
    tag: str = typer.Argument(..., help="e.g. 热门, 经典, 豆瓣高分"),
    type_: str = typer.Argument(..., metavar="TYPE", help="tv | movie"),
    limit: int = typer.Option(20, "--limit", help="Page size (1-100)."),
    start: int = typer.Option(0, "--start", help="Offset."),
    proxy: Optional[str] = _proxy_opt(),
    as_json: bool = _json_opt(),
    output: Optional[Path] = _output_opt(),
    lang: Optional[Language] = _lang_opt(),
    verbose: bool = _verbose_opt(),
) -> None:
    """Tag search listings."""

    params = DoubanListParams(tag=tag, type=type_, page_limit=limit, page_start=start)
    _execute(
        lambda client: client.get_list(params),
        title=f"{tag} ({type_})",
        proxy=proxy,
        language=lang,
        as_json=as_json,
        output=output,
        verbose=verbose,
    )


@app.command()
def recommends(
    kind: str = typer.Argument(..., help="tv | movie"),
    category: str = typer.Option("all", "--category", help="类型 filter ('all' = none)."),
    format_: str = typer.Option("all", "--format", help="形式 filter ('all' = none)."),
    region: str = typer.Option("all", "--region", help="地区 filter ('all' = none)."),
    year: str = typer.Option("all", "--year", help="Year/decade filter ('all' = none)."),
    platform: str = typer.Option("all", "--platform", help="Platform filter ('all' = none)."),
    sort: str = typer.Option("T", "--sort", help="Sort key ('T' = default)."),
    limit: int = typer.Option(20, "--limit", help="Page size."),
    start: int = typer.Option(0, "--start", help="Offset."),
    proxy: Optional[str] = _proxy_opt(),
    as_json: bool = _json_opt(),
    output: Optional[Path] = _output_opt(),
    lang: Optional[Language] = _lang_opt(),
    verbose: bool = _verbose_opt(),
) -> None:
    """Filtered recommendations."""

    params = DoubanRecommendsParams(
        kind=kind,
        page_limit=limit,
        page_start=start,
        category=category,
        format=format_,
        region=region,
        year=year,
        platform=platform,
        sort=sort,
    )
    _execute(
        lambda client: client.get_recommends(params),
        title=f"{kind} recommendations",
        proxy=proxy,
        language=lang,
        as_json=as_json,
        output=output,
        verbose=verbose,
    )


def run() -> None:
    app()
