from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from adapters.douban import DoubanClient
from cli import main as cli_main
from core.config import AppSettings, write_user_env_vars

runner = CliRunner()


@pytest.fixture
def recorder(make_transport, monkeypatch, category_payload):
    recorder = make_transport(lambda request: httpx.Response(200, json=category_payload))

    monkeypatch.setattr(cli_main, "load_settings", lambda: AppSettings(_env_file=None))
    monkeypatch.setattr(
        cli_main,
        "build_client",
        lambda settings, *, on_failure: DoubanClient(settings, on_failure=on_failure, transport=recorder.transport),
    )
    return recorder


def test_categories_json_output(recorder) -> None:
    result = runner.invoke(
        cli_main.app,
        ["categories", "movie", "热门", "全部", "--proxy", "https://proxy.example/?url=", "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["code"] == 200
    assert payload["list"][0] == {"id": "36154853", "title": "好东西", "poster": "a.jpg", "rate": "8.6", "year": "2024"}
    assert recorder.requests[0].url.host == "proxy.example"


def test_output_file_is_written(recorder, tmp_path: Path) -> None:
    out = tmp_path / "out" / "hot.json"

    result = runner.invoke(
        cli_main.app,
        ["categories", "movie", "热门", "全部", "--proxy", "https://proxy.example/?url=", "-o", str(out)],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["message"] == "获取成功"
    assert len(data["list"]) == 2


def test_validation_error_exit_code(recorder) -> None:
    result = runner.invoke(cli_main.app, ["list", "热门", "music", "--lang", "en"])

    assert result.exit_code == 2
    assert recorder.requests == []


def test_transport_error_exit_code(make_transport, monkeypatch) -> None:
    failing = make_transport(lambda request: httpx.Response(500))
    monkeypatch.setattr(cli_main, "load_settings", lambda: AppSettings(_env_file=None))
    monkeypatch.setattr(
        cli_main,
        "build_client",
        lambda settings, *, on_failure: DoubanClient(settings, on_failure=on_failure, transport=failing.transport),
    )

    result = runner.invoke(cli_main.app, ["recommends", "tv", "--region", "韩国"])

    assert result.exit_code == 1
    # Servidor + relay, sin reintentos.
    assert len(failing.requests) == 2


def test_write_user_env_vars_sets_and_removes(tmp_path: Path) -> None:
    env_path = tmp_path / "cfg" / ".env"

    write_user_env_vars({"DOUBAN_CATALOG_PROXY_URL": "https://proxy.example/?url="}, env_path)
    assert "DOUBAN_CATALOG_PROXY_URL=https://proxy.example/?url=" in env_path.read_text(encoding="utf-8")

    write_user_env_vars({"DOUBAN_CATALOG_PROXY_URL": None}, env_path)
    assert "PROXY_URL" not in env_path.read_text(encoding="utf-8")
