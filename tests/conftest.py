from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings


class RecordingTransport:
    """`httpx.MockTransport` que guarda cada request recibida."""

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        return self._handler(request)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def make_transport() -> Callable[[Callable[[httpx.Request], Any]], RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def category_payload() -> dict[str, Any]:
    return {
        "total": 2,
        "items": [
            {
                "id": "36154853",
                "title": "好东西",
                "card_subtitle": "2024-01 / 中国大陆 / 剧情 喜剧",
                "pic": {"large": "large.jpg", "normal": "a.jpg"},
                "rating": {"value": 8.567},
            },
            {
                "id": 1292052,
                "title": "肖申克的救赎",
                "card_subtitle": "美国 / 剧情",
                "pic": {"large": "b.jpg"},
                "rating": None,
            },
        ],
    }


@pytest.fixture
def list_payload() -> dict[str, Any]:
    return {
        "subjects": [
            {
                "id": "35267224",
                "title": "繁花",
                "card_subtitle": "2023 / 中国大陆 / 剧情",
                "cover": "cover.jpg",
                "rate": "8.7",
            },
            {"id": "1", "title": "无评分", "cover": "c2.jpg", "rate": ""},
        ]
    }


@pytest.fixture
def recommend_payload() -> dict[str, Any]:
    return {
        "total": 3,
        "items": [
            {
                "id": "1",
                "title": "电影",
                "year": "2021",
                "type": "movie",
                "pic": {"normal": "m.jpg"},
                "rating": {"value": 7.25},
            },
            {"id": "2", "title": "豆列", "type": "doulist"},
            {
                "id": "3",
                "title": "剧集",
                "year": "2019",
                "type": "tv",
                "pic": {"large": "t.jpg"},
                "rating": {"value": 0},
            },
        ],
    }
