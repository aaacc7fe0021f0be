from __future__ import annotations

from typing import Any

import pydantic
import pytest

from adapters.douban.normalizers import (
    extract_year,
    format_rate,
    normalize_categories,
    normalize_list,
    normalize_recommends,
)
from core.domain.models import DoubanItem, Rating


@pytest.mark.parametrize(
    "subtitle,expected",
    [
        ("2024-01 / ...", "2024"),
        ("美国 / 1994 / 剧情", "1994"),
        ("美国 / 剧情", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_extract_year(subtitle: str | None, expected: str) -> None:
    assert extract_year(subtitle) == expected


def test_format_rate() -> None:
    assert format_rate(Rating(value=8.567)) == "8.6"
    assert format_rate(Rating(value=9)) == "9.0"
    assert format_rate(Rating(value=7.25)) == "7.3"
    assert format_rate(Rating(value=0)) == ""
    assert format_rate(Rating()) == ""
    assert format_rate(None) == ""


def test_categories_mapping(category_payload: dict[str, Any]) -> None:
    first, second = normalize_categories(category_payload)

    assert first == DoubanItem(id="36154853", title="好东西", poster="a.jpg", rate="8.6", year="2024")
    assert second.poster == "b.jpg"
    assert second.id == "1292052"
    assert second.rate == ""
    assert second.year == ""


def test_categories_missing_pic_gives_empty_poster() -> None:
    (item,) = normalize_categories({"items": [{"id": "1", "title": "x"}]})

    assert item.poster == ""
    assert item.model_dump() == {"id": "1", "title": "x", "poster": "", "rate": "", "year": ""}


def test_list_mapping(list_payload: dict[str, Any]) -> None:
    first, second = normalize_list(list_payload)

    assert first == DoubanItem(id="35267224", title="繁花", poster="cover.jpg", rate="8.7", year="2023")
    assert second.rate == ""
    assert second.year == ""


def test_recommends_filters_types_and_keeps_year(recommend_payload: dict[str, Any]) -> None:
    items = normalize_recommends(recommend_payload)

    assert [item.id for item in items] == ["1", "3"]
    assert items[0] == DoubanItem(id="1", title="电影", poster="m.jpg", rate="7.3", year="2021")
    assert items[1].poster == "t.jpg"
    assert items[1].rate == ""
    assert items[1].year == "2019"


def test_recommends_year_is_not_extracted() -> None:
    (item,) = normalize_recommends({"items": [{"id": "1", "type": "movie", "year": "约 1999 年"}]})

    assert item.year == "约 1999 年"


@pytest.mark.parametrize(
    "normalize,payload",
    [
        (normalize_categories, {"total": 0}),
        (normalize_list, {"items": []}),
        (normalize_recommends, {"items": [{"title": "no id"}]}),
    ],
)
def test_missing_fields_raise(normalize, payload: dict[str, Any]) -> None:
    with pytest.raises(pydantic.ValidationError):
        normalize(payload)
