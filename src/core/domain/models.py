"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Cada esquema de Douban tiene su propio tipo explícito; nada de un dict
  "comodín" compartido por los tres feeds.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class DoubanItem(BaseModel):
    """Elemento canónico de catálogo.

    Todos los campos existen siempre (posiblemente vacíos) para que la UI
    nunca tenga que comprobar nulos.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Identificador de Douban.")
    title: str = Field(default="", description="Título mostrado.")
    poster: str = Field(default="", description="URL del póster.")
    rate: str = Field(default="", description="Nota con un decimal o vacía.")
    year: str = Field(default="", description="Año de 4 dígitos o vacío.")


class DoubanResult(BaseModel):
    """Envoltorio devuelto por las tres funciones públicas."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: int = Field(..., description="Código de estado lógico (200 en éxito).")
    message: str = Field(..., description="Mensaje localizado.")
    items: list[DoubanItem] = Field(
        default_factory=list,
        alias="list",
        description="Elementos normalizados.",
    )

    def to_payload(self) -> dict[str, object]:
        """Serializa con las claves del contrato (`code`, `message`, `list`)."""

        return self.model_dump(mode="json", by_alias=True)


# Parámetros de consulta: valores planos, nunca se mutan tras construirse.


@dataclass(frozen=True)
class DoubanCategoriesParams:
    kind: str
    category: str
    type: str
    page_limit: int = 20
    page_start: int = 0


@dataclass(frozen=True)
class DoubanListParams:
    tag: str
    type: str
    page_limit: int = 20
    page_start: int = 0


@dataclass(frozen=True)
class DoubanRecommendsParams:
    kind: str
    page_limit: int = 20
    page_start: int = 0
    category: str | None = None
    format: str | None = None
    region: str | None = None
    year: str | None = None
    platform: str | None = None
    sort: str | None = None


@dataclass(frozen=True)
class RecommendFilters:
    """Filtros de recomendación ya normalizados ("all"/"T" -> vacío)."""

    category: str = ""
    format: str = ""
    region: str = ""
    year: str = ""
    platform: str = ""
    sort: str = ""


class SelectedCategories(BaseModel):
    """Objeto `selected_categories` que espera la API de recomendaciones."""

    model_config = ConfigDict(populate_by_name=True)

    type_: str = Field(default="", alias="类型")
    form: str | None = Field(default=None, alias="形式")
    region: str | None = Field(default=None, alias="地区")


# Esquemas upstream.


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class Picture(_Upstream):
    large: str | None = None
    normal: str | None = None


class Rating(_Upstream):
    value: float | None = None


class CategorySubject(_Upstream):
    id: str
    title: str | None = None
    card_subtitle: str | None = None
    pic: Picture | None = None
    rating: Rating | None = None


class CategoryApiResponse(_Upstream):
    """`/rexxar/api/v2/subject/recent_hot/{kind}`"""

    total: int | None = None
    items: list[CategorySubject]


class ListSubject(_Upstream):
    id: str
    title: str | None = None
    card_subtitle: str | None = None
    cover: str | None = None
    rate: str | None = None


class ListApiResponse(_Upstream):
    """`/j/search_subjects`"""

    total: int | None = None
    subjects: list[ListSubject]


class RecommendSubject(_Upstream):
    id: str
    title: str | None = None
    year: str | None = None
    type: str | None = None
    pic: Picture | None = None
    rating: Rating | None = None


class RecommendApiResponse(_Upstream):
    """`/rexxar/api/v2/{kind}/recommend`"""

    total: int | None = None
    items: list[RecommendSubject]
