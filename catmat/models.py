"""CATMAT Preços Pydantic models for type-safe data validation.

Wire names follow the compras.gov.br API and the public JSON contract
(Portuguese camelCase); Python attributes are snake_case.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogItem(BaseModel):
    """One CATMAT material: catalog code and description."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "codigo": "150123",
                "descricao": "CADEIRA GIRATÓRIA, ESTOFADA, COM BRAÇOS",
            }
        },
    )

    codigo: str
    descricao: str


class CatalogPage(BaseModel):
    """Paginated slice of the catalog."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    pagina: int
    total_paginas: int
    total_itens: int
    resultados: list[CatalogItem] = Field(default_factory=list)


class PriceObservation(BaseModel):
    """One purchase price reported by the price research API.

    Every field is optional: the upstream payload is not guaranteed to carry
    all of them, and unknown fields are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    preco_unitario: Any = None
    nome_unidade_fornecimento: str | None = None
    marca: str | None = None
    estado: str | None = None
    data_compra: str | None = None
    nome_orgao: str | None = None
    quantidade: Any = None
    nome_fornecedor: str | None = None
    municipio: str | None = None
    criterio_julgamento: str | None = None


class FormattedObservation(PriceObservation):
    """Client-facing observation with the unit price rendered as BRL."""

    preco_unitario: str | None = None


class PriceSummary(BaseModel):
    """Formatted statistics over the filtered observations."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    media: str
    mediana: str
    minimo: str
    maximo: str
    ano_filtro: str | None = None
    total_registros: int = 0
    precos_validos: int = 0  # 0 means min/max/mean/median defaulted to zero


class PriceReport(BaseModel):
    """Response of a price lookup: summary plus ordered detail rows."""

    estatisticas: PriceSummary
    dados: list[FormattedObservation] = Field(default_factory=list)
