"""Pytest configuration and fixtures for CATMAT Preços tests.

Provides common fixtures for testing.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from catmat.catalog.snapshot import CatalogSnapshot
from catmat.config import reset_config
from catmat.models import CatalogItem


@pytest.fixture
def catalog_items() -> list[CatalogItem]:
    """Small catalog with accents and mixed case."""
    return [
        CatalogItem(codigo="150123", descricao="CADEIRA GIRATÓRIA, ESTOFADA"),
        CatalogItem(codigo="243756", descricao="água mineral, sem gás"),
        CatalogItem(codigo="150987", descricao="Cadeira fixa, polipropileno"),
        CatalogItem(codigo="301234", descricao="Abacaxi em calda"),
        CatalogItem(codigo="410000", descricao="Agulha descartável"),
        CatalogItem(codigo="999150", descricao="Mesa de reunião"),
    ]


@pytest.fixture
def catalog_snapshot(catalog_items: list[CatalogItem]) -> CatalogSnapshot:
    return CatalogSnapshot(catalog_items)


@pytest.fixture
def large_snapshot() -> CatalogSnapshot:
    """250 items: three pages of 100."""
    return CatalogSnapshot(
        CatalogItem(codigo=str(100000 + i), descricao=f"Item {i:03d}") for i in range(250)
    )


@pytest.fixture
def sample_observations() -> list[dict]:
    """Raw records shaped like the price API `resultado` list."""
    return [
        {
            "precoUnitario": 30.0,
            "nomeUnidadeFornecimento": "UNIDADE",
            "marca": "Marca C",
            "estado": "SP",
            "dataCompra": "2023-08-01",
            "nomeOrgao": "Ministério C",
            "quantidade": 5,
            "nomeFornecedor": "Fornecedor C",
            "municipio": "São Paulo",
            "criterioJulgamento": "Menor Preço",
        },
        {
            "precoUnitario": 10.0,
            "nomeUnidadeFornecimento": "UNIDADE",
            "marca": "Marca A",
            "estado": "DF",
            "dataCompra": "2023-02-10",
            "nomeOrgao": "Ministério A",
            "quantidade": 10,
            "nomeFornecedor": "Fornecedor A",
            "municipio": "Brasília",
            "criterioJulgamento": "Menor Preço",
        },
        {
            "precoUnitario": 20.0,
            "nomeUnidadeFornecimento": "UNIDADE",
            "marca": "Marca B",
            "estado": "RJ",
            "dataCompra": "2023-05-20T00:00:00",
            "nomeOrgao": "Ministério B",
            "quantidade": 1,
            "nomeFornecedor": "Fornecedor B",
            "municipio": "Rio de Janeiro",
            "criterioJulgamento": "Maior Desconto",
        },
    ]


@pytest.fixture
def mock_gateway(sample_observations: list[dict]) -> AsyncMock:
    """Price gateway returning sample_observations."""
    gateway = AsyncMock()
    gateway.fetch_observations.return_value = sample_observations
    return gateway


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up test environment variables."""
    for name in (
        "PORT",
        "HOST",
        "TOKEN",
        "PRICE_API_URL",
        "PRICE_API_TIMEOUT",
        "PRICE_API_PAGE_SIZE",
        "CATALOG_SOURCE",
        "CATALOG_CACHE",
        "JSON_LOGS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    reset_config()
    yield
    reset_config()
