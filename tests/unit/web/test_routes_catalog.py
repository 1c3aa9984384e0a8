"""Tests for catmat.web.routes.catalog - listing and search routes."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from catmat.catalog.snapshot import collation_key
from catmat.config import AppConfig
from catmat.web.app import create_app


@pytest.fixture
def client(catalog_snapshot):
    """Test client with the small fixture catalog."""
    app = create_app(AppConfig(), catalog_snapshot=catalog_snapshot, gateway=AsyncMock())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def large_client(large_snapshot):
    app = create_app(AppConfig(), catalog_snapshot=large_snapshot, gateway=AsyncMock())
    with TestClient(app) as test_client:
        yield test_client


class TestListItems:
    """Tests for GET /itens route."""

    def test_default_page(self, client):
        response = client.get("/itens")

        assert response.status_code == 200
        body = response.json()
        assert body["pagina"] == 1
        assert body["totalPaginas"] == 1
        assert body["totalItens"] == 6
        descriptions = [item["descricao"] for item in body["resultados"]]
        assert [collation_key(d) for d in descriptions] == sorted(
            collation_key(d) for d in descriptions
        )
        assert set(body["resultados"][0]) == {"codigo", "descricao"}

    def test_pagination(self, large_client):
        body = large_client.get("/itens?pagina=2").json()

        assert body["pagina"] == 2
        assert body["totalPaginas"] == 3
        assert len(body["resultados"]) == 100
        assert body["resultados"][0]["descricao"] == "Item 100"

    def test_page_beyond_range_is_empty(self, large_client):
        response = large_client.get("/itens?pagina=99")

        assert response.status_code == 200
        assert response.json()["resultados"] == []
        assert response.json()["totalItens"] == 250

    def test_invalid_page_number(self, client):
        response = client.get("/itens?pagina=abc")

        assert response.status_code == 400
        assert "erro" in response.json()


class TestSearchItems:
    """Tests for GET /buscar route."""

    def test_short_term_rejected(self, client):
        response = client.get("/buscar?q=ab")

        assert response.status_code == 400
        assert response.json() == {"erro": "Informe pelo menos 3 caracteres para busca."}

    def test_missing_term_rejected(self, client):
        assert client.get("/buscar").status_code == 400

    def test_search_by_description(self, client):
        response = client.get("/buscar", params={"q": "cadeira"})

        assert response.status_code == 200
        results = response.json()
        assert len(results) == 2
        for item in results:
            assert "cadeira" in item["codigo"] or "cadeira" in item["descricao"].lower()

    def test_search_by_code(self, client):
        results = client.get("/buscar", params={"q": "243756"}).json()

        assert results == [{"codigo": "243756", "descricao": "água mineral, sem gás"}]
