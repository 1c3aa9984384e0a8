"""Tests for catmat.web.routes.prices - price lookup route."""

import pytest
from fastapi.testclient import TestClient

from catmat.config import AppConfig
from catmat.integration.compras_client import PriceGatewayError
from catmat.web.app import create_app


@pytest.fixture
def client(catalog_snapshot, mock_gateway):
    """Test client with a mocked price gateway."""
    app = create_app(AppConfig(), catalog_snapshot=catalog_snapshot, gateway=mock_gateway)
    with TestClient(app) as test_client:
        yield test_client


class TestPriceLookup:
    """Tests for GET /preco/{codigo} route."""

    def test_success(self, client, mock_gateway):
        response = client.get("/preco/150123")

        assert response.status_code == 200
        body = response.json()
        assert body["estatisticas"] == {
            "media": "R$ 20,00",
            "mediana": "R$ 20,00",
            "minimo": "R$ 10,00",
            "maximo": "R$ 30,00",
            "anoFiltro": None,
            "totalRegistros": 3,
            "precosValidos": 3,
        }
        assert [row["precoUnitario"] for row in body["dados"]] == [
            "R$ 10,00",
            "R$ 20,00",
            "R$ 30,00",
        ]
        assert body["dados"][0]["nomeOrgao"] == "Ministério A"
        mock_gateway.fetch_observations.assert_awaited_once_with("150123")

    def test_year_filter(self, client):
        body = client.get("/preco/150123?ano=2023").json()

        assert body["estatisticas"]["anoFiltro"] == "2023"
        assert len(body["dados"]) == 3

    def test_year_without_matches_is_404(self, client):
        response = client.get("/preco/150123?ano=2019")

        assert response.status_code == 404
        assert "2019" in response.json()["erro"]

    def test_no_observations_is_404(self, client, mock_gateway):
        mock_gateway.fetch_observations.return_value = []

        response = client.get("/preco/000000")

        assert response.status_code == 404
        assert response.json() == {"erro": "Nenhum preço encontrado para o item informado."}

    def test_blank_criteria_only_is_404(self, client, mock_gateway):
        mock_gateway.fetch_observations.return_value = [
            {"precoUnitario": 10, "criterioJulgamento": "  "}
        ]

        assert client.get("/preco/150123").status_code == 404

    def test_upstream_failure_is_500(self, client, mock_gateway):
        mock_gateway.fetch_observations.side_effect = PriceGatewayError("Price API error: 502")

        response = client.get("/preco/150123")

        assert response.status_code == 500
        assert response.json() == {"erro": "Erro ao consultar a API externa."}

    @pytest.mark.parametrize(
        "records",
        [
            [None],
            ["x"],
            [{"precoUnitario": 10, "estado": True, "criterioJulgamento": "Menor Preço"}],
        ],
    )
    def test_malformed_upstream_record_is_500(self, client, mock_gateway, records):
        mock_gateway.fetch_observations.return_value = records

        response = client.get("/preco/150123")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"erro": "Erro ao consultar a API externa."}
