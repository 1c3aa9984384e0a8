"""compras.gov.br price research API client."""

from __future__ import annotations

from typing import Any, Protocol

import httpx
import structlog

from catmat.config import DEFAULT_PRICE_API_URL

logger = structlog.get_logger(__name__)


class PriceGatewayError(RuntimeError):
    """Raised when the price API is unreachable or answers with an error."""
    pass


class PriceGateway(Protocol):
    """Source of raw price observations for a catalog code."""

    async def fetch_observations(
        self, codigo: str, data_resultado: bool | None = None
    ) -> list[dict[str, Any]]:
        ...


class ComprasGovClient:
    """Client for the modulo-pesquisa-preco/1_consultarMaterial endpoint.

    One request per lookup, no retries.
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_PRICE_API_URL,
        timeout: float = 30.0,
        page_size: int = 100,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.page_size = page_size

        headers = {"Accept": "*/*"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.client = httpx.AsyncClient(
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    async def fetch_observations(
        self, codigo: str, data_resultado: bool | None = None
    ) -> list[dict[str, Any]]:
        """Fetch up to page_size price observations for a catalog code.

        Returns:
            The raw `resultado` list (empty when the API reports none)

        Raises:
            PriceGatewayError: On transport errors, timeouts, non-2xx
                responses or a body that is not JSON
        """
        params: dict[str, Any] = {
            "tamanhoPagina": self.page_size,
            "codigoItemCatalogo": codigo,
        }
        if data_resultado is not None:
            params["dataResultado"] = "true" if data_resultado else "false"

        try:
            response = await self.client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "price_api_error",
                codigo=codigo,
                status_code=exc.response.status_code,
            )
            raise PriceGatewayError(
                f"Price API error: {exc.response.status_code} {exc.response.text}"
            ) from exc
        except httpx.RequestError as exc:
            logger.error("price_api_request_failed", codigo=codigo, error=str(exc))
            raise PriceGatewayError(f"Price API request failed: {exc}") from exc
        except ValueError as exc:
            logger.error("price_api_invalid_json", codigo=codigo)
            raise PriceGatewayError("Price API returned a non-JSON body") from exc

        if not isinstance(data, dict):
            raise PriceGatewayError("Price API returned an unexpected payload")

        resultado = data.get("resultado") or []
        if not isinstance(resultado, list):
            raise PriceGatewayError("Price API 'resultado' is not a list")

        logger.debug("price_api_ok", codigo=codigo, count=len(resultado))
        return resultado

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> ComprasGovClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
