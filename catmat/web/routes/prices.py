"""Price lookup route.

Routes:
- GET /preco/{codigo}?ano=<year> - Summary and detail of reported prices
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from catmat.integration.compras_client import PriceGateway, PriceGatewayError
from catmat.models import PriceReport
from catmat.pricing.pipeline import PriceNotFoundError, build_price_report
from catmat.web.dependencies import get_price_gateway

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["prices"])


@router.get("/preco/{codigo}", response_model=PriceReport)
async def price_lookup(
    codigo: str,
    ano: str | None = Query(default=None),
    gateway: PriceGateway = Depends(get_price_gateway),
):
    """Query the price API for a catalog code and summarize the results.

    404 when no observation matches the code or the filters, 500 when the
    price API fails or returns malformed records.
    """
    try:
        raw = await gateway.fetch_observations(codigo)
    except PriceGatewayError as exc:
        logger.error("price_gateway_failed", codigo=codigo, error=str(exc))
        raise HTTPException(
            status_code=500, detail="Erro ao consultar a API externa."
        ) from None

    try:
        report = build_price_report(raw, ano)
    except PriceNotFoundError as exc:
        logger.info("price_not_found", codigo=codigo, ano=ano, reason=exc.reason.value)
        raise HTTPException(status_code=404, detail=exc.message) from None
    except ValidationError as exc:
        logger.error(
            "price_payload_invalid", codigo=codigo, errors=exc.error_count()
        )
        raise HTTPException(
            status_code=500, detail="Erro ao consultar a API externa."
        ) from None

    logger.info(
        "price_lookup_completed",
        codigo=codigo,
        ano=ano,
        rows=len(report.dados),
    )
    return report
