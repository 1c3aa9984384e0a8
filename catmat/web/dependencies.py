"""Shared dependencies for CATMAT Preços web routes.

Everything is read from `app.state`, populated once by the application
lifespan, so route modules never touch module-level globals.

Usage:
    from fastapi import Depends
    from catmat.web.dependencies import get_catalog_service

    @router.get("/itens")
    async def list_items(service=Depends(get_catalog_service)):
        ...
"""

from __future__ import annotations

from fastapi import Request

from catmat.catalog.query import CatalogQueryService
from catmat.config import AppConfig
from catmat.integration.compras_client import PriceGateway


def get_app_config(request: Request) -> AppConfig:
    """Configuration the app was created with."""
    return request.app.state.config


def get_catalog_service(request: Request) -> CatalogQueryService:
    """Query service over the catalog snapshot loaded at startup."""
    return request.app.state.catalog_service


def get_price_gateway(request: Request) -> PriceGateway:
    """Price API gateway shared by all requests."""
    return request.app.state.price_gateway
