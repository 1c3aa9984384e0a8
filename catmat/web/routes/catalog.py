"""Catalog routes: paginated listing and search.

Routes:
- GET /itens?pagina=<int> - One page of 100 items sorted by description
- GET /buscar?q=<str>     - Items whose code or description contains q
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from catmat.catalog.query import CatalogQueryService, SearchTermTooShortError
from catmat.models import CatalogItem, CatalogPage
from catmat.web.dependencies import get_catalog_service

router = APIRouter(tags=["catalog"])


@router.get("/itens", response_model=CatalogPage)
async def list_items(
    pagina: int = Query(default=1),
    service: CatalogQueryService = Depends(get_catalog_service),
):
    """List catalog items, 100 per page. Out-of-range pages are empty."""
    return service.list_page(pagina)


@router.get("/buscar", response_model=list[CatalogItem])
async def search_items(
    q: str = Query(default=""),
    service: CatalogQueryService = Depends(get_catalog_service),
):
    """Search by code or description (at least 3 characters)."""
    try:
        return service.search(q)
    except SearchTermTooShortError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None
