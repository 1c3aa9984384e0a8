"""Health check and client configuration routes.

Routes:
- GET /health          - Liveness plus loaded catalog size
- GET /firebase-config - Firebase client settings from FIREBASE_* variables
"""

from fastapi import APIRouter, Depends, status

from catmat.catalog.query import CatalogQueryService
from catmat.config import AppConfig
from catmat.web.dependencies import get_app_config, get_catalog_service

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(service: CatalogQueryService = Depends(get_catalog_service)):
    """Check application health."""
    return {"status": "ok", "catalogItems": service.total_items}


@router.get("/firebase-config")
async def firebase_config(config: AppConfig = Depends(get_app_config)):
    return config.firebase.as_client_config()
