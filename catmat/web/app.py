"""FastAPI application for CATMAT Preços.

The catalog is loaded once in the lifespan (missing spreadsheet aborts
startup) and the price API client lives for the whole process.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from catmat.catalog.query import CatalogQueryService
from catmat.catalog.snapshot import CatalogSnapshot
from catmat.config import AppConfig, get_config
from catmat.core.logging import configure_logging
from catmat.ingestion.catalog import load_catalog
from catmat.integration.compras_client import ComprasGovClient, PriceGateway
from catmat.web.routes import catalog, health, prices

logger = structlog.get_logger()

STATIC_DIR = Path(__file__).parent / "static"


# Request Logging Middleware
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        structlog.contextvars.clear_contextvars()

        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)

            logger.info(
                "request_completed",
                status_code=response.status_code,
            )
            return response

        except Exception as exc:
            logger.error("request_failed", error=str(exc))
            raise


def create_app(
    config: AppConfig | None = None,
    catalog_snapshot: CatalogSnapshot | None = None,
    gateway: PriceGateway | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        config: Settings (default: from environment)
        catalog_snapshot: Preloaded catalog; when None the spreadsheet is
            converted at startup
        gateway: Price source; when None a ComprasGovClient is created and
            closed with the app

    Raises (at startup):
        CatalogSourceMissingError: If the spreadsheet doesn't exist
    """
    config = config or get_config()
    configure_logging(config.log_level, config.json_logs)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        snapshot = catalog_snapshot
        if snapshot is None:
            snapshot = load_catalog(config.catalog.source_path, config.catalog.cache_path)
        app.state.catalog_service = CatalogQueryService(snapshot)

        owned_client: ComprasGovClient | None = None
        if gateway is None:
            owned_client = ComprasGovClient(
                token=config.price_api.token,
                base_url=config.price_api.base_url,
                timeout=config.price_api.timeout_seconds,
                page_size=config.price_api.page_size,
            )
            app.state.price_gateway = owned_client
        else:
            app.state.price_gateway = gateway

        logger.info("app_started", catalog_items=len(snapshot))
        try:
            yield
        finally:
            if owned_client is not None:
                await owned_client.close()

    app = FastAPI(
        title="CATMAT Preços",
        description="Consulta ao catálogo CATMAT e pesquisa de preços praticados",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus Metrics (one registry per app instance)
    Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app)

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"erro": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"erro": "Parâmetros inválidos."})

    @app.get("/", include_in_schema=False)
    async def index():
        return FileResponse(STATIC_DIR / "index.html")

    app.include_router(catalog.router)
    app.include_router(prices.router)
    app.include_router(health.router)

    return app
