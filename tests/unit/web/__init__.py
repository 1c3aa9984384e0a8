"""Unit tests for CATMAT Preços web route modules.

Structure:
    tests/unit/web/
    ├── test_routes_catalog.py       # /itens, /buscar
    ├── test_routes_prices.py        # /preco/{codigo}
    ├── test_app.py                  # Lifespan, landing page, health, errors

Testing pattern:
    - Use FastAPI's TestClient for route testing
    - Inject a CatalogSnapshot and an AsyncMock price gateway
    - Test request/response validation
    - Test error handling
"""
