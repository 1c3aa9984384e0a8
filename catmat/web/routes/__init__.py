"""CATMAT Preços web route modules.

Each module exports a `router` (APIRouter instance) included by
catmat.web.app.create_app. Shared dependencies live in
catmat.web.dependencies.
"""

from catmat.web.routes import catalog, health, prices

__all__ = [
    "catalog",  # /itens, /buscar
    "prices",  # /preco/{codigo}
    "health",  # /health, /firebase-config
]
