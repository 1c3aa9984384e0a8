"""In-memory CATMAT catalog and its query service."""

from catmat.catalog.query import CatalogQueryService, SearchTermTooShortError
from catmat.catalog.snapshot import CatalogSnapshot, collation_key

__all__ = [
    "CatalogQueryService",
    "CatalogSnapshot",
    "SearchTermTooShortError",
    "collation_key",
]
