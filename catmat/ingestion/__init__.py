"""Data ingestion module for CATMAT Preços.

Handles converting the CATMAT spreadsheet into the cached catalog.
"""

from catmat.ingestion.catalog import (
    CatalogSourceMissingError,
    load_catalog,
    read_catalog_cache,
)

__all__ = ["CatalogSourceMissingError", "load_catalog", "read_catalog_cache"]
