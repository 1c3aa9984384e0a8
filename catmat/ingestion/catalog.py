"""CATMAT spreadsheet ingestion.

Parses the CATMAT CSV/XLSX export into CatalogItem records, writes the JSON
cache next to it and returns the in-memory snapshot built from that cache.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from catmat.catalog.snapshot import CatalogSnapshot
from catmat.models import CatalogItem

logger = logging.getLogger(__name__)

# Accepted header spellings, in priority order
CODE_COLUMNS = ("Código do Item", "codigo")
DESCRIPTION_COLUMNS = ("Descrição do Item", "descricao")


class CatalogSourceMissingError(FileNotFoundError):
    """Raised when the CATMAT spreadsheet does not exist. Fatal at startup."""
    pass


def _first_filled(row: dict[str, Any], columns: Iterable[str]) -> str:
    for column in columns:
        value = row.get(column)
        if value is None or (isinstance(value, float) and pd.isna(value)):
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def read_catalog_frame(source_path: Path) -> pd.DataFrame:
    """Read the first sheet of a CSV or XLSX file with every cell as text.

    Raises:
        CatalogSourceMissingError: If the file doesn't exist
        ValueError: If the file format is not supported
    """
    if not source_path.exists():
        raise CatalogSourceMissingError(f"Arquivo {source_path} não encontrado!")

    suffix = source_path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(source_path, dtype=str, keep_default_na=False)
    elif suffix in (".xlsx", ".xls"):
        df = pd.read_excel(source_path, sheet_name=0, dtype=str)
    else:
        raise ValueError(f"Unsupported file format: {source_path.suffix}")

    return df.fillna("")


def parse_catalog_rows(df: pd.DataFrame) -> list[CatalogItem]:
    """Map spreadsheet rows to CatalogItem, tolerating both header spellings."""
    items = []
    for row in df.to_dict(orient="records"):
        items.append(
            CatalogItem(
                codigo=_first_filled(row, CODE_COLUMNS),
                descricao=_first_filled(row, DESCRIPTION_COLUMNS),
            )
        )
    return items


def write_catalog_cache(items: list[CatalogItem], cache_path: Path) -> None:
    """Overwrite the JSON cache with the normalized catalog."""
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [item.model_dump() for item in items]
    cache_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
    )


def read_catalog_cache(cache_path: Path) -> CatalogSnapshot:
    """Build a snapshot from an existing JSON cache.

    Raises:
        FileNotFoundError: If the cache doesn't exist
        ValueError: If the cache is not a JSON list of records
    """
    data = json.loads(cache_path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Invalid catalog cache (expected list): {cache_path}")

    return CatalogSnapshot(
        CatalogItem(
            codigo=str(record.get("codigo") or ""),
            descricao=str(record.get("descricao") or ""),
        )
        for record in data
    )


def load_catalog(source_path: Path, cache_path: Path) -> CatalogSnapshot:
    """Convert the CATMAT spreadsheet to the JSON cache and load it.

    The cache is regenerated on every call; it is a derived view, never a
    source of truth.

    Args:
        source_path: CATMAT spreadsheet (CSV or XLSX)
        cache_path: JSON file to (over)write

    Returns:
        Immutable catalog snapshot

    Raises:
        CatalogSourceMissingError: If source_path doesn't exist
        ValueError: If the file format is invalid
    """
    df = read_catalog_frame(source_path)
    items = parse_catalog_rows(df)
    write_catalog_cache(items, cache_path)
    logger.info(f"Catalog cache written: {cache_path} ({len(items)} items from {source_path})")

    return read_catalog_cache(cache_path)
