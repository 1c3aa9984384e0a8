"""Catalog query service: paginated listing and substring search."""

from __future__ import annotations

import math

from catmat.catalog.snapshot import CatalogSnapshot
from catmat.models import CatalogItem, CatalogPage

PAGE_SIZE = 100
MIN_SEARCH_LENGTH = 3


class SearchTermTooShortError(ValueError):
    """Raised when a search term has fewer than MIN_SEARCH_LENGTH characters."""

    def __init__(self, message: str = "Informe pelo menos 3 caracteres para busca."):
        super().__init__(message)


class CatalogQueryService:
    """Read-only queries over an injected CatalogSnapshot."""

    def __init__(self, snapshot: CatalogSnapshot, page_size: int = PAGE_SIZE):
        self.snapshot = snapshot
        self.page_size = page_size

    @property
    def total_items(self) -> int:
        return len(self.snapshot)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    def list_page(self, pagina: int = 1) -> CatalogPage:
        """Return one 1-indexed page of items sorted by description.

        Pages outside 1..total_pages yield an empty result list.
        """
        if pagina < 1:
            resultados: list[CatalogItem] = []
        else:
            start = (pagina - 1) * self.page_size
            resultados = list(self.snapshot.sorted_items[start : start + self.page_size])

        return CatalogPage(
            pagina=pagina,
            total_paginas=self.total_pages,
            total_itens=self.total_items,
            resultados=resultados,
        )

    def search(self, q: str | None) -> list[CatalogItem]:
        """Find items whose code or lowercased description contains the term.

        Args:
            q: Raw query string; trimmed and lowercased before matching

        Returns:
            Every matching item, sorted by description collation

        Raises:
            SearchTermTooShortError: If the normalized term has < 3 characters
        """
        termo = (q or "").strip().lower()
        if len(termo) < MIN_SEARCH_LENGTH:
            raise SearchTermTooShortError()

        return [
            item
            for item in self.snapshot.sorted_items
            if termo in str(item.codigo) or termo in item.descricao.lower()
        ]
