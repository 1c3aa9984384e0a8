"""Immutable in-memory catalog and Portuguese collation.

Ordering rules (close to ICU pt-BR, case-insensitive):
- Primary: letters compared without accents or case ("açúcar" == "acucar")
- Secondary: accented forms after plain forms
- Tertiary: lowercase before uppercase

Non-letters compare by code point, so "{", "|" and "~" sort after letters.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable, Iterator

from catmat.models import CatalogItem


def strip_accents(text: str) -> str:
    """Remove combining marks after NFKD decomposition."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(text: str | None) -> tuple[str, str, str]:
    """Sort key for Portuguese, case-insensitive comparison of descriptions."""
    if not text:
        return ("", "", "")

    decomposed = unicodedata.normalize("NFKD", text)
    primary = strip_accents(decomposed).casefold()
    secondary = decomposed.casefold()
    # swapcase puts lowercase first under code point order
    tertiary = decomposed.swapcase()
    return (primary, secondary, tertiary)


class CatalogSnapshot:
    """Read-only catalog built once at startup.

    Keeps the source order and a copy sorted by description collation, so
    request handlers never sort or mutate shared state.
    """

    __slots__ = ("_items", "_sorted")

    def __init__(self, items: Iterable[CatalogItem]):
        self._items: tuple[CatalogItem, ...] = tuple(items)
        self._sorted: tuple[CatalogItem, ...] = tuple(
            sorted(self._items, key=lambda item: collation_key(item.descricao))
        )

    @property
    def items(self) -> tuple[CatalogItem, ...]:
        """Items in source (spreadsheet) order."""
        return self._items

    @property
    def sorted_items(self) -> tuple[CatalogItem, ...]:
        """Items ordered by description collation."""
        return self._sorted

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CatalogItem]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"CatalogSnapshot(items={len(self._items)})"
