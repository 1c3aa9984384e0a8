"""Price aggregation for CATMAT Preços.

Filters, summarizes and BRL-formats observations from the price API.
"""

from catmat.pricing.pipeline import (
    NotFoundReason,
    PriceNotFoundError,
    build_price_report,
    format_brl,
    parse_brl,
)

__all__ = [
    "NotFoundReason",
    "PriceNotFoundError",
    "build_price_report",
    "format_brl",
    "parse_brl",
]
