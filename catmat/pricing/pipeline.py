"""Price aggregation pipeline.

Turns the raw observations returned by the price API into the client payload:

1. Filter by purchase year (optional)
2. Drop rows without a judgment criterion (criterioJulgamento)
3. Sort ascending by unit price
4. Compute mean / median / min / max over numeric prices
5. Format prices as BRL ("R$ 12,50")

Step order matters: the not-found reason depends on whether the API returned
nothing or the filters removed everything.
"""

from __future__ import annotations

import math
import re
import statistics
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Iterable, Sequence

from catmat.models import (
    FormattedObservation,
    PriceObservation,
    PriceReport,
    PriceSummary,
)

_YEAR_PREFIX = re.compile(r"^\s*(\d{4})")


class NotFoundReason(str, Enum):
    """Why a price lookup produced no rows."""

    NO_OBSERVATIONS_FOR_CODE = "no-observations-for-code"
    NO_OBSERVATIONS_FOR_FILTER = "no-observations-for-filter"


class PriceNotFoundError(LookupError):
    """Raised when no observation survives the lookup (HTTP 404)."""

    def __init__(self, reason: NotFoundReason, ano: str | None = None):
        self.reason = reason
        self.ano = ano
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.reason is NotFoundReason.NO_OBSERVATIONS_FOR_CODE:
            return "Nenhum preço encontrado para o item informado."
        if self.ano:
            return (
                f"Nenhum preço com critério de julgamento encontrado "
                f"para o item no ano {self.ano}."
            )
        return "Nenhum preço com critério de julgamento encontrado para o item."


@dataclass(frozen=True)
class PriceStatistics:
    """Numeric summary before currency formatting."""

    mean: float
    median: float
    minimum: float
    maximum: float
    count: int  # numeric prices used; 0 means every statistic defaulted to 0.0


def to_number(value: Any) -> float | None:
    """Coerce an upstream price to a finite float, or None.

    Accepts numbers and numeric strings ("12.5", "12,50", "R$ 1.234,56").
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.replace("R$", "").strip()
        if not text:
            return None
        # pt-BR: "1.234,56"
        if "," in text:
            text = text.replace(".", "").replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def purchase_year(data_compra: str | None) -> str | None:
    """Extract the year of a purchase date ("2023-05-10", "2023-05-10T00:00:00")."""
    if not data_compra:
        return None
    try:
        return str(datetime.fromisoformat(data_compra.strip()).year)
    except ValueError:
        match = _YEAR_PREFIX.match(data_compra)
        return match.group(1) if match else None


def filter_by_year(
    observations: Iterable[PriceObservation], ano: str | int | None
) -> list[PriceObservation]:
    """Keep observations purchased in `ano`; no-op when ano is empty."""
    if ano is None or str(ano).strip() == "":
        return list(observations)

    wanted = str(ano).strip()
    return [obs for obs in observations if purchase_year(obs.data_compra) == wanted]


def filter_by_criterion(observations: Iterable[PriceObservation]) -> list[PriceObservation]:
    """Keep observations with a non-blank criterioJulgamento."""
    return [
        obs
        for obs in observations
        if obs.criterio_julgamento is not None and obs.criterio_julgamento.strip()
    ]


def sort_by_unit_price(observations: Iterable[PriceObservation]) -> list[PriceObservation]:
    """Ascending by numeric unit price; non-numeric prices last (stable)."""

    def _key(obs: PriceObservation) -> tuple[bool, float]:
        number = to_number(obs.preco_unitario)
        return (number is None, number if number is not None else 0.0)

    return sorted(observations, key=_key)


def summarize(prices: Iterable[Any]) -> PriceStatistics:
    """Mean, median, min and max over the numeric values in `prices`.

    Non-numeric, NaN and infinite values are ignored. With no numeric value
    every statistic is 0.0 and count is 0.
    """
    numbers = sorted(n for n in (to_number(p) for p in prices) if n is not None)
    if not numbers:
        return PriceStatistics(mean=0.0, median=0.0, minimum=0.0, maximum=0.0, count=0)

    return PriceStatistics(
        mean=statistics.fmean(numbers),
        median=statistics.median(numbers),
        minimum=numbers[0],
        maximum=numbers[-1],
        count=len(numbers),
    )


def format_brl(value: float) -> str:
    """Format a number as "R$ 1234,56" (2 decimals, comma separator).

    Ties round half up ("0.125" -> "R$ 0,13").
    """
    cents = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"R$ {cents}".replace(".", ",")


def parse_brl(text: str) -> float:
    """Inverse of format_brl.

    Raises:
        ValueError: If text is not a formatted BRL amount
    """
    return float(text.replace("R$", "").strip().replace(",", "."))


def _format_observation(obs: PriceObservation) -> FormattedObservation:
    number = to_number(obs.preco_unitario)
    fields = obs.model_dump()
    fields["preco_unitario"] = format_brl(number) if number is not None else None
    return FormattedObservation(**fields)


def build_price_report(
    raw: Sequence[dict[str, Any] | PriceObservation],
    ano: str | int | None = None,
) -> PriceReport:
    """Filter, sort, summarize and format raw price observations.

    Args:
        raw: Records as returned by the price API (`resultado`)
        ano: Optional purchase year filter

    Returns:
        PriceReport with formatted statistics and ordered rows

    Raises:
        PriceNotFoundError: NO_OBSERVATIONS_FOR_CODE when raw is empty,
            NO_OBSERVATIONS_FOR_FILTER when the filters leave nothing
    """
    ano_filtro = str(ano).strip() if ano is not None and str(ano).strip() else None

    if not raw:
        raise PriceNotFoundError(NotFoundReason.NO_OBSERVATIONS_FOR_CODE, ano_filtro)

    observations = [
        r if isinstance(r, PriceObservation) else PriceObservation.model_validate(r)
        for r in raw
    ]

    observations = filter_by_year(observations, ano_filtro)
    observations = filter_by_criterion(observations)
    if not observations:
        raise PriceNotFoundError(NotFoundReason.NO_OBSERVATIONS_FOR_FILTER, ano_filtro)

    observations = sort_by_unit_price(observations)
    stats = summarize(obs.preco_unitario for obs in observations)

    return PriceReport(
        estatisticas=PriceSummary(
            media=format_brl(stats.mean),
            mediana=format_brl(stats.median),
            minimo=format_brl(stats.minimum),
            maximo=format_brl(stats.maximum),
            ano_filtro=ano_filtro,
            total_registros=len(observations),
            precos_validos=stats.count,
        ),
        dados=[_format_observation(obs) for obs in observations],
    )
