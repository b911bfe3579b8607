"""
Weighted reconciliation of comparable-adjusted prices.

Only included comparables take part. Weights are not normalized or
checked to sum to 1; dividing by their total corrects for any sum.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..utils import mean, median, parse_number, safe_divide
from .adjustments import adjusted_price
from .models import Comparable, comparable_label

logger = logging.getLogger(__name__)

# Weights within this of 1.0 are shown as balanced
WEIGHT_BALANCE_TOLERANCE = 0.01


@dataclass(frozen=True)
class WeightingRow:
    """One included comparable's share of the weighted value."""

    position: int
    """0-based position in the full comparable sequence."""

    adjusted_price: float
    weight: float
    """Parsed weight, blank = 0."""

    @property
    def label(self) -> str:
        """'Comp N' display label."""
        return comparable_label(self.position)

    @property
    def contribution(self) -> float:
        """Adjusted price times weight."""
        return self.adjusted_price * self.weight


@dataclass(frozen=True)
class PricePerAreaStats:
    """Adjusted price per square foot of GLA across included comparables."""

    minimum: float | None
    maximum: float | None
    average: float | None
    median: float | None
    count: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "min": self.minimum,
            "max": self.maximum,
            "avg": self.average,
            "median": self.median,
            "count": self.count,
        }


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Value indicators derived from the included comparables.

    Average, median, low, high and range only cover comparables with a
    positive adjusted price; a comparable with no sale price entered
    would otherwise drag them toward zero.
    """

    weighted_value: float | None
    average_adjusted: float | None
    median_adjusted: float | None
    low_adjusted: float | None
    high_adjusted: float | None
    total_weight: float
    rows: tuple[WeightingRow, ...]
    price_per_area: PricePerAreaStats

    @property
    def range(self) -> float | None:
        """Spread between the highest and lowest adjusted price."""
        if self.low_adjusted is None or self.high_adjusted is None:
            return None
        return self.high_adjusted - self.low_adjusted

    @property
    def weights_balanced(self) -> bool:
        """True if included weights total 1.0 within tolerance."""
        return abs(self.total_weight - 1.0) < WEIGHT_BALANCE_TOLERANCE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "weighted_value": self.weighted_value,
            "average_adjusted": self.average_adjusted,
            "median_adjusted": self.median_adjusted,
            "low_adjusted": self.low_adjusted,
            "high_adjusted": self.high_adjusted,
            "range": self.range,
            "total_weight": self.total_weight,
            "weights_balanced": self.weights_balanced,
            "rows": [
                {
                    "label": r.label,
                    "adjusted_price": r.adjusted_price,
                    "weight": r.weight,
                    "contribution": r.contribution,
                }
                for r in self.rows
            ],
            "price_per_area": self.price_per_area.to_dict(),
        }


def _price_per_area_stats(comps: list[Comparable]) -> PricePerAreaStats:
    ratios = []
    for comp in comps:
        price = adjusted_price(comp)
        # A zero adjusted price means nothing was entered for this comparable
        if not price:
            continue
        ratio = safe_divide(price, parse_number(comp.living_area))
        if ratio is not None:
            ratios.append(ratio)

    return PricePerAreaStats(
        minimum=min(ratios) if ratios else None,
        maximum=max(ratios) if ratios else None,
        average=mean(ratios),
        median=median(ratios),
        count=len(ratios),
    )


def reconcile(comps: tuple[Comparable, ...]) -> ReconciliationResult:
    """
    Blend the included comparables into value indicators.

    Args:
        comps: Full comparable sequence; excluded entries are skipped but
               keep their positions for labelling.

    Returns:
        ReconciliationResult. weighted_value is None when the included
        weights total exactly zero.

    Example:
        >>> comps = (Comparable(sale_price="300000", weight="0.5"),
        ...          Comparable(sale_price="320000", weight="0.5"))
        >>> reconcile(comps).weighted_value
        310000.0
    """
    included = [(i, c) for i, c in enumerate(comps) if c.included]

    rows = tuple(
        WeightingRow(
            position=i,
            adjusted_price=adjusted_price(c),
            weight=parse_number(c.weight) or 0.0,
        )
        for i, c in included
    )

    total_weight = sum(r.weight for r in rows)
    weighted_value = safe_divide(sum(r.contribution for r in rows), total_weight)
    if weighted_value is None and rows:
        logger.warning(
            f"Included weights total zero across {len(rows)} comparables; "
            "weighted value unavailable"
        )

    positive = [r.adjusted_price for r in rows if r.adjusted_price > 0]

    result = ReconciliationResult(
        weighted_value=weighted_value,
        average_adjusted=mean(positive),
        median_adjusted=median(positive),
        low_adjusted=min(positive) if positive else None,
        high_adjusted=max(positive) if positive else None,
        total_weight=total_weight,
        rows=rows,
        price_per_area=_price_per_area_stats([c for _, c in included]),
    )

    logger.info(
        f"Reconciled {len(rows)} of {len(comps)} comparables: "
        f"weighted value {weighted_value}, total weight {total_weight:.2f}"
    )
    return result
