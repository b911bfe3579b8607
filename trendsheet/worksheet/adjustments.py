"""
Adjustment arithmetic for a single comparable.

Net and gross adjustment sums treat a blank or unparseable line item as 0,
since an appraiser leaving a line empty means "no adjustment". Everything
derived by division (per-area price, percentages) propagates None instead.

All percentages are returned as decimals (0.085 = 8.5%).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..utils import parse_number, safe_divide
from .models import (
    ADJUSTMENT_LINE_ITEMS,
    AdjustmentConfig,
    AdjustmentLineItem,
    Comparable,
    SubjectProperty,
    comparable_label,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparableAnalysis:
    """Derived values for one comparable, independent of inclusion state."""

    net_adjustment: float
    gross_adjustment: float
    adjusted_price: float
    adjusted_price_per_area: float | None
    net_adjustment_percent: float | None
    gross_adjustment_percent: float | None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "net_adjustment": self.net_adjustment,
            "gross_adjustment": self.gross_adjustment,
            "adjusted_price": self.adjusted_price,
            "adjusted_price_per_area": self.adjusted_price_per_area,
            "net_adjustment_percent": self.net_adjustment_percent,
            "gross_adjustment_percent": self.gross_adjustment_percent,
        }


def _line_item_values(comp: Comparable) -> list[float]:
    """Parsed line items with blanks as 0."""
    return [
        parse_number(getattr(comp, item.key)) or 0.0 for item in ADJUSTMENT_LINE_ITEMS
    ]


def net_adjustment(comp: Comparable) -> float:
    """Signed sum of all 22 line items."""
    return sum(_line_item_values(comp))


def gross_adjustment(comp: Comparable) -> float:
    """Sum of the absolute values of all 22 line items."""
    return sum(abs(v) for v in _line_item_values(comp))


def adjusted_price(comp: Comparable) -> float:
    """Sale price (blank = 0) plus net adjustment."""
    return (parse_number(comp.sale_price) or 0.0) + net_adjustment(comp)


def adjusted_price_per_area(comp: Comparable) -> float | None:
    """Adjusted price per square foot of living area, None if area is blank or zero."""
    return safe_divide(adjusted_price(comp), parse_number(comp.living_area))


def net_adjustment_percent(comp: Comparable) -> float | None:
    """Net adjustment as a fraction of sale price, None if sale price is blank or 0."""
    return safe_divide(net_adjustment(comp), parse_number(comp.sale_price))


def gross_adjustment_percent(comp: Comparable) -> float | None:
    """
    Gross adjustment as a fraction of sale price.

    Computed from absolute line items, not from the net figure, so that
    offsetting adjustments still show up (high gross with low net).
    """
    return safe_divide(gross_adjustment(comp), parse_number(comp.sale_price))


def analyze_comparable(comp: Comparable) -> ComparableAnalysis:
    """Compute all derived values for one comparable."""
    return ComparableAnalysis(
        net_adjustment=net_adjustment(comp),
        gross_adjustment=gross_adjustment(comp),
        adjusted_price=adjusted_price(comp),
        adjusted_price_per_area=adjusted_price_per_area(comp),
        net_adjustment_percent=net_adjustment_percent(comp),
        gross_adjustment_percent=gross_adjustment_percent(comp),
    )


def analyze_comparables(
    comps: tuple[Comparable, ...],
) -> tuple[ComparableAnalysis, ...]:
    """Analyze every comparable, included or not, preserving positions."""
    return tuple(analyze_comparable(c) for c in comps)


# --- Adjustment grid ---


@dataclass(frozen=True)
class AdjustmentGridRow:
    """One line item across the included comparables."""

    item: AdjustmentLineItem
    values: tuple[float | None, ...]
    """Parsed value per included comparable; None where the cell is blank."""


@dataclass(frozen=True)
class AdjustmentGrid:
    """Line items by included comparable, for side-by-side display."""

    columns: tuple[str, ...]
    """'Comp N' labels using each comparable's full-sequence position."""

    positions: tuple[int, ...]
    """0-based sequence positions of the included comparables."""

    rows: tuple[AdjustmentGridRow, ...]


def adjustment_grid(comps: tuple[Comparable, ...]) -> AdjustmentGrid:
    """Lay out the 22 line items for the included comparables."""
    positions = tuple(i for i, c in enumerate(comps) if c.included)
    rows = tuple(
        AdjustmentGridRow(
            item=item,
            values=tuple(parse_number(getattr(comps[i], item.key)) for i in positions),
        )
        for item in ADJUSTMENT_LINE_ITEMS
    )
    return AdjustmentGrid(
        columns=tuple(comparable_label(i) for i in positions),
        positions=positions,
        rows=rows,
    )


# --- Advisory suggestions ---


def _difference(subject_value: Any, comp_value: Any) -> float | None:
    """Subject minus comparable, None if either side is blank."""
    s = parse_number(subject_value)
    c = parse_number(comp_value)
    if s is None or c is None:
        return None
    return s - c


def _scaled(diff: float | None, rate: float) -> float | None:
    return None if diff is None else diff * rate


def suggest_adjustments(
    subject: SubjectProperty,
    comp: Comparable,
    config: AdjustmentConfig,
) -> dict[str, float | None]:
    """
    Advisory values for the calculator-flagged line items.

    Each value is what the config coefficients imply for the difference
    between subject and comparable (positive when the comparable is
    inferior). Nothing is written to the comparable; the user decides
    whether to copy a suggestion into its line item.

    Vehicle storage adds the garage and carport parts that are available
    and is None only when neither part can be computed.

    Returns:
        Mapping of line-item key to suggested delta, None where an input is blank
    """
    gla_diff = _difference(subject.living_area, comp.living_area)
    lot_diff = None
    if subject.site_size_sqft is not None and comp.site_size_sqft is not None:
        lot_diff = subject.site_size_sqft - comp.site_size_sqft

    bath_diff = _difference(subject.full_baths, comp.full_baths)
    comp_price = parse_number(comp.sale_price)
    bath = None
    if bath_diff is not None and comp_price is not None:
        bath = bath_diff * config.bath_pct / 100 * comp_price

    vehicle_parts = [
        part
        for part in (
            _scaled(_difference(subject.garage, comp.garage), config.garage_per_unit),
            _scaled(
                _difference(subject.carport, comp.carport), config.carport_per_unit
            ),
        )
        if part is not None
    ]

    suggestions = {
        "adj_lot": _scaled(lot_diff, config.lot_per_sqft),
        # Older comparable (earlier year) is inferior, so the sign is subject - comp
        "adj_age": _scaled(
            _difference(subject.year_built, comp.year_built), config.age_per_year
        ),
        "adj_bedroom": _scaled(
            _difference(subject.bedrooms, comp.bedrooms), config.bedroom_per_unit
        ),
        "adj_bath": bath,
        "adj_gla": _scaled(gla_diff, config.gla_per_sqft),
        "adj_basement_finished": _scaled(
            _difference(subject.below_grade_finished, comp.below_grade_finished),
            config.gla_per_sqft * config.below_grade_finished_pct / 100,
        ),
        "adj_basement_unfinished": _scaled(
            _difference(subject.below_grade_unfinished, comp.below_grade_unfinished),
            config.gla_per_sqft * config.below_grade_unfinished_pct / 100,
        ),
        "adj_vehicle": sum(vehicle_parts) if vehicle_parts else None,
    }

    logger.debug(
        f"Suggested {sum(v is not None for v in suggestions.values())} "
        f"of {len(suggestions)} advisory adjustments"
    )
    return suggestions
