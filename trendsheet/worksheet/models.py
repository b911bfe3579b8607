"""
Data models for the appraisal worksheet.

Numeric fields are kept as the text the user typed so partial input is
never lost. Consumers parse them on use via utils.parse_number, which
turns anything unparseable into None.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from ..utils import parse_number
from .errors import ComparableIndexError, LastComparableError

SQFT_PER_ACRE = 43_560

DEFAULT_COMPARABLE_COUNT = 6


class Condition(Enum):
    """Nine-point condition scale, best to worst."""

    EXCELLENT = "Excellent"
    GOOD_PLUS = "Good +"
    GOOD = "Good"
    MODERATE_PLUS = "Moderate +"
    MODERATE = "Moderate"
    FAIR_PLUS = "Fair +"
    FAIR = "Fair"
    POOR_PLUS = "Poor +"
    POOR = "Poor"

    @property
    def rank(self) -> int:
        """Position on the scale, 0 = Excellent."""
        return list(Condition).index(self)

    @property
    def effective_age(self) -> int:
        """Typical effective age in years for this rating."""
        return _CONDITION_EFFECTIVE_AGES[self]

    @classmethod
    def parse(cls, label: str) -> Condition:
        """Look up a rating by display label, case-insensitively."""
        wanted = " ".join(label.split()).lower()
        for condition in cls:
            if condition.value.lower() == wanted:
                return condition
        raise ValueError(f"Unknown condition rating: {label!r}")


_CONDITION_EFFECTIVE_AGES = {
    Condition.EXCELLENT: 0,
    Condition.GOOD_PLUS: 5,
    Condition.GOOD: 15,
    Condition.MODERATE_PLUS: 22,
    Condition.MODERATE: 30,
    Condition.FAIR_PLUS: 37,
    Condition.FAIR: 45,
    Condition.POOR_PLUS: 50,
    Condition.POOR: 55,
}


class SiteSizeUnit(Enum):
    """Unit the site size was entered in."""

    SQFT = "sf"
    ACRES = "acres"


def _site_size_sqft(size: str, unit: SiteSizeUnit) -> float | None:
    value = parse_number(size)
    if value is None:
        return None
    if unit is SiteSizeUnit.ACRES:
        return value * SQFT_PER_ACRE
    return value


@dataclass(frozen=True)
class AdjustmentLineItem:
    """One row of the adjustment grid."""

    key: str
    """Attribute name on Comparable holding the delta."""

    label: str
    """Display label."""

    auto: bool = False
    """Flagged as a calculator candidate. Advisory only; never auto-filled."""


# Fixed order is display-significant
ADJUSTMENT_LINE_ITEMS: tuple[AdjustmentLineItem, ...] = (
    AdjustmentLineItem("adj_sale_type", "Sale Type"),
    AdjustmentLineItem("adj_financing", "Financing / Concessions"),
    AdjustmentLineItem("adj_date", "Date of Sale"),
    AdjustmentLineItem("adj_location", "Location"),
    AdjustmentLineItem("adj_ownership", "Ownership"),
    AdjustmentLineItem("adj_lot", "Lot Size", auto=True),
    AdjustmentLineItem("adj_view", "View"),
    AdjustmentLineItem("adj_design", "Design / Style"),
    AdjustmentLineItem("adj_quality", "Quality"),
    AdjustmentLineItem("adj_age", "Age", auto=True),
    AdjustmentLineItem("adj_condition", "Condition"),
    AdjustmentLineItem("adj_rooms", "Rooms"),
    AdjustmentLineItem("adj_bedroom", "Bedrooms", auto=True),
    AdjustmentLineItem("adj_bath", "Baths", auto=True),
    AdjustmentLineItem("adj_gla", "GLA", auto=True),
    AdjustmentLineItem("adj_basement_finished", "Basement (Fin)"),
    AdjustmentLineItem("adj_basement_unfinished", "Basement (Unfin)"),
    AdjustmentLineItem("adj_functional", "Functional"),
    AdjustmentLineItem("adj_heating_cooling", "Heating / Cooling"),
    AdjustmentLineItem("adj_energy", "Energy Efficiency"),
    AdjustmentLineItem("adj_vehicle", "Vehicle Storage", auto=True),
    AdjustmentLineItem("adj_patio", "Patio / Deck"),
)


@dataclass(frozen=True)
class AdjustmentConfig:
    """
    Advisory coefficients shown next to the adjustment grid.

    The engine never derives line-item values from these on its own;
    see adjustments.suggest_adjustments for the opt-in hints.
    """

    gla_per_sqft: float = 45.0
    """Dollars per square foot of above-grade living area difference."""

    below_grade_finished_pct: float = 65.0
    """Finished basement area as a percentage of the GLA rate."""

    below_grade_unfinished_pct: float = 25.0
    """Unfinished basement area as a percentage of the GLA rate."""

    bath_pct: float = 10.0
    """Contribution of one full bath as a percentage of comparable sale price."""

    garage_per_unit: float = 5_000.0
    carport_per_unit: float = 2_500.0
    age_per_year: float = 500.0
    bedroom_per_unit: float = 2_000.0
    lot_per_sqft: float = 1.0

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for display or logging."""
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class SubjectProperty:
    """The property being appraised. One per worksheet."""

    effective_date: str = field(default_factory=lambda: date.today().isoformat())
    sale_price: str = ""
    site_size: str = ""
    site_size_unit: SiteSizeUnit = SiteSizeUnit.SQFT
    year_built: str = ""
    bedrooms: str = ""
    full_baths: str = ""
    living_area: str = ""
    below_grade_finished: str = ""
    below_grade_unfinished: str = ""
    below_grade_baths: str = ""
    garage: str = ""
    carport: str = ""
    condition: Condition = Condition.GOOD
    design_style: str = ""
    stories: str = ""
    pool: bool = False

    @property
    def site_size_sqft(self) -> float | None:
        """Site size in square feet, None if blank."""
        return _site_size_sqft(self.site_size, self.site_size_unit)


@dataclass(frozen=True)
class Comparable:
    """
    A comparable sale with its line-item adjustments.

    Every comparable carries the full field set whether or not it is
    included. Its "Comp N" label comes from its current position in the
    sequence and is never stored.
    """

    included: bool = True
    weight: str = "0.10"

    # Identification
    mls_number: str = ""
    address: str = ""

    # Transaction
    sale_price: str = ""
    contract_date: str = ""
    close_date: str = ""
    list_price: str = ""
    days_on_market: str = ""
    concessions: str = ""

    # Physical
    site_size: str = ""
    site_size_unit: SiteSizeUnit = SiteSizeUnit.SQFT
    year_built: str = ""
    bedrooms: str = ""
    full_baths: str = ""
    living_area: str = ""
    below_grade_finished: str = ""
    below_grade_unfinished: str = ""
    below_grade_baths: str = ""
    garage: str = ""
    carport: str = ""
    condition: Condition = Condition.GOOD
    design_style: str = ""
    stories: str = ""
    pool: bool = False

    # Adjustments (signed deltas, blank = no adjustment)
    adj_sale_type: str = ""
    adj_financing: str = ""
    adj_date: str = ""
    adj_location: str = ""
    adj_ownership: str = ""
    adj_lot: str = ""
    adj_view: str = ""
    adj_design: str = ""
    adj_quality: str = ""
    adj_age: str = ""
    adj_condition: str = ""
    adj_rooms: str = ""
    adj_bedroom: str = ""
    adj_bath: str = ""
    adj_gla: str = ""
    adj_basement_finished: str = ""
    adj_basement_unfinished: str = ""
    adj_functional: str = ""
    adj_heating_cooling: str = ""
    adj_energy: str = ""
    adj_vehicle: str = ""
    adj_patio: str = ""

    @property
    def site_size_sqft(self) -> float | None:
        """Site size in square feet, None if blank."""
        return _site_size_sqft(self.site_size, self.site_size_unit)

    def adjustment_values(self) -> dict[str, str]:
        """Raw line-item values keyed by line-item key, in grid order."""
        return {item.key: getattr(self, item.key) for item in ADJUSTMENT_LINE_ITEMS}


# --- Comparable sequence operations ---
# Sequences are tuples; every edit returns a new tuple.


def default_weight(position: int) -> str:
    """Default weight for a comparable at a 0-based position."""
    return "0.20" if position < 3 else "0.10"


def comparable_label(index: int) -> str:
    """Display label for a 0-based position, e.g. 0 -> 'Comp 1'."""
    return f"Comp {index + 1}"


def create_default_comparables(
    count: int = DEFAULT_COMPARABLE_COUNT,
) -> tuple[Comparable, ...]:
    """Blank comparables with position-based default weights."""
    return tuple(Comparable(weight=default_weight(i)) for i in range(count))


def add_comparable(comps: tuple[Comparable, ...]) -> tuple[Comparable, ...]:
    """Append a blank comparable."""
    return (*comps, Comparable(weight=default_weight(len(comps))))


def _check_index(comps: tuple[Comparable, ...], index: int) -> None:
    if not 0 <= index < len(comps):
        raise ComparableIndexError(index, len(comps))


def remove_comparable(
    comps: tuple[Comparable, ...], index: int
) -> tuple[Comparable, ...]:
    """
    Remove the comparable at a 0-based position.

    Later comparables shift down one position (Comp 4 becomes Comp 3).

    Raises:
        ComparableIndexError: If index is out of range
        LastComparableError: If it is the only comparable
    """
    _check_index(comps, index)
    if len(comps) == 1:
        raise LastComparableError("Cannot remove the only comparable")
    return comps[:index] + comps[index + 1 :]


def replace_comparable(
    comps: tuple[Comparable, ...], index: int, **changes: Any
) -> tuple[Comparable, ...]:
    """
    Return a new sequence with one comparable's fields changed.

    Raises:
        ComparableIndexError: If index is out of range
        TypeError: If a field name is unknown
    """
    _check_index(comps, index)
    updated = dataclasses.replace(comps[index], **changes)
    return comps[:index] + (updated,) + comps[index + 1 :]


@dataclass(frozen=True)
class Worksheet:
    """Everything the calculators need: subject, comparables and coefficients."""

    subject: SubjectProperty = field(default_factory=SubjectProperty)
    comparables: tuple[Comparable, ...] = field(
        default_factory=create_default_comparables
    )
    config: AdjustmentConfig = field(default_factory=AdjustmentConfig)
