"""Data models for MLS records and market trend results."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from ..utils import parse_number, safe_divide


@dataclass(frozen=True)
class MLSRecord:
    """
    One listing or sale row from an MLS export.

    Every field is normalized text. Numeric-looking fields have currency
    symbols and thousands separators removed but are never converted here;
    consumers parse on use, so a bad cell degrades to None downstream.
    """

    mls_number: str = ""
    status: str = ""
    list_price: str = ""
    sale_price: str = ""
    list_date: str = ""
    close_date: str = ""
    days_on_market: str = ""
    pending_date: str = ""
    living_area: str = ""
    year_built: str = ""
    acres: str = ""
    bedrooms: str = ""
    baths: str = ""
    garage: str = ""
    garage_type: str = ""
    pool: str = ""
    concessions: str = ""
    reo: str = ""
    short_sale: str = ""
    stories: str = ""

    @property
    def price_per_area(self) -> float | None:
        """Sale price per square foot of living area."""
        return safe_divide(
            parse_number(self.sale_price), parse_number(self.living_area)
        )

    @property
    def status_code(self) -> str:
        """Lower-cased first three letters of the status, e.g. 'SLD' -> 'sld'."""
        return self.status.lower()[:3]

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return dataclasses.asdict(self)


MLS_RECORD_FIELDS: tuple[str, ...] = tuple(
    f.name for f in dataclasses.fields(MLSRecord)
)


class TrendDirection(Enum):
    """Direction of median price movement across the trailing windows."""

    INCREASING = "Increasing"
    STABLE = "Stable"
    DECLINING = "Declining"


@dataclass(frozen=True)
class WindowStats:
    """
    Sales statistics for one trailing 3-month window.

    Window bounds are [start, end): start inclusive, end exclusive.
    Price and DOM figures are rounded to whole units; None when the
    window has no qualifying values.
    """

    label: str
    start: date
    end: date
    sale_count: int
    average_price_per_area: int | None
    average_price: int | None
    median_price: int | None
    median_days_on_market: int | None

    def contains(self, d: date) -> bool:
        """True if d falls inside [start, end)."""
        return self.start <= d < self.end

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "label": self.label,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "sale_count": self.sale_count,
            "average_price_per_area": self.average_price_per_area,
            "average_price": self.average_price,
            "median_price": self.median_price,
            "median_days_on_market": self.median_days_on_market,
        }


@dataclass(frozen=True)
class HistogramBucket:
    """One equal-width sale price bucket."""

    lower: float
    """Inclusive lower bound of the bucket."""

    count: int


@dataclass(frozen=True)
class PriceHistogram:
    """Distribution of all sale prices over fixed equal-width buckets."""

    buckets: tuple[HistogramBucket, ...]
    minimum: float | None
    maximum: float | None
    bucket_width: float

    @property
    def total(self) -> int:
        """Number of sales counted."""
        return sum(b.count for b in self.buckets)

    @property
    def peak(self) -> int:
        """Largest bucket count, for scaling bars."""
        return max((b.count for b in self.buckets), default=0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "minimum": self.minimum,
            "maximum": self.maximum,
            "bucket_width": self.bucket_width,
            "buckets": [{"lower": b.lower, "count": b.count} for b in self.buckets],
        }


@dataclass(frozen=True)
class MarketTrends:
    """
    Complete market trend analysis relative to an effective date.

    windows[0] is the most recent quarter (0-3 months back).
    """

    effective_date: date
    windows: tuple[WindowStats, ...]
    total_sales: int
    """Sales closing inside the trailing 12 months."""

    total_listings: int
    """Active listings, regardless of date."""

    absorption_rate: float
    """Sales per month over the trailing 12 months."""

    months_of_supply: float | None
    histogram: PriceHistogram
    median_price_change: float | None
    """Median price change, oldest to newest populated window (decimal)."""

    direction: TrendDirection | None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "effective_date": self.effective_date.isoformat(),
            "windows": [w.to_dict() for w in self.windows],
            "total_sales": self.total_sales,
            "total_listings": self.total_listings,
            "absorption_rate": round(self.absorption_rate, 4),
            "months_of_supply": (
                round(self.months_of_supply, 4)
                if self.months_of_supply is not None
                else None
            ),
            "histogram": self.histogram.to_dict(),
            "median_price_change": self.median_price_change,
            "direction": self.direction.value if self.direction else None,
        }
