"""
Market trend aggregation over MLS records.

Closed sales are bucketed into trailing 3-month windows ending at the
effective date (most recent first). Each window reports count, average
$/sf, average and median price, and median DOM. The module also derives
trailing-12-month absorption, months of supply, a sale price histogram
and the direction of median price movement.

Window bounds are [start, end): a sale closing exactly on a window's
start date belongs to that window, not the older one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

import numpy as np

from ..utils import (
    mean,
    median,
    parse_date,
    parse_number,
    round_half_up,
    safe_divide,
    subtract_months,
)
from .errors import InvalidEffectiveDateError
from .models import (
    HistogramBucket,
    MarketTrends,
    MLSRecord,
    PriceHistogram,
    TrendDirection,
    WindowStats,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrendConfig:
    """Configuration for trend aggregation."""

    window_months: int = 3
    """Length of each trailing window in months."""

    window_count: int = 4
    """Number of trailing windows. 4 x 3 months = trailing 12 months."""

    sold_keywords: tuple[str, ...] = ("sold", "sld", "sale", "closed", "cls")
    """Status substrings (case-insensitive) marking a closed sale."""

    sold_codes: tuple[str, ...] = ("s",)
    """Whole status values (case-insensitive) marking a closed sale."""

    active_keywords: tuple[str, ...] = ("act",)
    """Status substrings (case-insensitive) marking an active listing."""

    active_codes: tuple[str, ...] = ("a",)
    """Whole status values (case-insensitive) marking an active listing."""

    histogram_buckets: int = 10
    """Number of equal-width sale price buckets."""

    stable_threshold: float = 0.005
    """Median price change within +/- this (decimal) counts as stable."""

    @property
    def span_months(self) -> int:
        """Total months covered by all windows."""
        return self.window_months * self.window_count


# --- Classification ---


def _status_matches(
    record: MLSRecord, keywords: tuple[str, ...], codes: tuple[str, ...]
) -> bool:
    # One-letter MLS codes ("S", "A") only count as the whole status
    status = record.status.strip().lower()
    if not status:
        return False
    if status in (c.lower() for c in codes):
        return True
    return any(k.lower() in status for k in keywords)


def is_sale(record: MLSRecord, config: TrendConfig) -> bool:
    """Closed sale: sold-like status and a non-blank sale price."""
    sold = _status_matches(record, config.sold_keywords, config.sold_codes)
    return sold and bool(record.sale_price)


def is_active_listing(record: MLSRecord, config: TrendConfig) -> bool:
    """Active listing: active-like status."""
    return _status_matches(record, config.active_keywords, config.active_codes)


# --- Windows ---


def trailing_windows(
    effective_date: date, config: TrendConfig
) -> list[tuple[str, date, date]]:
    """
    Build (label, start, end) for each trailing window, most recent first.

    Example:
        >>> trailing_windows(date(2024, 6, 1), TrendConfig())[0]
        ('0-3 Mo', datetime.date(2024, 3, 1), datetime.date(2024, 6, 1))
    """
    windows = []
    months = config.window_months
    for k in range(1, config.window_count + 1):
        start = subtract_months(effective_date, months * k)
        end = subtract_months(effective_date, months * (k - 1))
        first_month = 0 if k == 1 else months * (k - 1) + 1
        windows.append((f"{first_month}-{months * k} Mo", start, end))
    return windows


def _window_stats(
    label: str, start: date, end: date, sales: list[MLSRecord]
) -> WindowStats:
    prices = [parse_number(s.sale_price) for s in sales]
    price_per_area = [
        safe_divide(parse_number(s.sale_price), parse_number(s.living_area))
        for s in sales
    ]
    doms = [parse_number(s.days_on_market) for s in sales]

    return WindowStats(
        label=label,
        start=start,
        end=end,
        sale_count=len(sales),
        average_price_per_area=round_half_up(mean(price_per_area)),
        average_price=round_half_up(mean(prices)),
        median_price=round_half_up(median(prices)),
        median_days_on_market=round_half_up(median(doms)),
    )


# --- Histogram ---


def price_histogram(
    prices: Iterable[float | None], bucket_count: int = 10
) -> PriceHistogram:
    """
    Count sale prices into equal-width buckets spanning [min, max].

    The maximum price is clamped into the last bucket. When every price
    is the same (or there is only one), the width is 1 so everything lands
    in bucket 0. Unavailable prices are skipped; no prices gives no buckets.
    """
    present = np.array([p for p in prices if p is not None], dtype=np.float64)
    if present.size == 0:
        return PriceHistogram(buckets=(), minimum=None, maximum=None, bucket_width=0.0)

    low = float(present.min())
    high = float(present.max())
    width = (high - low) / bucket_count if high != low else 1.0

    indices = np.floor((present - low) / width).astype(np.int64)
    indices = np.clip(indices, 0, bucket_count - 1)
    counts = np.bincount(indices, minlength=bucket_count)

    buckets = tuple(
        HistogramBucket(lower=low + i * width, count=int(counts[i]))
        for i in range(bucket_count)
    )
    return PriceHistogram(
        buckets=buckets, minimum=low, maximum=high, bucket_width=width
    )


# --- Direction ---


def _median_price_change(windows: tuple[WindowStats, ...]) -> float | None:
    """Change from the oldest to the newest window that has a median price."""
    medians = [w.median_price for w in windows if w.median_price is not None]
    if len(medians) < 2:
        return None
    newest, oldest = medians[0], medians[-1]
    return safe_divide(newest - oldest, oldest)


def categorize_change(change: float | None, threshold: float) -> TrendDirection | None:
    """Increasing / Declining beyond +/- threshold, otherwise Stable."""
    if change is None:
        return None
    if change > threshold:
        return TrendDirection.INCREASING
    if change < -threshold:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


# --- Entry point ---


def _resolve_effective_date(effective_date: date | str) -> date:
    resolved = parse_date(effective_date)
    if resolved is None:
        raise InvalidEffectiveDateError(
            f"Cannot parse effective date {effective_date!r} for trend analysis"
        )
    return resolved


def compute_market_trends(
    records: Iterable[MLSRecord],
    effective_date: date | str,
    config: TrendConfig | None = None,
) -> MarketTrends:
    """
    Aggregate MLS records into trailing-window market statistics.

    Args:
        records: MLS records (sales and listings mixed)
        effective_date: Reference date; windows end here
        config: Trend configuration. Uses defaults if None.

    Returns:
        MarketTrends with per-window stats, absorption, supply and histogram

    Raises:
        InvalidEffectiveDateError: If effective_date cannot be parsed
    """
    config = config or TrendConfig()
    eff = _resolve_effective_date(effective_date)
    records = list(records)

    sales = [r for r in records if is_sale(r, config)]
    listings = [r for r in records if is_active_listing(r, config)]
    close_dates = [parse_date(s.close_date) for s in sales]

    windows = []
    for label, start, end in trailing_windows(eff, config):
        in_window = [
            s for s, d in zip(sales, close_dates) if d is not None and start <= d < end
        ]
        windows.append(_window_stats(label, start, end, in_window))
        logger.debug(f"Window {label} [{start}, {end}): {len(in_window)} sales")
    windows_tuple = tuple(windows)

    total_sales = sum(w.sale_count for w in windows_tuple)
    total_listings = len(listings)
    absorption_rate = total_sales / config.span_months
    months_of_supply = (
        total_listings / absorption_rate if total_sales and total_listings else None
    )

    change = _median_price_change(windows_tuple)

    trends = MarketTrends(
        effective_date=eff,
        windows=windows_tuple,
        total_sales=total_sales,
        total_listings=total_listings,
        absorption_rate=absorption_rate,
        months_of_supply=months_of_supply,
        histogram=price_histogram(
            (parse_number(s.sale_price) for s in sales), config.histogram_buckets
        ),
        median_price_change=change,
        direction=categorize_change(change, config.stable_threshold),
    )

    logger.info(
        f"Market trends as of {eff}: {total_sales} sales in trailing "
        f"{config.span_months} months, {total_listings} active listings, "
        f"absorption {absorption_rate:.1f}/month"
    )
    return trends
