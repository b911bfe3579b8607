"""
Market module for MLS import and trend analysis.

This module provides:
- Tolerant tab-delimited MLS text parsing with a declarative alias table
- An MLS record collection replaced wholesale on every import
- Trailing-window sales statistics, absorption and months of supply
- Sale price distribution and trend direction

Usage:
    from trendsheet.market import MLSDataset, compute_market_trends

    dataset = MLSDataset()
    dataset.import_text(pasted_text)
    trends = compute_market_trends(dataset.records, "2024-06-01")
    for window in trends.windows:
        print(window.label, window.sale_count, window.median_price)
"""

from .dataset import PREVIEW_LIMIT, MLSDataset
from .errors import (
    ColumnAliasConfigError,
    InvalidEffectiveDateError,
    MarketDataError,
)
from .models import (
    MLS_RECORD_FIELDS,
    HistogramBucket,
    MarketTrends,
    MLSRecord,
    PriceHistogram,
    TrendDirection,
    WindowStats,
)
from .parser import (
    IDENTIFYING_FIELDS,
    ColumnSpec,
    Normalization,
    load_column_specs,
    parse_mls_text,
    resolve_columns,
    split_mls_lines,
)
from .trends import (
    TrendConfig,
    categorize_change,
    compute_market_trends,
    is_active_listing,
    is_sale,
    price_histogram,
    trailing_windows,
)

__all__ = [
    # Entry points
    "MLSDataset",
    "parse_mls_text",
    "compute_market_trends",
    # Parser
    "ColumnSpec",
    "Normalization",
    "IDENTIFYING_FIELDS",
    "load_column_specs",
    "resolve_columns",
    "split_mls_lines",
    # Trends
    "TrendConfig",
    "categorize_change",
    "is_active_listing",
    "is_sale",
    "price_histogram",
    "trailing_windows",
    # Models
    "MLS_RECORD_FIELDS",
    "MLSRecord",
    "HistogramBucket",
    "MarketTrends",
    "PriceHistogram",
    "TrendDirection",
    "WindowStats",
    "PREVIEW_LIMIT",
    # Errors
    "MarketDataError",
    "ColumnAliasConfigError",
    "InvalidEffectiveDateError",
]
