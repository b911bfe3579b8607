"""
Worksheet module for comparable adjustments and value reconciliation.

This module provides:
- Subject, comparable and coefficient models with text-typed numeric fields
- Per-comparable adjustment arithmetic (net, gross, adjusted price, ratios)
- Weighted reconciliation over the included comparables
- Advisory adjustment suggestions from the coefficients
- Worksheet loading from YAML

Usage:
    from trendsheet.worksheet import (
        Comparable,
        analyze_comparable,
        reconcile,
    )

    comps = (Comparable(sale_price="345000", living_area="1800", adj_gla="2250"),)
    print(analyze_comparable(comps[0]).adjusted_price)
    print(reconcile(comps).weighted_value)
"""

from .adjustments import (
    AdjustmentGrid,
    AdjustmentGridRow,
    ComparableAnalysis,
    adjusted_price,
    adjusted_price_per_area,
    adjustment_grid,
    analyze_comparable,
    analyze_comparables,
    gross_adjustment,
    gross_adjustment_percent,
    net_adjustment,
    net_adjustment_percent,
    suggest_adjustments,
)
from .errors import (
    ComparableIndexError,
    LastComparableError,
    WorksheetError,
    WorksheetFileError,
)
from .loader import load_worksheet, parse_worksheet
from .models import (
    ADJUSTMENT_LINE_ITEMS,
    AdjustmentConfig,
    AdjustmentLineItem,
    Comparable,
    Condition,
    SiteSizeUnit,
    SubjectProperty,
    Worksheet,
    add_comparable,
    comparable_label,
    create_default_comparables,
    default_weight,
    remove_comparable,
    replace_comparable,
)
from .reconciliation import (
    PricePerAreaStats,
    ReconciliationResult,
    WeightingRow,
    reconcile,
)

__all__ = [
    # Models
    "ADJUSTMENT_LINE_ITEMS",
    "AdjustmentConfig",
    "AdjustmentLineItem",
    "Comparable",
    "Condition",
    "SiteSizeUnit",
    "SubjectProperty",
    "Worksheet",
    # Sequence operations
    "add_comparable",
    "comparable_label",
    "create_default_comparables",
    "default_weight",
    "remove_comparable",
    "replace_comparable",
    # Adjustments
    "ComparableAnalysis",
    "AdjustmentGrid",
    "AdjustmentGridRow",
    "adjusted_price",
    "adjusted_price_per_area",
    "adjustment_grid",
    "analyze_comparable",
    "analyze_comparables",
    "gross_adjustment",
    "gross_adjustment_percent",
    "net_adjustment",
    "net_adjustment_percent",
    "suggest_adjustments",
    # Reconciliation
    "PricePerAreaStats",
    "ReconciliationResult",
    "WeightingRow",
    "reconcile",
    # Loading
    "load_worksheet",
    "parse_worksheet",
    # Errors
    "WorksheetError",
    "ComparableIndexError",
    "LastComparableError",
    "WorksheetFileError",
]
