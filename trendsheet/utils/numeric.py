"""
Numeric helpers shared by the worksheet and market modules.

Every helper here follows one convention: a value that cannot be computed
is returned as None ("unavailable") rather than 0 or an exception.
Callers propagate None through ratios and averages; only the explicit
adjustment sums in worksheet.adjustments default blanks to zero.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

import numpy as np
import pandas as pd


def parse_number(raw: Any) -> float | None:
    """
    Parse a numeric-looking value.

    Args:
        raw: int, float or string. Strings are stripped before parsing.

    Returns:
        The parsed float, or None for None, blank, non-numeric,
        NaN or infinite input.

    Example:
        >>> parse_number(" 1800 ")
        1800.0
        >>> parse_number("n/a") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        # Python digit grouping ("1_000") is not a number in an MLS export
        if not text or "_" in text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(value):
        return None
    return value


def safe_divide(numerator: float | None, denominator: float | None) -> float | None:
    """Divide, returning None when either operand is None or the divisor is zero."""
    if numerator is None or denominator is None or denominator == 0:
        return None
    return numerator / denominator


def _present(values: Iterable[Any]) -> np.ndarray:
    """Filter to values that parse as numbers."""
    parsed = [parse_number(v) for v in values]
    return np.array([v for v in parsed if v is not None], dtype=np.float64)


def mean(values: Iterable[Any]) -> float | None:
    """Arithmetic mean over present numeric values, None if there are none."""
    present = _present(values)
    if present.size == 0:
        return None
    return float(np.mean(present))


def median(values: Iterable[Any]) -> float | None:
    """
    Median over present numeric values, None if there are none.

    Even-length sequences average the two central sorted values.
    """
    present = _present(values)
    if present.size == 0:
        return None
    return float(np.median(present))


def round_half_up(value: float | None) -> int | None:
    """Round to nearest whole unit, halves up (2.5 -> 3, -2.5 -> -2)."""
    if value is None:
        return None
    return int(math.floor(value + 0.5))


def subtract_months(d: date, months: int) -> date:
    """
    Move a date back by whole calendar months.

    The day is clamped to the length of the target month,
    so 2024-05-31 minus 3 months is 2024-02-29.
    """
    return (pd.Timestamp(d) - pd.DateOffset(months=months)).date()


def parse_date(raw: Any) -> date | None:
    """
    Parse a date from an MLS cell or user input.

    Accepts date/datetime objects and the text shapes MLS exports use:
    ISO, month-first US dates with slashes or dashes, and written-out
    months ("Mar 1, 2024"). A time part is ignored. Returns None if the
    text is not a date.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None

    parsed = pd.to_datetime(raw.strip(), errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()
