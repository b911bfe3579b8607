"""Shared numeric and formatting helpers."""

from .formatting import (
    NOT_AVAILABLE,
    format_currency,
    format_number,
    format_percent,
)
from .numeric import (
    mean,
    median,
    parse_date,
    parse_number,
    round_half_up,
    safe_divide,
    subtract_months,
)

__all__ = [
    # Parsing
    "parse_number",
    "parse_date",
    # Arithmetic
    "safe_divide",
    "round_half_up",
    "subtract_months",
    # Statistics
    "mean",
    "median",
    # Formatting
    "NOT_AVAILABLE",
    "format_number",
    "format_currency",
    "format_percent",
]
