"""Display formatting with a fixed en-US convention. Never raises."""

from __future__ import annotations

from typing import Any

from .numeric import parse_number

NOT_AVAILABLE = "N/A"


def format_number(value: Any, decimals: int = 0) -> str:
    """Format with thousands separators, e.g. 1234567 -> '1,234,567'."""
    number = parse_number(value)
    if number is None:
        return NOT_AVAILABLE
    return f"{number:,.{decimals}f}"


def format_currency(value: Any, decimals: int = 0) -> str:
    """Format as dollars, e.g. 345000 -> '$345,000' and -1500 -> '-$1,500'."""
    number = parse_number(value)
    if number is None:
        return NOT_AVAILABLE
    body = f"{abs(number):,.{decimals}f}"
    # -0.4 at zero decimals should read "$0", not "-$0"
    sign = "-" if number < 0 and body.strip("0.,") else ""
    return f"{sign}${body}"


def format_percent(value: Any, decimals: int = 1) -> str:
    """Format a fraction of 1 as a percentage, e.g. 0.085 -> '8.5%'."""
    number = parse_number(value)
    if number is None:
        return NOT_AVAILABLE
    return f"{number * 100:.{decimals}f}%"
