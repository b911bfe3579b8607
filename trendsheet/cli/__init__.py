"""
Command-line interface for TrendSheet.

This module provides two read-only commands:
- trends: quarterly market statistics from a pasted MLS export
- reconcile: adjusted prices and weighted value from a worksheet file

Usage:
    # Market trends as of an effective date
    trendsheet trends --mls.path ./mls_export.txt --effective-date 2024-06-01

    # Reconcile a worksheet with advisory suggestions
    trendsheet reconcile --worksheet.path ./worksheet.yaml --suggest

Neither command writes files; output goes to stdout and errors to stderr.
"""

from .cli import main, parse_args
from .errors import TrendSheetCLIError

__all__ = [
    # Entry points
    "main",
    "parse_args",
    # Errors
    "TrendSheetCLIError",
]
