"""Custom exceptions for TrendSheet CLI operations."""


class TrendSheetCLIError(Exception):
    """
    Raised when a CLI command cannot complete.

    This can happen when:
    - Input file not found or unreadable
    - Worksheet or alias configuration is invalid
    - Effective date cannot be parsed
    """

    pass
