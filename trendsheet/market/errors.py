"""Custom exceptions for market module."""


class MarketDataError(Exception):
    """Base exception for market-data-related errors."""

    pass


class ColumnAliasConfigError(MarketDataError):
    """
    Raised when the column alias table is invalid or cannot be loaded.

    This can happen when:
    - column_aliases.yaml not found
    - Invalid YAML syntax
    - A field has no aliases or an unknown normalize kind
    - A field name is not an MLSRecord attribute
    """

    pass


class InvalidEffectiveDateError(MarketDataError):
    """
    Raised when the trend reference date cannot be parsed.

    This can happen when:
    - Effective date is blank
    - Effective date is not ISO (YYYY-MM-DD) or M/D/YYYY
    """

    pass
