"""Custom exceptions for worksheet module."""


class WorksheetError(Exception):
    """Base exception for worksheet-related errors."""

    pass


class ComparableIndexError(WorksheetError):
    """
    Raised when a comparable position does not exist.

    This can happen when:
    - Removing or editing "Comp N" after the sequence shrank
    - A caller cached a position instead of recomputing it
    """

    def __init__(self, index: int, size: int):
        super().__init__(
            f"Comparable index {index} out of range for {size} comparables"
        )
        self.index = index
        self.size = size


class LastComparableError(WorksheetError):
    """
    Raised when removing a comparable would leave the worksheet without one.

    This can happen when:
    - Removing "Comp 1" when it is the only comparable left
    """

    pass


class WorksheetFileError(WorksheetError):
    """
    Raised when a worksheet file cannot be loaded.

    This can happen when:
    - File not found
    - Invalid YAML syntax
    - Top-level document is not a mapping
    - A comparable or subject entry has unknown fields
    """

    pass
