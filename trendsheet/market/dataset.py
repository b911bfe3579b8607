"""In-memory MLS record collection with whole-collection replacement."""

from __future__ import annotations

import logging

from .models import MLSRecord
from .parser import ColumnSpec, parse_mls_text, split_mls_lines

logger = logging.getLogger(__name__)

# Rows shown in the record table before truncating
PREVIEW_LIMIT = 100


class MLSDataset:
    """
    The current set of MLS records.

    Records are only ever swapped out as a whole: each import replaces the
    previous collection and there is no merge or per-row edit. Text without
    a header and at least one data line is ignored, so only clear() empties
    a loaded collection.

    Usage:
        dataset = MLSDataset()
        count = dataset.import_text(pasted_text)
        print(f"{count} records loaded")
    """

    def __init__(self, specs: tuple[ColumnSpec, ...] | None = None):
        """
        Initialize an empty dataset.

        Args:
            specs: Column alias specs for imports. Uses the bundled table if None.
        """
        self._specs = specs
        self._records: tuple[MLSRecord, ...] = ()

    @property
    def records(self) -> tuple[MLSRecord, ...]:
        """Current records in import order."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"MLSDataset({len(self._records)} records)"

    def import_text(self, raw: str) -> int:
        """
        Replace the collection with records parsed from pasted text.

        Blank or header-only text leaves the current records in place.

        Returns:
            Number of records now loaded
        """
        if len(split_mls_lines(raw)) < 2:
            logger.warning(
                f"MLS import has no data rows; keeping {len(self._records)} records"
            )
            return len(self._records)

        self._records = parse_mls_text(raw, self._specs)
        logger.info(f"MLS import replaced dataset: {len(self._records)} records loaded")
        return len(self._records)

    def clear(self) -> None:
        """Remove all records."""
        self._records = ()

    def preview(self, limit: int = PREVIEW_LIMIT) -> tuple[MLSRecord, ...]:
        """First records for display; the table shows at most `limit` rows."""
        return self._records[:limit]
