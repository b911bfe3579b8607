"""Unit tests for MLSDataset."""

import pytest

from trendsheet.market import PREVIEW_LIMIT, MLSDataset, load_column_specs


class TestMLSDataset:
    """Tests for MLSDataset import and replacement."""

    def test_starts_empty(self) -> None:
        """New dataset has no records."""
        dataset = MLSDataset()
        assert len(dataset) == 0
        assert dataset.records == ()

    def test_import(self, mls_text: str) -> None:
        """Import parses every data row and reports the count."""
        dataset = MLSDataset()
        assert dataset.import_text(mls_text) == 7
        assert len(dataset) == 7
        assert repr(dataset) == "MLSDataset(7 records)"

    def test_import_replaces_previous(self, mls_text: str) -> None:
        """A second import replaces rather than merges."""
        dataset = MLSDataset()
        dataset.import_text(mls_text)
        dataset.import_text("MLS #\tStatus\nZ1\tSold")
        assert [r.mls_number for r in dataset.records] == ["Z1"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n", "MLS #\tStatus\n"])
    def test_blank_import_keeps_records(self, mls_text: str, text: str) -> None:
        """Blank or header-only text leaves the loaded records in place."""
        dataset = MLSDataset()
        dataset.import_text(mls_text)
        before = dataset.records
        assert dataset.import_text(text) == 7
        assert dataset.records == before

    def test_import_with_only_dropped_rows_empties(self, mls_text: str) -> None:
        """Data lines that all lack identifiers still replace the collection."""
        dataset = MLSDataset()
        dataset.import_text(mls_text)
        assert dataset.import_text("MLS #\tStatus\n\tSold") == 0
        assert dataset.records == ()

    def test_clear(self, mls_text: str) -> None:
        """Clear removes all records."""
        dataset = MLSDataset()
        dataset.import_text(mls_text)
        dataset.clear()
        assert len(dataset) == 0

    def test_preview_limit(self) -> None:
        """Preview shows at most the limit, in import order."""
        rows = ["MLS #"] + [f"M{i}" for i in range(PREVIEW_LIMIT + 20)]
        dataset = MLSDataset()
        dataset.import_text("\n".join(rows))
        assert len(dataset) == PREVIEW_LIMIT + 20
        assert len(dataset.preview()) == PREVIEW_LIMIT
        assert dataset.preview()[0].mls_number == "M0"
        assert len(dataset.preview(5)) == 5

    def test_custom_specs(self) -> None:
        """Imports use the dataset's column specs."""
        specs = tuple(s for s in load_column_specs() if s.field != "status")
        dataset = MLSDataset(specs)
        dataset.import_text("MLS #\tStatus\nA1\tSold")
        assert dataset.records[0].status == ""
