"""Unit tests for the trendsheet command-line interface."""

from pathlib import Path

import pytest

from trendsheet.cli import main, parse_args

WORKSHEET_YAML = """\
subject:
  living_area: 1850
  full_baths: 2
comparables:
  - sale_price: 300000
    living_area: 1800
    full_baths: 2
    weight: 0.5
  - sale_price: 320000
    living_area: 1900
    full_baths: 2
    weight: 0.5
  - sale_price: 150000
    included: false
"""


@pytest.fixture
def mls_file(tmp_path: Path, mls_text: str) -> Path:
    """MLS export written to a temp file."""
    path = tmp_path / "mls.txt"
    path.write_text(mls_text)
    return path


@pytest.fixture
def worksheet_file(tmp_path: Path) -> Path:
    """Worksheet YAML written to a temp file."""
    path = tmp_path / "worksheet.yaml"
    path.write_text(WORKSHEET_YAML)
    return path


class TestParseArgs:
    """Tests for argument parsing."""

    def test_trends_args(self) -> None:
        """Dotted options map to underscore destinations."""
        args = parse_args(
            ["trends", "--mls.path", "x.txt", "--effective-date", "2024-06-01"]
        )
        assert args.command == "trends"
        assert args.mls_path == "x.txt"
        assert args.effective_date == "2024-06-01"
        assert args.aliases_path is None

    def test_effective_date_from_env(self, monkeypatch) -> None:
        """Effective date defaults to TRENDSHEET_EFFECTIVE_DATE."""
        monkeypatch.setenv("TRENDSHEET_EFFECTIVE_DATE", "2023-12-31")
        args = parse_args(["trends", "--mls.path", "x.txt"])
        assert args.effective_date == "2023-12-31"

    def test_log_level_from_env(self, monkeypatch) -> None:
        """Log level defaults to LOG_LEVEL."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        args = parse_args(["reconcile", "--worksheet.path", "w.yaml"])
        assert args.log_level == "DEBUG"
        assert args.suggest is False

    def test_command_required(self) -> None:
        """A subcommand is required."""
        with pytest.raises(SystemExit):
            parse_args([])

    def test_path_required(self) -> None:
        """trends needs an MLS file."""
        with pytest.raises(SystemExit):
            parse_args(["trends"])


class TestTrendsCommand:
    """Tests for the trends command."""

    def test_prints_summary(self, mls_file: Path, capsys) -> None:
        """Summary, window table and histogram are printed."""
        code = main(
            ["trends", "--mls.path", str(mls_file), "--effective-date", "2024-06-01"]
        )
        out = capsys.readouterr().out

        assert code == 0
        assert "7 records loaded" in out
        assert "Total Sales (12 Mo): 4" in out
        assert "Active Listings:     2" in out
        assert "Months Supply:       6.0" in out
        assert "Increasing" in out
        assert "0-3 Mo" in out
        assert "$310,000" in out
        assert "Price Distribution" in out

    def test_empty_windows_show_unavailable(self, mls_file: Path, capsys) -> None:
        """Windows without sales print N/A rather than zero."""
        main(["trends", "--mls.path", str(mls_file), "--effective-date", "2024-06-01"])
        out = capsys.readouterr().out
        seven_to_nine = next(line for line in out.splitlines() if "7-9 Mo" in line)
        assert "N/A" in seven_to_nine

    def test_missing_file(self, tmp_path: Path, capsys) -> None:
        """Missing input exits 1 with an error message."""
        code = main(["trends", "--mls.path", str(tmp_path / "none.txt")])
        assert code == 1
        assert "ERROR: File not found" in capsys.readouterr().err

    def test_invalid_effective_date(self, mls_file: Path, capsys) -> None:
        """Unparseable effective date exits 1."""
        code = main(["trends", "--mls.path", str(mls_file), "--effective-date", "soon"])
        assert code == 1
        assert "Cannot parse effective date" in capsys.readouterr().err

    def test_bad_alias_file(self, mls_file: Path, tmp_path: Path, capsys) -> None:
        """Broken alias table exits 1."""
        aliases = tmp_path / "aliases.yaml"
        aliases.write_text("bogus:\n  aliases: [X]\n")
        code = main(
            ["trends", "--mls.path", str(mls_file), "--aliases.path", str(aliases)]
        )
        assert code == 1
        assert "Unknown MLS field" in capsys.readouterr().err


class TestReconcileCommand:
    """Tests for the reconcile command."""

    def test_prints_reconciliation(self, worksheet_file: Path, capsys) -> None:
        """Per-comparable rows and value indicators are printed."""
        code = main(["reconcile", "--worksheet.path", str(worksheet_file)])
        out = capsys.readouterr().out

        assert code == 0
        assert "Comp 3" in out
        assert "(excluded)" in out
        assert "Reconciled (Weighted): $310,000" in out
        assert "Suggested Adjustments" not in out

    def test_suggestions(self, worksheet_file: Path, capsys) -> None:
        """--suggest prints advisory values for included comparables only."""
        code = main(["reconcile", "--worksheet.path", str(worksheet_file), "--suggest"])
        out = capsys.readouterr().out

        assert code == 0
        assert "Suggested Adjustments" in out
        # 50 sf larger subject at $45/sf
        assert "GLA $2,250" in out
        assert "GLA -$2,250" in out
        suggestion_lines = out.split("Suggested Adjustments")[1]
        assert "Comp 3" not in suggestion_lines

    def test_missing_worksheet(self, tmp_path: Path, capsys) -> None:
        """Missing worksheet exits 1."""
        code = main(["reconcile", "--worksheet.path", str(tmp_path / "none.yaml")])
        assert code == 1
        assert "Worksheet file not found" in capsys.readouterr().err
