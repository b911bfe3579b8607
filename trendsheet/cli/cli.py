"""
TrendSheet CLI - market trends and comparable reconciliation from the terminal.

Usage:
    trendsheet trends --mls.path ./mls_export.txt --effective-date 2024-06-01
    trendsheet reconcile --worksheet.path ./worksheet.yaml --suggest
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..market import (
    MarketDataError,
    MarketTrends,
    MLSDataset,
    compute_market_trends,
    load_column_specs,
)
from ..utils import format_currency, format_number, format_percent
from ..worksheet import (
    ADJUSTMENT_LINE_ITEMS,
    WorksheetError,
    analyze_comparables,
    comparable_label,
    load_worksheet,
    reconcile,
    suggest_adjustments,
)
from .config import add_common_args, default_effective_date, setup_logging
from .errors import TrendSheetCLIError

_LINE_ITEM_LABELS = {item.key: item.label for item in ADJUSTMENT_LINE_ITEMS}

# Widest histogram bar in characters
_BAR_WIDTH = 40


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise TrendSheetCLIError(f"File not found: {path}") from e
    except OSError as e:
        raise TrendSheetCLIError(f"Cannot read {path}: {e}") from e


def _print_trends(trends: MarketTrends) -> None:
    print(f"Market Trends (effective {trends.effective_date.isoformat()}):")
    print(f"  Total Sales (12 Mo): {trends.total_sales}")
    print(f"  Active Listings:     {trends.total_listings}")
    absorption = format_number(trends.absorption_rate, 1)
    print(f"  Absorption Rate:     {absorption} sales/month")
    print(f"  Months Supply:       {format_number(trends.months_of_supply, 1)}")
    direction = trends.direction.value if trends.direction else "N/A"
    print(
        f"  Trend:               {direction} "
        f"({format_percent(trends.median_price_change)} median price change)"
    )
    print()

    print("Quarterly Trend Analysis:")
    print(
        f"  {'Period':<10}{'# Sales':>8}{'Avg $/SF':>12}"
        f"{'Avg Price':>14}{'Median Price':>14}{'Median DOM':>12}"
    )
    for w in trends.windows:
        print(
            f"  {w.label:<10}{w.sale_count:>8}"
            f"{format_currency(w.average_price_per_area):>12}"
            f"{format_currency(w.average_price):>14}"
            f"{format_currency(w.median_price):>14}"
            f"{format_number(w.median_days_on_market):>12}"
        )
    print()

    histogram = trends.histogram
    if histogram.buckets:
        print("Price Distribution (Sales):")
        for bucket in histogram.buckets:
            bar = "#" * round(_BAR_WIDTH * bucket.count / histogram.peak)
            label = f"{format_currency(bucket.lower / 1000)}k"
            print(f"  {label:>10} | {bar} {bucket.count if bucket.count else ''}")
        print()


def cmd_trends(args: argparse.Namespace) -> int:
    """Execute the trends command."""
    specs = load_column_specs(Path(args.aliases_path)) if args.aliases_path else None
    dataset = MLSDataset(specs)
    count = dataset.import_text(_read_text(Path(args.mls_path)))
    print(f"{count} records loaded")
    print()

    trends = compute_market_trends(dataset.records, args.effective_date)
    _print_trends(trends)
    return 0


def cmd_reconcile(args: argparse.Namespace) -> int:
    """Execute the reconcile command."""
    worksheet = load_worksheet(Path(args.worksheet_path))
    comps = worksheet.comparables

    print("Adjusted Comparables:")
    print(
        f"  {'Comp':<9}{'Sale Price':>13}{'Net Adj':>11}{'Adjusted':>13}"
        f"{'Adj $/SF':>10}{'Net %':>8}{'Gross %':>9}"
    )
    for i, (comp, analysis) in enumerate(zip(comps, analyze_comparables(comps))):
        marker = "" if comp.included else " (excluded)"
        print(
            f"  {comparable_label(i):<9}"
            f"{format_currency(comp.sale_price):>13}"
            f"{format_currency(analysis.net_adjustment):>11}"
            f"{format_currency(analysis.adjusted_price):>13}"
            f"{format_currency(analysis.adjusted_price_per_area):>10}"
            f"{format_percent(analysis.net_adjustment_percent):>8}"
            f"{format_percent(analysis.gross_adjustment_percent):>9}"
            f"{marker}"
        )
    print()

    result = reconcile(comps)

    print("Comparable Weighting:")
    for row in result.rows:
        print(
            f"  {row.label:<9}{format_currency(row.adjusted_price):>13}"
            f"{format_percent(row.weight):>8}{format_currency(row.contribution):>13}"
        )
    balance = "" if result.weights_balanced else "  (weights do not total 100%)"
    print(f"  {'Total':<9}{'':>13}{format_percent(result.total_weight):>8}{balance}")
    print()

    ppa = result.price_per_area
    print("Value Indicators:")
    print(f"  Reconciled (Weighted): {format_currency(result.weighted_value)}")
    print(f"  Average Adjusted:      {format_currency(result.average_adjusted)}")
    print(f"  Median Adjusted:       {format_currency(result.median_adjusted)}")
    print(
        f"  Indicated Range:       {format_currency(result.low_adjusted)} - "
        f"{format_currency(result.high_adjusted)} "
        f"({format_currency(result.range)})"
    )
    print(
        f"  $/SF min/max/avg/med:  {format_currency(ppa.minimum)} / "
        f"{format_currency(ppa.maximum)} / {format_currency(ppa.average)} / "
        f"{format_currency(ppa.median)}"
    )

    if args.suggest:
        print()
        print("Suggested Adjustments (advisory, not applied):")
        for i, comp in enumerate(comps):
            if not comp.included:
                continue
            suggestions = suggest_adjustments(worksheet.subject, comp, worksheet.config)
            parts = [
                f"{_LINE_ITEM_LABELS[key]} {format_currency(value)}"
                for key, value in suggestions.items()
                if value is not None
            ]
            print(f"  {comparable_label(i)}: {', '.join(parts) or 'N/A'}")

    return 0


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="trendsheet",
        description="TrendSheet - appraisal market trends and reconciliation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_common_args(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Command to execute",
    )

    # ─────────────────────────────────────────────────────────────────────────
    # TRENDS command
    # ─────────────────────────────────────────────────────────────────────────
    trends_parser = subparsers.add_parser(
        "trends",
        help="Quarterly market trends from a pasted MLS export",
        description="Parse tab-delimited MLS text and summarize trailing sales.",
    )

    trends_parser.add_argument(
        "--mls.path",
        dest="mls_path",
        required=True,
        metavar="PATH",
        help="Path to tab-delimited MLS text (header row first)",
    )

    trends_parser.add_argument(
        "--effective-date",
        dest="effective_date",
        default=default_effective_date(),
        metavar="DATE",
        help="Reference date (default: $TRENDSHEET_EFFECTIVE_DATE or today)",
    )

    trends_parser.add_argument(
        "--aliases.path",
        dest="aliases_path",
        default=None,
        metavar="PATH",
        help="Custom column alias YAML (default: bundled table)",
    )

    # ─────────────────────────────────────────────────────────────────────────
    # RECONCILE command
    # ─────────────────────────────────────────────────────────────────────────
    reconcile_parser = subparsers.add_parser(
        "reconcile",
        help="Adjusted prices and weighted value from a worksheet file",
        description="Load subject and comparables from YAML and reconcile.",
    )

    reconcile_parser.add_argument(
        "--worksheet.path",
        dest="worksheet_path",
        required=True,
        metavar="PATH",
        help="Path to worksheet YAML (subject, comparables, config)",
    )

    reconcile_parser.add_argument(
        "--suggest",
        action="store_true",
        help="Show advisory adjustments from the config coefficients",
    )

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    config = parse_args(args)
    setup_logging(config.log_level)

    try:
        if config.command == "trends":
            return cmd_trends(config)
        elif config.command == "reconcile":
            return cmd_reconcile(config)
        else:
            print(f"ERROR: Unknown command: {config.command}", file=sys.stderr)
            return 2

    except (TrendSheetCLIError, WorksheetError, MarketDataError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
