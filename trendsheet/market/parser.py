"""
Tolerant parser for tab-delimited MLS exports pasted as text.

The first non-blank line is the header row. Each target field is mapped
to the first header containing one of its aliases (case-insensitive
substring match, see column_aliases.yaml). Missing, extra and reordered
columns are all fine; the parser never raises on row content.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

import yaml

from .errors import ColumnAliasConfigError
from .models import MLS_RECORD_FIELDS, MLSRecord

logger = logging.getLogger(__name__)

_DEFAULT_ALIASES_PATH = Path(__file__).parent / "column_aliases.yaml"

_CURRENCY_CHARS = re.compile(r"[$,]")

# Fields that identify a data row; a row with all of them blank is dropped
IDENTIFYING_FIELDS = ("mls_number", "sale_price", "list_price")


class Normalization(Enum):
    """Cleanup applied to a cell before storing it."""

    CURRENCY = "currency"
    """Strip '$' and thousands-separator commas."""

    AREA = "area"
    """Strip thousands-separator commas only."""


@dataclass(frozen=True)
class ColumnSpec:
    """Header aliases and cleanup rule for one MLSRecord field."""

    field: str
    aliases: tuple[str, ...]
    normalize: Normalization | None = None

    def matches(self, header: str) -> bool:
        """True if the header contains any alias, ignoring case."""
        lowered = header.lower()
        return any(alias.lower() in lowered for alias in self.aliases)

    def clean(self, value: str) -> str:
        """Apply this field's normalization to a trimmed cell."""
        if self.normalize is Normalization.CURRENCY:
            return _CURRENCY_CHARS.sub("", value)
        if self.normalize is Normalization.AREA:
            return value.replace(",", "")
        return value


def _build_spec(field: str, entry: object) -> ColumnSpec:
    if field not in MLS_RECORD_FIELDS:
        raise ColumnAliasConfigError(f"Unknown MLS field in alias table: '{field}'")
    if not isinstance(entry, dict):
        raise ColumnAliasConfigError(f"Alias entry for '{field}' must be a mapping")

    aliases = entry.get("aliases")
    if not aliases or not isinstance(aliases, list):
        raise ColumnAliasConfigError(f"Field '{field}' has no aliases")

    normalize = entry.get("normalize")
    try:
        normalization = Normalization(normalize) if normalize else None
    except ValueError as e:
        raise ColumnAliasConfigError(
            f"Unknown normalize kind '{normalize}' for field '{field}'"
        ) from e

    return ColumnSpec(
        field=field,
        aliases=tuple(str(a) for a in aliases),
        normalize=normalization,
    )


def load_column_specs(path: Path | None = None) -> tuple[ColumnSpec, ...]:
    """
    Load the alias table from YAML.

    Args:
        path: Path to an alias YAML file. If None, uses the bundled table.

    Returns:
        One ColumnSpec per field, in file order.

    Raises:
        ColumnAliasConfigError: If the file is missing or malformed
    """
    if path is None:
        return _default_column_specs()
    return _read_column_specs(path)


@lru_cache(maxsize=1)
def _default_column_specs() -> tuple[ColumnSpec, ...]:
    return _read_column_specs(_DEFAULT_ALIASES_PATH)


def _read_column_specs(path: Path) -> tuple[ColumnSpec, ...]:
    try:
        with open(path) as f:
            table = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ColumnAliasConfigError(f"Column alias file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ColumnAliasConfigError(f"Invalid YAML in column alias file: {e}") from e

    if not isinstance(table, dict) or not table:
        raise ColumnAliasConfigError(
            f"Column alias file is empty or not a mapping: {path}"
        )

    specs = tuple(_build_spec(field, entry) for field, entry in table.items())
    logger.debug(f"Loaded {len(specs)} column alias specs from {path}")
    return specs


def resolve_columns(
    headers: list[str],
    specs: tuple[ColumnSpec, ...] | None = None,
) -> dict[str, int]:
    """
    Map target fields to header positions.

    For each field, the first header (left to right) containing any of
    its aliases wins. Unmatched fields are left out of the result.

    Example:
        >>> resolve_columns(["MLS #", "Status", "Sold Price"])
        {'mls_number': 0, 'status': 1, 'sale_price': 2}
    """
    if specs is None:
        specs = load_column_specs()

    columns: dict[str, int] = {}
    for spec in specs:
        for index, header in enumerate(headers):
            if spec.matches(header.strip()):
                columns[spec.field] = index
                break
    return columns


def _parse_row(
    line: str,
    columns: dict[str, int],
    specs: tuple[ColumnSpec, ...],
) -> MLSRecord:
    cells = line.split("\t")
    values: dict[str, str] = {}
    for spec in specs:
        index = columns.get(spec.field)
        if index is None:
            continue
        cell = cells[index].strip() if index < len(cells) else ""
        values[spec.field] = spec.clean(cell)
    return MLSRecord(**values)


def _is_data_row(record: MLSRecord) -> bool:
    return any(getattr(record, name) for name in IDENTIFYING_FIELDS)


def split_mls_lines(raw: str) -> list[str]:
    """Non-blank lines of pasted text. Rows end at LF, with an optional CR."""
    return [line.rstrip("\r") for line in raw.split("\n") if line.strip()]


def parse_mls_text(
    raw: str,
    specs: tuple[ColumnSpec, ...] | None = None,
) -> tuple[MLSRecord, ...]:
    """
    Parse pasted tab-delimited MLS text into records.

    Args:
        raw: Header line followed by data lines, tab-separated
        specs: Column alias specs. Defaults to the bundled table.

    Returns:
        Records in input order. Rows with no MLS number, sale price or
        list price are dropped. Blank or header-only text yields ().
    """
    if specs is None:
        specs = load_column_specs()

    lines = split_mls_lines(raw)
    if len(lines) < 2:
        if lines:
            logger.warning("MLS text has a header row but no data rows")
        return ()

    headers = [h.replace("\ufeff", "").strip() for h in lines[0].split("\t")]
    columns = resolve_columns(headers, specs)
    logger.debug(
        f"Resolved {len(columns)} of {len(specs)} fields from {len(headers)} headers: "
        f"{columns}"
    )

    parsed = [_parse_row(line, columns, specs) for line in lines[1:]]
    records = tuple(r for r in parsed if _is_data_row(r))

    discarded = len(parsed) - len(records)
    logger.info(
        f"Parsed {len(records)} MLS records from {len(parsed)} data rows"
        + (f" ({discarded} discarded)" if discarded else "")
    )
    return records
