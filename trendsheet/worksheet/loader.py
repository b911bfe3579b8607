"""Load a worksheet (subject, comparables, coefficients) from YAML."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import WorksheetFileError
from .models import (
    AdjustmentConfig,
    Comparable,
    Condition,
    SiteSizeUnit,
    SubjectProperty,
    Worksheet,
    create_default_comparables,
    default_weight,
)

logger = logging.getLogger(__name__)

_BOOL_FIELDS = {"included", "pool"}


def _to_text(value: Any) -> str:
    """YAML scalars to the text form the models store."""
    if value is None:
        return ""
    return str(value).strip()


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1")
    return bool(value)


def _convert_fields(cls: type, data: dict[str, Any], context: str) -> dict[str, Any]:
    """Validate keys against the dataclass and coerce values to field types."""
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise WorksheetFileError(f"Unknown fields in {context}: {unknown}")

    converted: dict[str, Any] = {}
    for name, value in data.items():
        try:
            if name == "condition":
                converted[name] = Condition.parse(_to_text(value))
            elif name == "site_size_unit":
                converted[name] = SiteSizeUnit(_to_text(value).lower())
            elif name in _BOOL_FIELDS:
                converted[name] = _to_bool(value)
            else:
                converted[name] = _to_text(value)
        except ValueError as e:
            raise WorksheetFileError(f"Invalid {name!r} in {context}: {e}") from e
    return converted


def _build_config(data: dict[str, Any]) -> AdjustmentConfig:
    known = {f.name for f in dataclasses.fields(AdjustmentConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise WorksheetFileError(f"Unknown fields in config: {unknown}")
    try:
        return AdjustmentConfig(**{k: float(v) for k, v in data.items()})
    except (TypeError, ValueError) as e:
        raise WorksheetFileError(f"Invalid adjustment config value: {e}") from e


def _section(document: dict[str, Any], key: str, kind: type) -> Any:
    value = document.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise WorksheetFileError(
            f"'{key}' must be a {kind.__name__}, got {type(value).__name__}"
        )
    return value


def parse_worksheet(document: dict[str, Any]) -> Worksheet:
    """
    Build a Worksheet from an already-parsed mapping.

    Expected shape (every section optional):
        subject: {effective_date: 2024-06-01, living_area: 1850, ...}
        comparables:
          - {sale_price: 345000, living_area: 1800, adj_gla: 2250, ...}
        config: {gla_per_sqft: 45, ...}

    Comparables without an explicit weight get the position default.

    Raises:
        WorksheetFileError: If a section has the wrong type or unknown fields
    """
    subject_data = _section(document, "subject", dict)
    comps_data = _section(document, "comparables", list)
    config_data = _section(document, "config", dict)

    subject_fields = _convert_fields(SubjectProperty, subject_data, "subject")
    subject = SubjectProperty(**subject_fields)

    if comps_data:
        comps = []
        for i, entry in enumerate(comps_data):
            if not isinstance(entry, dict):
                raise WorksheetFileError(f"Comparable {i + 1} must be a mapping")
            fields = _convert_fields(Comparable, entry, f"comparable {i + 1}")
            fields.setdefault("weight", default_weight(i))
            comps.append(Comparable(**fields))
        comparables = tuple(comps)
    else:
        comparables = create_default_comparables()

    return Worksheet(
        subject=subject,
        comparables=comparables,
        config=_build_config(config_data),
    )


def load_worksheet(path: Path) -> Worksheet:
    """
    Load a worksheet YAML file.

    Raises:
        WorksheetFileError: If the file is missing, not valid YAML,
                            or does not describe a worksheet
    """
    try:
        with open(path) as f:
            document = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise WorksheetFileError(f"Worksheet file not found: {path}") from e
    except yaml.YAMLError as e:
        raise WorksheetFileError(f"Invalid YAML in worksheet file: {e}") from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise WorksheetFileError(
            f"Worksheet file must contain a mapping, got {type(document).__name__}"
        )

    worksheet = parse_worksheet(document)
    logger.info(
        f"Loaded worksheet from {path} with {len(worksheet.comparables)} comparables"
    )
    return worksheet
