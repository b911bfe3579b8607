"""
CLI configuration management.

Arguments can be overridden by environment variables.
"""

from __future__ import annotations

import argparse
import logging
import os
from datetime import date

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared by every command."""
    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
        default=os.environ.get("LOG_LEVEL", "WARNING"),
    )


def default_effective_date() -> str:
    """Effective date from TRENDSHEET_EFFECTIVE_DATE, else today (ISO)."""
    return os.environ.get("TRENDSHEET_EFFECTIVE_DATE", date.today().isoformat())


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
    )
