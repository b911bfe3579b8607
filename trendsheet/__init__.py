"""
TrendSheet - appraisal worksheet calculation and MLS parsing engine.

This package provides:
- Numeric helpers with a shared "unavailable" (None) convention
- Comparable adjustment arithmetic and weighted reconciliation
- Tolerant parsing of pasted tab-delimited MLS exports
- Quarterly market trend aggregation over parsed MLS records
"""

__version__ = "0.1.0"
