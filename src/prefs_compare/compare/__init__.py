"""Comparison and report generation."""

from .classify import (
    CATEGORY_ORDER,
    FULLY_MISMATCHED,
    INACTIVE_IN_A,
    INACTIVE_IN_B,
    MATCH,
    MISSING_IN_A,
    MISSING_IN_B,
    VALUE_DIFF,
    ComparisonResult,
    OutcomeEntry,
    classify,
    compare,
)
from .report import (
    ALL_SECTIONS_MASK,
    BROKEN,
    SECTION_BITS,
    category_label,
    render_report,
    write_json_report,
    write_report,
)

__all__ = [
    # Classification
    "CATEGORY_ORDER",
    "FULLY_MISMATCHED",
    "INACTIVE_IN_A",
    "INACTIVE_IN_B",
    "MATCH",
    "MISSING_IN_A",
    "MISSING_IN_B",
    "VALUE_DIFF",
    "ComparisonResult",
    "OutcomeEntry",
    "classify",
    "compare",
    # Report
    "ALL_SECTIONS_MASK",
    "BROKEN",
    "SECTION_BITS",
    "category_label",
    "render_report",
    "write_json_report",
    "write_report",
]
