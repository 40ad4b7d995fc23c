"""Preference declaration parsing."""

from .literals import (
    LITERAL,
    Segment,
    capturing_literal,
    literal_text,
    scan,
    strip_comments,
)
from .extract import (
    CALL_NAMES,
    PreferenceRecord,
    extract,
    parse_declaration,
    parse_value,
    split_statements,
)
from .segment import (
    INACTIVE_TAG,
    PASS_ORDER,
    parse_declarations,
)

__all__ = [
    # Literals
    "LITERAL",
    "Segment",
    "capturing_literal",
    "literal_text",
    "scan",
    "strip_comments",
    # Extraction
    "CALL_NAMES",
    "PreferenceRecord",
    "extract",
    "parse_declaration",
    "parse_value",
    "split_statements",
    # Comment passes
    "INACTIVE_TAG",
    "PASS_ORDER",
    "parse_declarations",
]
