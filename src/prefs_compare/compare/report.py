"""Text report generation for preference comparisons."""

import json
from datetime import datetime
from pathlib import Path

from prefs_compare.parse import INACTIVE_TAG, PreferenceRecord

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
)

BROKEN = "broken"

# Bits of the suppress mask, one per detail section
SECTION_BITS = {
    MATCH: 1,
    VALUE_DIFF: 2,
    MISSING_IN_A: 4,
    MISSING_IN_B: 8,
    INACTIVE_IN_A: 16,
    INACTIVE_IN_B: 32,
    FULLY_MISMATCHED: 64,
    BROKEN: 128,
}
ALL_SECTIONS_MASK = sum(SECTION_BITS.values())

ACTIVE_MARK = "[a]"
MULTI_ROW_CATEGORIES = (VALUE_DIFF, FULLY_MISMATCHED)

REPORT_TITLE = "prefs-compare report"
LEGEND = f"Legend: {ACTIVE_MARK} active  {INACTIVE_TAG} inactive (inside a comment)"


def category_label(category: str, label_a: str, label_b: str) -> str:
    """Human-readable label for a category."""
    labels = {
        MATCH: "identical declarations",
        VALUE_DIFF: "declarations with different values",
        MISSING_IN_A: f"declarations missing in {label_a}",
        MISSING_IN_B: f"declarations missing in {label_b}",
        INACTIVE_IN_A: f"declarations inactive only in {label_a}",
        INACTIVE_IN_B: f"declarations inactive only in {label_b}",
        FULLY_MISMATCHED: "declarations with different values and states",
    }
    return labels[category]


def is_suppressed(section: str, suppress_mask: int) -> bool:
    return bool(suppress_mask & SECTION_BITS[section])


def _state(record: PreferenceRecord) -> str:
    return record.inactive_tag or ACTIVE_MARK


def _section_header(title: str, count: int) -> list[str]:
    heading = f"{title[0].upper()}{title[1:]} ({count})"
    return ["", heading, "-" * len(heading)]


def _entry_lines(
    entry: OutcomeEntry,
    label_a: str,
    label_b: str,
    name_width: int,
    label_width: int,
) -> list[str]:
    if entry.category in MULTI_ROW_CATEGORIES:
        indent = " " * 4
        return [
            f"  {entry.name}",
            f"  {indent}{label_a:<{label_width}}  {_state(entry.a)}  {entry.a.value}",
            f"  {indent}{label_b:<{label_width}}  {_state(entry.b)}  {entry.b.value}",
        ]

    if entry.category == MATCH:
        return [f"  {entry.name:<{name_width}}  {_state(entry.a)}  {entry.a.value}"]

    # One-sided categories show the side the declaration comes from
    if entry.category in (MISSING_IN_B, INACTIVE_IN_A):
        label, record = label_a, entry.a
    else:
        label, record = label_b, entry.b
    return [f"  {entry.name:<{name_width}}  {label:<{label_width}}  {_state(record)}  {record.value}"]


def _broken_lines(
    entries: list[OutcomeEntry],
    side: str,
    label: str,
    name_width: int,
    label_width: int,
) -> list[str]:
    lines = []
    for entry in entries:
        record = entry.a if side == "a" else entry.b
        lines.append(f"  {entry.name:<{name_width}}  {label:<{label_width}}  {_state(record)}  {record.value}")
    return lines


def render_report(
    result: ComparisonResult,
    label_a: str,
    label_b: str,
    suppress_mask: int = 0,
    generated_at: datetime | None = None,
) -> str:
    """Render a comparison as an aligned text report.

    The report holds a header, a summary with per-category counts, a legend
    and one detail section per non-empty category followed by the broken
    syntax sections. Any detail section can be left out with its bit in
    ``suppress_mask``; its count stays in the summary.

    Args:
        result: Classified comparison.
        label_a: Display label for side A.
        label_b: Display label for side B.
        suppress_mask: Bitwise OR of ``SECTION_BITS`` values to omit.
        generated_at: Timestamp for the header. Defaults to now.

    Returns:
        Report text ending with a newline.
    """
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    label_width = max(len(label_a), len(label_b))
    name_width = max((len(entry.name) for entry in result.entries), default=0)
    counts = result.counts()
    broken_a = result.broken_a
    broken_b = result.broken_b

    lines = [REPORT_TITLE, f"Generated: {stamp}", f"Comparing: {label_a} <> {label_b}", ""]

    # Summary
    lines.append("Summary")
    lines.append(f"  {label_a:<{label_width}} : {result.unique_a} unique declarations")
    lines.append(f"  {label_b:<{label_width}} : {result.unique_b} unique declarations")
    lines.append("")
    for category in CATEGORY_ORDER:
        if counts[category]:
            lines.append(f"  {counts[category]:>6}  {category_label(category, label_a, label_b)}")
    lines.append(f"  {result.total:>6}  unique declarations in both sources combined")

    if broken_a or broken_b:
        lines.append("")
        lines.append("Warning: declarations with broken syntax")
        lines.append(f"  {label_a:<{label_width}} : {len(broken_a)}")
        lines.append(f"  {label_b:<{label_width}} : {len(broken_b)}")

    lines.append("")
    lines.append(LEGEND)

    # Details
    for category in CATEGORY_ORDER:
        entries = result.in_category(category)
        if not entries or is_suppressed(category, suppress_mask):
            continue
        lines.extend(_section_header(category_label(category, label_a, label_b), len(entries)))
        for entry in entries:
            lines.extend(_entry_lines(entry, label_a, label_b, name_width, label_width))

    if not is_suppressed(BROKEN, suppress_mask):
        for side, label, entries in (("a", label_a, broken_a), ("b", label_b, broken_b)):
            if not entries:
                continue
            lines.extend(_section_header(f"declarations with broken syntax in {label}", len(entries)))
            lines.extend(_broken_lines(entries, side, label, name_width, label_width))

    return "\n".join(line.rstrip() for line in lines) + "\n"


def write_report(text: str, output_path: Path, append: bool = False) -> Path:
    """Write a report to disk.

    Args:
        text: Report text.
        output_path: Destination file.
        append: Append to an existing file instead of replacing it. A blank
            line separates the reports.

    Returns:
        The output path.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if append and output_path.exists() and output_path.stat().st_size > 0:
        with output_path.open("a", encoding="utf-8") as handle:
            handle.write("\n" + text)
    else:
        output_path.write_text(text, encoding="utf-8")

    return output_path


def write_json_report(
    result: ComparisonResult,
    label_a: str,
    label_b: str,
    output_path: Path,
) -> Path:
    """Write the comparison as JSON next to the text report."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(result.to_dict(label_a, label_b), indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
