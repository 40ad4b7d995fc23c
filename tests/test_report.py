# =============================================================================
# Text report rendering and report files
# =============================================================================

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from prefs_compare.compare import (
    BROKEN,
    FULLY_MISMATCHED,
    MATCH,
    SECTION_BITS,
    VALUE_DIFF,
    compare,
    render_report,
    write_json_report,
    write_report,
)
from prefs_compare.parse import parse_declarations

GENERATED_AT = datetime(2026, 1, 2, 3, 4, 5)


def _render(text_a: str, text_b: str, suppress_mask: int = 0) -> str:
    result = compare(parse_declarations(text_a), parse_declarations(text_b))
    return render_report(result, "a.js", "b.js", suppress_mask=suppress_mask, generated_at=GENERATED_AT)


def _section(report: str, heading_prefix: str) -> list[str]:
    """Return the entry lines of the section whose heading starts with prefix."""
    lines = report.splitlines()
    for index, line in enumerate(lines):
        if line.startswith(heading_prefix):
            body = []
            for entry_line in lines[index + 2:]:
                if not entry_line:
                    break
                body.append(entry_line)
            return body
    raise AssertionError(f"No section starting with {heading_prefix!r}")


# ---------------------------------------------------------------------------
# Header and summary
# ---------------------------------------------------------------------------

class TestSummary:
    def test_header_has_timestamp(self) -> None:
        report = _render("", "")
        assert "Generated: 2026-01-02 03:04:05" in report.splitlines()

    def test_empty_inputs(self) -> None:
        report = _render("", "")
        lines = report.splitlines()
        assert "  a.js : 0 unique declarations" in lines
        assert "  b.js : 0 unique declarations" in lines
        assert "       0  unique declarations in both sources combined" in lines
        assert "Warning" not in report
        assert not any(line.startswith("---") for line in lines)

    def test_only_non_empty_categories_listed(self) -> None:
        report = _render('user_pref("n", 1);', 'user_pref("n", 1);')
        assert "       1  identical declarations" in report.splitlines()
        assert "different values" not in report

    def test_broken_warning_block(self) -> None:
        report = _render('user_pref("n", bogus);', 'user_pref("n", 1);')
        lines = report.splitlines()
        assert "Warning: declarations with broken syntax" in lines
        assert "  a.js : 1" in lines
        assert "  b.js : 0" in lines

    def test_legend_present(self) -> None:
        assert any(line.startswith("Legend:") for line in _render("", "").splitlines())

    def test_report_ends_with_newline(self) -> None:
        assert _render("", "").endswith("\n")


# ---------------------------------------------------------------------------
# Detail sections
# ---------------------------------------------------------------------------

class TestDetails:
    def test_value_diff_renders_three_lines(self) -> None:
        report = _render('user_pref("n", "x");', 'user_pref("n", "y");')
        assert _section(report, "Declarations with different values (1)") == [
            "  n",
            '      a.js  [a]  "x"',
            '      b.js  [a]  "y"',
        ]

    def test_fully_mismatched_renders_three_lines(self) -> None:
        result = compare(parse_declarations('// pref("n", 1);'), parse_declarations('pref("n", 2);'))
        report = render_report(result, "a", "bb", generated_at=GENERATED_AT)
        assert _section(report, "Declarations with different values and states (1)") == [
            "  n",
            "      a   [i]  1",
            "      bb  [a]  2",
        ]

    def test_inactive_in_b_renders_one_line(self) -> None:
        report = _render('user_pref("n", "x");', '// user_pref("n", "x");')
        assert _section(report, "Declarations inactive only in b.js (1)") == ['  n  b.js  [i]  "x"']

    def test_missing_in_b_shows_side_a(self) -> None:
        report = _render('user_pref("n", 5);', "")
        assert _section(report, "Declarations missing in b.js (1)") == ["  n  a.js  [a]  5"]

    def test_names_are_aligned(self) -> None:
        report = _render(
            'user_pref("a", 1);\nuser_pref("long.name", 2);',
            'user_pref("a", 1);\nuser_pref("long.name", 2);',
        )
        lines = _section(report, "Identical declarations (2)")
        assert lines == ["  " + "a".ljust(len("long.name")) + "  [a]  1", "  long.name  [a]  2"]
        assert lines[0].index("[a]") == lines[1].index("[a]")

    def test_broken_sections_per_side(self) -> None:
        report = _render('user_pref("n", bogus);', 'user_pref("n", also.bogus);')
        assert _section(report, "Declarations with broken syntax in a.js (1)") == ["  n  a.js  [a]  bogus"]
        assert _section(report, "Declarations with broken syntax in b.js (1)") == ["  n  b.js  [a]  also.bogus"]


# ---------------------------------------------------------------------------
# Suppression
# ---------------------------------------------------------------------------

class TestSuppression:
    def test_suppressed_section_keeps_summary_count(self) -> None:
        text_a = 'user_pref("same", 1);\nuser_pref("diff", "x");'
        text_b = 'user_pref("same", 1);\nuser_pref("diff", "y");'
        report = _render(text_a, text_b, suppress_mask=SECTION_BITS[VALUE_DIFF])
        assert "Declarations with different values (1)" not in report
        assert "       1  declarations with different values" in report.splitlines()
        assert "Identical declarations (1)" in report

    def test_fully_mismatched_bit(self) -> None:
        report = _render('// pref("n", 1);', 'pref("n", 2);', suppress_mask=SECTION_BITS[FULLY_MISMATCHED])
        assert SECTION_BITS[FULLY_MISMATCHED] == 64
        assert "Declarations with different values and states (1)" not in report
        assert "       1  declarations with different values and states" in report.splitlines()

    def test_broken_bit_hides_both_broken_sections(self) -> None:
        report = _render(
            'user_pref("n", bogus);',
            'user_pref("n", bogus);',
            suppress_mask=SECTION_BITS[BROKEN],
        )
        assert "broken syntax in" not in report
        assert "Warning: declarations with broken syntax" in report

    @pytest.mark.parametrize("mask", [0, SECTION_BITS[MATCH]])
    def test_mask_only_affects_its_section(self, mask: int) -> None:
        report = _render('user_pref("a", 1);', 'user_pref("a", 1);\nuser_pref("b", 1);')
        suppressed = _render('user_pref("a", 1);', 'user_pref("a", 1);\nuser_pref("b", 1);', mask)
        assert ("Declarations missing in a.js (1)" in report) == ("Declarations missing in a.js (1)" in suppressed)
        assert ("Identical declarations (1)" in suppressed) is (mask == 0)


# ---------------------------------------------------------------------------
# Report files
# ---------------------------------------------------------------------------

class TestWriteReport:
    def test_overwrite(self, tmp_path: Path) -> None:
        path = tmp_path / "report.txt"
        path.write_text("old\n", encoding="utf-8")
        write_report("new\n", path)
        assert path.read_text(encoding="utf-8") == "new\n"

    def test_append(self, tmp_path: Path) -> None:
        path = tmp_path / "report.txt"
        path.write_text("one\n", encoding="utf-8")
        write_report("two\n", path, append=True)
        assert path.read_text(encoding="utf-8") == "one\n\ntwo\n"

    def test_append_to_missing_file_creates_it(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "report.txt"
        write_report("text\n", path, append=True)
        assert path.read_text(encoding="utf-8") == "text\n"

    def test_json_report(self, tmp_path: Path) -> None:
        result = compare(parse_declarations('pref("n", 1);'), parse_declarations('pref("n", 1);'))
        path = write_json_report(result, "a.js", "b.js", tmp_path / "report.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["counts"][MATCH] == 1
        assert data["total"] == 1
