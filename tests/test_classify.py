# =============================================================================
# Classification of names across both sides
# =============================================================================

from __future__ import annotations

import pytest

from prefs_compare.compare.classify import (
    CATEGORY_ORDER,
    FULLY_MISMATCHED,
    INACTIVE_IN_A,
    INACTIVE_IN_B,
    MATCH,
    MISSING_IN_A,
    MISSING_IN_B,
    VALUE_DIFF,
    classify,
    compare,
)
from prefs_compare.parse import INACTIVE_TAG, PreferenceRecord, parse_declarations


def _record(value: str, inactive: bool = False, broken: bool = False, name: str = "n") -> PreferenceRecord:
    return PreferenceRecord(
        name=name,
        value=value,
        inactive_tag=INACTIVE_TAG if inactive else "",
        broken=broken,
    )


# ---------------------------------------------------------------------------
# Single-name rule
# ---------------------------------------------------------------------------

class TestClassify:
    def test_only_in_a(self) -> None:
        assert classify(_record('"x"'), None) == MISSING_IN_B

    def test_only_in_b(self) -> None:
        assert classify(None, _record('"x"')) == MISSING_IN_A

    def test_same_value_same_state(self) -> None:
        assert classify(_record('"x"'), _record('"x"')) == MATCH

    def test_both_inactive_same_value(self) -> None:
        assert classify(_record('"x"', inactive=True), _record('"x"', inactive=True)) == MATCH

    def test_different_value_same_state(self) -> None:
        assert classify(_record('"x"'), _record('"y"')) == VALUE_DIFF

    def test_inactive_in_b(self) -> None:
        assert classify(_record('"x"'), _record('"x"', inactive=True)) == INACTIVE_IN_B

    def test_inactive_in_a(self) -> None:
        assert classify(_record('"x"', inactive=True), _record('"x"')) == INACTIVE_IN_A

    def test_different_value_and_state(self) -> None:
        assert classify(_record('"x"', inactive=True), _record('"y"')) == FULLY_MISMATCHED

    def test_value_comparison_is_case_sensitive(self) -> None:
        assert classify(_record('"X"'), _record('"x"')) == VALUE_DIFF


# ---------------------------------------------------------------------------
# Whole comparison
# ---------------------------------------------------------------------------

class TestCompare:
    def test_entries_sorted_by_name(self) -> None:
        a = {"b": _record("1", name="b"), "a": _record("1", name="a")}
        b = {"C": _record("1", name="C")}
        result = compare(a, b)
        assert [entry.name for entry in result.entries] == ["C", "a", "b"]

    def test_inputs_are_not_modified(self) -> None:
        a = {"a": _record("1", name="a")}
        b = {"b": _record("2", name="b")}
        a_before, b_before = dict(a), dict(b)
        compare(a, b)
        assert a == a_before
        assert b == b_before

    def test_counts_cover_every_category(self) -> None:
        result = compare({}, {})
        assert set(result.counts()) == set(CATEGORY_ORDER)
        assert all(count == 0 for count in result.counts().values())
        assert result.total == 0

    def test_unique_counts_per_side(self) -> None:
        a = {"x": _record("1", name="x"), "y": _record("1", name="y")}
        b = {"y": _record("1", name="y"), "z": _record("1", name="z")}
        result = compare(a, b)
        assert result.unique_a == 2
        assert result.unique_b == 2
        assert result.total == 3

    def test_broken_is_independent_of_category(self) -> None:
        a = {"n": _record("bogus", broken=True)}
        b = {"n": _record("bogus", broken=True)}
        result = compare(a, b)
        entry = result.entries[0]
        assert entry.category == MATCH
        assert entry.broken_a and entry.broken_b
        assert [e.name for e in result.broken_a] == ["n"]
        assert [e.name for e in result.broken_b] == ["n"]

    def test_broken_only_on_one_side(self) -> None:
        result = compare({"n": _record("bogus", broken=True)}, {"n": _record('"x"')})
        assert result.entries[0].category == VALUE_DIFF
        assert len(result.broken_a) == 1
        assert result.broken_b == []

    @pytest.mark.parametrize(
        "text_a, text_b, expected",
        [
            ('user_pref("n", "x");', '// user_pref("n", "x");', INACTIVE_IN_B),
            ('user_pref("n", "x");', 'user_pref("n", "y");', VALUE_DIFF),
            ('user_pref("n", "x");', "", MISSING_IN_B),
            ("", 'pref("n", 1);', MISSING_IN_A),
            ('/* user_pref("n", 1); */', 'user_pref("n", 2);', FULLY_MISMATCHED),
            ("user_pref('n', 'x');", 'user_pref("n", "x");', MATCH),
        ],
    )
    def test_parsed_sides(self, text_a: str, text_b: str, expected: str) -> None:
        result = compare(parse_declarations(text_a), parse_declarations(text_b))
        assert [entry.category for entry in result.entries] == [expected]

    def test_to_dict(self) -> None:
        result = compare({"n": _record('"x"')}, {"n": _record('"y"', inactive=True)})
        data = result.to_dict("a.js", "b.js")
        assert data["sides"]["a"]["label"] == "a.js"
        assert data["counts"][FULLY_MISMATCHED] == 1
        assert data["entries"][0]["b"] == {"value": '"y"', "inactive": True, "broken": False}
