"""Classification of preference declarations across two sides."""

from __future__ import annotations

from dataclasses import dataclass, field

from prefs_compare.parse import PreferenceRecord

MATCH = "match"
VALUE_DIFF = "value-diff"
MISSING_IN_A = "missing-in-a"
MISSING_IN_B = "missing-in-b"
INACTIVE_IN_A = "inactive-in-a"
INACTIVE_IN_B = "inactive-in-b"
FULLY_MISMATCHED = "fully-mismatched"

# Fixed order used by the summary and the detail sections
CATEGORY_ORDER = (
    MATCH,
    VALUE_DIFF,
    MISSING_IN_A,
    MISSING_IN_B,
    INACTIVE_IN_A,
    INACTIVE_IN_B,
    FULLY_MISMATCHED,
)


@dataclass(frozen=True)
class OutcomeEntry:
    name: str
    category: str
    a: PreferenceRecord | None = None
    b: PreferenceRecord | None = None

    @property
    def broken_a(self) -> bool:
        return self.a is not None and self.a.broken

    @property
    def broken_b(self) -> bool:
        return self.b is not None and self.b.broken


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing two sides, one entry per declared name."""

    entries: tuple[OutcomeEntry, ...] = field(default_factory=tuple)

    def in_category(self, category: str) -> list[OutcomeEntry]:
        return [entry for entry in self.entries if entry.category == category]

    def counts(self) -> dict[str, int]:
        counts = {category: 0 for category in CATEGORY_ORDER}
        for entry in self.entries:
            counts[entry.category] += 1
        return counts

    @property
    def unique_a(self) -> int:
        return sum(1 for entry in self.entries if entry.a is not None)

    @property
    def unique_b(self) -> int:
        return sum(1 for entry in self.entries if entry.b is not None)

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def broken_a(self) -> list[OutcomeEntry]:
        return [entry for entry in self.entries if entry.broken_a]

    @property
    def broken_b(self) -> list[OutcomeEntry]:
        return [entry for entry in self.entries if entry.broken_b]

    def to_dict(self, label_a: str = "A", label_b: str = "B") -> dict:
        """Build a JSON-ready summary of the comparison."""

        def record_dict(record: PreferenceRecord | None) -> dict | None:
            if record is None:
                return None
            return {
                "value": record.value,
                "inactive": record.inactive,
                "broken": record.broken,
            }

        return {
            "sides": {
                "a": {"label": label_a, "unique": self.unique_a, "broken": len(self.broken_a)},
                "b": {"label": label_b, "unique": self.unique_b, "broken": len(self.broken_b)},
            },
            "total": self.total,
            "counts": self.counts(),
            "entries": [
                {
                    "name": entry.name,
                    "category": entry.category,
                    "a": record_dict(entry.a),
                    "b": record_dict(entry.b),
                }
                for entry in self.entries
            ],
        }


def classify(a: PreferenceRecord | None, b: PreferenceRecord | None) -> str:
    """Assign the category for one name given its record on each side.

    Args:
        a: Record on side A, or None when not declared there.
        b: Record on side B, or None when not declared there.

    Returns:
        One of the category constants.
    """
    if b is None:
        return MISSING_IN_B
    if a is None:
        return MISSING_IN_A

    same_value = a.value == b.value
    if a.inactive_tag != b.inactive_tag:
        if not same_value:
            return FULLY_MISMATCHED
        return INACTIVE_IN_A if a.inactive else INACTIVE_IN_B

    return MATCH if same_value else VALUE_DIFF


def compare(
    records_a: dict[str, PreferenceRecord],
    records_b: dict[str, PreferenceRecord],
) -> ComparisonResult:
    """Compare two sides by preference name.

    Neither mapping is modified.

    Args:
        records_a: Records parsed from side A.
        records_b: Records parsed from side B.

    Returns:
        ComparisonResult with entries sorted by name.
    """
    entries = []
    for name in sorted(set(records_a) | set(records_b)):
        a = records_a.get(name)
        b = records_b.get(name)
        entries.append(OutcomeEntry(name=name, category=classify(a, b), a=a, b=b))
    return ComparisonResult(entries=tuple(entries))
