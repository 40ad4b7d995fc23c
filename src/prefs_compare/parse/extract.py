"""Declaration extraction from preference files."""

import re
from dataclasses import dataclass

from .literals import LITERAL, capturing_literal, literal_text

# Call names that declare a preference
CALL_NAMES = ("user_pref", "pref", "lockPref")

# The call name must not continue an identifier or a member access
_CALL_START = rf"(?<![\w.$])(?:{'|'.join(CALL_NAMES)})\s*\("

# One quoted literal, a call tail, or the start of a call; literals are
# matched so that a ");" or a call name inside a string never splits a statement
_STATEMENT_SPLIT_RE = re.compile(rf"{LITERAL}|(?P<tail>\)\s*;)|(?P<start>{_CALL_START})")

_CALL_RE = re.compile(
    rf"(?<![\w.$])(?P<call>{'|'.join(CALL_NAMES)})\s*\(\s*"
    rf"{capturing_literal('name_')}\s*,"
    r"(?P<rest>[\s\S]*)\)\s*;\s*\Z"
)

_VALUE_RE = re.compile(
    rf"\s*(?:{capturing_literal('value_')}|(?P<boolean>true|false)|(?P<integer>-?\d+))\s*"
)


@dataclass(frozen=True)
class PreferenceRecord:
    """One declared preference, as last seen on one side."""

    name: str
    value: str
    inactive_tag: str = ""
    broken: bool = False

    @property
    def inactive(self) -> bool:
        return bool(self.inactive_tag)


def split_statements(text: str) -> list[str]:
    """Split text so each chunk holds at most one call.

    Text is cut after every call tail and before every call name, so a call
    that lacks its ``;`` cannot run into the declaration that follows it.

    Args:
        text: Source text.

    Returns:
        Chunks in order. Non-blank text without a call tail is kept as its
        own chunk.
    """
    chunks = []
    start = 0
    for match in _STATEMENT_SPLIT_RE.finditer(text):
        if match.group("tail") is not None:
            chunks.append(text[start:match.end()])
            start = match.end()
        elif match.group("start") is not None:
            if text[start:match.start()].strip():
                chunks.append(text[start:match.start()])
            start = match.start()
    rest = text[start:]
    if rest.strip():
        chunks.append(rest)
    return chunks


def parse_value(raw: str) -> tuple[str, bool]:
    """Classify the raw value text of a declaration.

    String literals are normalized to a double-quoted form with their inner
    text untouched. ``true``, ``false`` and integers are kept as written.

    Args:
        raw: Text between the comma after the name and the closing ``);``.

    Returns:
        Tuple of (value, broken). Unrecognized values come back trimmed with
        ``broken`` set.
    """
    match = _VALUE_RE.fullmatch(raw)
    if match is None:
        return raw.strip(), True

    text = literal_text(match, "value_")
    if text is not None:
        return f'"{text}"', False
    return match.group("boolean") or match.group("integer"), False


def parse_declaration(chunk: str, inactive_tag: str = "") -> PreferenceRecord | None:
    """Parse a single statement chunk into a record.

    Returns:
        The record, or None when the chunk is not a declaration.
    """
    match = _CALL_RE.search(chunk)
    if match is None:
        return None

    name = literal_text(match, "name_")
    if name is None:
        return None

    value, broken = parse_value(match.group("rest"))
    return PreferenceRecord(name=name, value=value, inactive_tag=inactive_tag, broken=broken)


def extract(
    target: dict[str, PreferenceRecord],
    text: str,
    inactive_tag: str = "",
) -> dict[str, PreferenceRecord]:
    """Extract every declaration in text into target.

    A name that is already present is overwritten, so the last declaration
    wins.

    Args:
        target: Mapping of name to record, updated in place.
        text: Text to scan.
        inactive_tag: Tag for the new records, empty for active code.

    Returns:
        The target mapping.
    """
    for chunk in split_statements(text):
        record = parse_declaration(chunk, inactive_tag)
        if record is not None:
            target[record.name] = record
    return target
