"""Comment-aware parsing of one side into preference records.

Declarations are collected in three passes that all write into the same
mapping: declarations found in ``//`` comments, then those found in
``/* */`` comments, then those in active code. Later passes overwrite earlier
ones, so a preference that is declared both inside a comment and in active
code always ends up active.
"""

from .extract import PreferenceRecord, extract
from .literals import BLOCK_COMMENT, LINE_COMMENT, Segment, scan, strip_comments

# Tag given to declarations found inside a comment
INACTIVE_TAG = "[i]"

LINE_COMMENT_PASS = "line-comments"
BLOCK_COMMENT_PASS = "block-comments"
ACTIVE_PASS = "active"

# Precedence: each pass overwrites what the previous ones recorded
PASS_ORDER = (LINE_COMMENT_PASS, BLOCK_COMMENT_PASS, ACTIVE_PASS)

PASS_TAGS = {
    LINE_COMMENT_PASS: INACTIVE_TAG,
    BLOCK_COMMENT_PASS: INACTIVE_TAG,
    ACTIVE_PASS: "",
}


def _split_line_comment(body: str) -> list[str]:
    """Split a line comment body at every nested ``//`` outside a string."""
    pieces = []
    while True:
        segments = scan(body)
        nested = [segment for segment in segments if segment.kind == LINE_COMMENT]
        pieces.append("".join(segment.text for segment in segments if segment.kind != LINE_COMMENT))
        if not nested:
            return pieces
        body = nested[0].body


def line_comment_text(segments: list[Segment]) -> str:
    """Collect the text of every ``//`` comment, one piece per line.

    Line comments nested inside block comments are included.
    """
    pieces = []
    for segment in segments:
        if segment.kind == LINE_COMMENT:
            pieces.extend(_split_line_comment(segment.body))
        elif segment.kind == BLOCK_COMMENT:
            for nested in scan(segment.body):
                if nested.kind == LINE_COMMENT:
                    pieces.extend(_split_line_comment(nested.body))
    return "\n".join(pieces)


def block_comment_text(segments: list[Segment]) -> str:
    """Collect the inner text of every ``/* */`` comment.

    Line comments inside the blocks are removed, they belong to the line
    comment pass.
    """
    blocks = []
    for segment in segments:
        if segment.kind == BLOCK_COMMENT:
            inner = scan(segment.body)
            blocks.append("".join(nested.text for nested in inner if nested.kind != LINE_COMMENT))
    return "\n".join(blocks)


def pass_sources(text: str) -> dict[str, str]:
    """Build the text each pass runs over.

    Args:
        text: Full text of one side.

    Returns:
        Mapping of pass name to the text it extracts from.
    """
    segments = scan(text)
    return {
        LINE_COMMENT_PASS: line_comment_text(segments),
        BLOCK_COMMENT_PASS: block_comment_text(segments),
        ACTIVE_PASS: strip_comments(text),
    }


def parse_declarations(text: str, parse_comments: bool = True) -> dict[str, PreferenceRecord]:
    """Parse one side into a mapping of preference name to record.

    Args:
        text: Full text of one side, carriage returns already removed.
        parse_comments: When False, comments are not recognized and every
            declaration in the text is treated as active. Faster, less
            accurate.

    Returns:
        Mapping of name to the record that won precedence.
    """
    records: dict[str, PreferenceRecord] = {}

    if not parse_comments:
        return extract(records, text, PASS_TAGS[ACTIVE_PASS])

    sources = pass_sources(text)
    for pass_name in PASS_ORDER:
        extract(records, sources[pass_name], PASS_TAGS[pass_name])
    return records
