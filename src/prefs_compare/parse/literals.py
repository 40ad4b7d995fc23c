"""Quoted literal patterns and comment-aware text scanning."""

from dataclasses import dataclass

# Segment kinds produced by scan()
CODE = "code"
LINE_COMMENT = "line_comment"
BLOCK_COMMENT = "block_comment"

# Internal scanner state, never emitted as a segment kind
_STRING = "string"

# Inner text of a literal: anything but the delimiter, a backslash or a newline,
# or a backslash followed by any character (so \" and \' do not terminate)
_DQ_BODY = r'(?:[^"\\\n]|\\.)*'
_SQ_BODY = r"(?:[^'\\\n]|\\.)*"

# Consumes one quoted literal without capturing it
LITERAL = rf"""(?:"{_DQ_BODY}"|'{_SQ_BODY}')"""


def capturing_literal(prefix: str = "") -> str:
    """Build a pattern that captures a literal's inner text.

    The inner text lands in ``<prefix>dq`` for double-quoted literals and
    ``<prefix>sq`` for single-quoted ones. Use a prefix when the pattern is
    embedded more than once in the same expression.

    Args:
        prefix: Prefix for the two capture group names.

    Returns:
        Regex fragment with two named groups.
    """
    return rf"""(?:"(?P<{prefix}dq>{_DQ_BODY})"|'(?P<{prefix}sq>{_SQ_BODY})')"""


def literal_text(match, prefix: str = "") -> str | None:
    """Return the inner text captured by a ``capturing_literal`` pattern."""
    text = match.group(f"{prefix}dq")
    if text is None:
        text = match.group(f"{prefix}sq")
    return text


@dataclass(frozen=True)
class Segment:
    kind: str
    text: str

    @property
    def body(self) -> str:
        """Text without the comment delimiters."""
        if self.kind == LINE_COMMENT:
            return self.text[2:]
        if self.kind == BLOCK_COMMENT:
            if len(self.text) >= 4 and self.text.endswith("*/"):
                return self.text[2:-2]
            return self.text[2:]
        return self.text


def scan(text: str) -> list[Segment]:
    """Split text into code, line comment and block comment segments.

    Walks the text one character at a time tracking whether it is in code,
    a string literal, a ``//`` comment or a ``/* */`` comment. Comment markers
    inside string literals are ignored. A string literal ends at the end of
    its line even without a closing quote, and an unterminated block comment
    runs to the end of the text.

    Joining the ``text`` of every returned segment gives back the input.

    Args:
        text: Source text.

    Returns:
        Ordered list of non-empty segments.
    """
    segments: list[Segment] = []
    state = CODE
    quote = ""
    start = 0
    i = 0
    length = len(text)

    def emit(kind: str, end: int) -> None:
        if end > start:
            segments.append(Segment(kind, text[start:end]))

    while i < length:
        ch = text[i]

        if state == CODE:
            if ch == '"' or ch == "'":
                state = _STRING
                quote = ch
            elif text.startswith("//", i):
                emit(CODE, i)
                start = i
                state = LINE_COMMENT
                i += 2
                continue
            elif text.startswith("/*", i):
                emit(CODE, i)
                start = i
                state = BLOCK_COMMENT
                i += 2
                continue

        elif state == _STRING:
            if ch == "\\":
                i += 2
                continue
            if ch == quote or ch == "\n":
                state = CODE

        elif state == LINE_COMMENT:
            if ch == "\n":
                emit(LINE_COMMENT, i)
                start = i
                state = CODE

        elif state == BLOCK_COMMENT:
            if text.startswith("*/", i):
                i += 2
                emit(BLOCK_COMMENT, i)
                start = i
                state = CODE
                continue

        i += 1

    emit(CODE if state == _STRING else state, length)
    return segments


def strip_comments(text: str) -> str:
    """Remove every line and block comment from text."""
    return "".join(segment.text for segment in scan(text) if segment.kind == CODE)
