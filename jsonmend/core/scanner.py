"""
Quote-aware scanning for the repair pipeline.

Every stage that rewrites text needs to know whether a character belongs to a
string literal. This module is the single place that answers that question:
it finds where a quoted string ends, splits text into code and string
segments, and converts single-quoted string bodies into JSON string literals.

Single-quoted strings are ambiguous, because an apostrophe inside the text
looks exactly like the closing delimiter. The scanner resolves this with a
one-character lookahead: a ``'`` closes the string only when it is followed by
whitespace, one of ``, ] } : [``, or the end of input. So ``'O'Brien'`` is the
single string ``O'Brien``, while ``'rock 'n' roll'`` is split after ``n``.
"""

import json
import string
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from .constants import QUOTE_CHARS, SINGLE_QUOTE_TERMINATORS, SOURCE_ESCAPE_MAP

_HEX_DIGITS = frozenset(string.hexdigits)


class ScanMode(Enum):
    """Lexical mode of a character position."""

    NORMAL = "normal"
    IN_DOUBLE_QUOTED_STRING = "double"
    IN_SINGLE_QUOTED_STRING = "single"


@dataclass(frozen=True)
class ScanPosition:
    """A cursor into scanned text together with its lexical mode."""

    index: int
    mode: ScanMode


@dataclass(frozen=True)
class Segment:
    """A run of text that is either entirely code or a single string literal."""

    kind: str  # "code" or "string"
    start: int
    end: int
    text: str
    terminated: bool = True

    @property
    def is_string(self) -> bool:
        """Whether this segment is a quoted string (quotes included)."""
        return self.kind == "string"

    @property
    def quote(self) -> str:
        """Opening quote character, or an empty string for code."""
        return self.text[0] if self.is_string else ""


def closes_single_quote(text: str, pos: int) -> bool:
    """Whether the ``'`` at ``pos`` terminates a single-quoted string."""
    following = pos + 1
    if following >= len(text):
        return True
    char = text[following]
    return char.isspace() or char in SINGLE_QUOTE_TERMINATORS


def find_string_end(text: str, start: int) -> tuple[int, bool]:
    """
    Find the end of the quoted string opened at ``start``.

    Args:
        text: The text to search in
        start: Position of the opening quote

    Returns:
        Tuple of (index just past the closing quote, terminated). An
        unterminated string runs to the end of the text.
    """
    quote = text[start]
    length = len(text)
    i = start + 1

    while i < length:
        char = text[i]
        if char == "\\":
            # Escape pairs are atomic so \" and \' never terminate
            i += 2
            continue
        if char == quote and (quote == '"' or closes_single_quote(text, i)):
            return i + 1, True
        i += 1

    return length, False


def scan_string(text: str, start: int, as_json: bool = False) -> tuple[str, int]:
    """
    Consume the quoted string opened at ``start``.

    Args:
        text: The text being scanned
        start: Position of the opening quote
        as_json: Re-emit single-quoted strings as JSON string literals

    Returns:
        Tuple of (consumed literal, index just past the closing quote)
    """
    end, terminated = find_string_end(text, start)
    literal = text[start:end]

    if not as_json or text[start] == '"':
        return literal, end

    body_end = end - 1 if terminated else end
    converted = encode_json_string(decode_source_escapes(text[start + 1 : body_end]))
    if not terminated:
        # Keep the string open so the final parse still reports it
        converted = converted[:-1]
    return converted, end


def iter_segments(text: str) -> Iterator[Segment]:
    """
    Split text into alternating code and string segments.

    The segments cover the text exactly, in order, so joining their ``text``
    attributes reproduces the input.
    """
    pos = 0
    code_start = 0
    length = len(text)

    while pos < length:
        if text[pos] not in QUOTE_CHARS:
            pos += 1
            continue

        if pos > code_start:
            yield Segment("code", code_start, pos, text[code_start:pos])

        end, terminated = find_string_end(text, pos)
        yield Segment("string", pos, end, text[pos:end], terminated)
        pos = code_start = end

    if code_start < length:
        yield Segment("code", code_start, length, text[code_start:])


def map_outside_strings(text: str, func: Callable[[str], str]) -> str:
    """Apply ``func`` to every code segment, leaving string literals untouched."""
    return "".join(
        segment.text if segment.is_string else func(segment.text)
        for segment in iter_segments(text)
    )


def position_at(text: str, index: int) -> ScanPosition:
    """Report the lexical mode of the character at ``index``.

    Quote characters count as part of the string they delimit.
    """
    for segment in iter_segments(text):
        if segment.start <= index < segment.end:
            if not segment.is_string:
                break
            mode = (
                ScanMode.IN_DOUBLE_QUOTED_STRING
                if segment.quote == '"'
                else ScanMode.IN_SINGLE_QUOTED_STRING
            )
            return ScanPosition(index, mode)
        if segment.start > index:
            break
    return ScanPosition(index, ScanMode.NORMAL)


def _hex_run(body: str, start: int, width: int) -> bool:
    run = body[start : start + width]
    return len(run) == width and all(c in _HEX_DIGITS for c in run)


def _join_surrogates(value: str) -> str:
    """Combine UTF-16 surrogate pairs produced by ``\\uD83D\\uDE00`` escapes."""
    if not any("\ud800" <= c <= "\udfff" for c in value):
        return value
    try:
        return value.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError:
        # Lone surrogate, leave as is
        return value


def decode_source_escapes(body: str) -> str:
    """
    Decode the escape sequences of a JavaScript/Python string body.

    Handles the named escapes, ``\\xNN`` and ``\\uNNNN``. Unknown escapes keep
    their backslash, so Windows paths such as ``C:\\data`` survive.
    """
    result = []
    i = 0
    length = len(body)

    while i < length:
        char = body[i]
        if char != "\\" or i + 1 >= length:
            result.append(char)
            i += 1
            continue

        escaped = body[i + 1]
        if escaped in SOURCE_ESCAPE_MAP:
            result.append(SOURCE_ESCAPE_MAP[escaped])
            i += 2
        elif escaped == "x" and _hex_run(body, i + 2, 2):
            result.append(chr(int(body[i + 2 : i + 4], 16)))
            i += 4
        elif escaped == "u" and _hex_run(body, i + 2, 4):
            result.append(chr(int(body[i + 2 : i + 6], 16)))
            i += 6
        else:
            result.append(char + escaped)
            i += 2

    return _join_surrogates("".join(result))


def encode_json_string(value: str) -> str:
    """Serialize ``value`` as a double-quoted JSON string literal."""
    return json.dumps(value, ensure_ascii=False)
