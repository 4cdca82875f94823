"""
Structure repair preprocessing steps.

This module contains the steps that repair JSON structure: unquoted keys,
trailing commas, bare-word values and missing commas between elements.

All four work on a masked copy of the text in which every string literal is
replaced by an opaque placeholder, so their patterns can never match inside
string content. The patterns only use possessive quantifiers over disjoint
character classes and run through the timeout-protected regex engine.
"""

import re
from typing import Any

from ..core.constants import (
    FIX_MISSING_COMMAS,
    FIX_TRAILING_COMMAS,
    FIX_UNQUOTED_KEYS,
    FIX_UNQUOTED_VALUES,
    JSON_LITERALS,
)
from ..core.regex_engine import get_engine
from ..core.scanner import iter_segments
from ..utils.config import RepairConfig
from .base import RepairStepBase

# Private-use characters cannot appear in code segments next to a quote
_MASK_OPEN = "\ue000"
_MASK_CLOSE = "\ue001"
_MASK_RE = re.compile(f'"{_MASK_OPEN}(\\d+){_MASK_CLOSE}"')

UNQUOTED_KEY_PATTERN = r"([{,]\s*+)([A-Za-z_$][A-Za-z0-9_$]*+)(\s*+:)"
TRAILING_COMMA_PATTERN = r",(\s*+[}\]])"
BARE_VALUE_PATTERN = r"(:\s*+)([A-Za-z_][A-Za-z0-9_]*+)(\s*+[,}\]])"
MISSING_COMMA_PATTERN = r'([}\]"])([^\S\n]*+\n\s*+)([{\["])'

# (closing token, opening token) pairs that get a comma between them
_COMMA_PAIRS = frozenset(
    [
        ('"', '"'),
        ("}", "{"),
        ("]", "["),
        ("}", '"'),
        ('"', "{"),
    ]
)


def mask_strings(text: str) -> tuple[str, list[str]]:
    """Replace every string literal with a numbered placeholder."""
    parts = []
    strings: list[str] = []

    for segment in iter_segments(text):
        if segment.is_string:
            parts.append(f'"{_MASK_OPEN}{len(strings)}{_MASK_CLOSE}"')
            strings.append(segment.text)
        else:
            parts.append(segment.text)

    return "".join(parts), strings


def restore_strings(masked: str, strings: list[str]) -> str:
    """Inverse of ``mask_strings``."""
    if not strings:
        return masked
    return _MASK_RE.sub(lambda m: strings[int(m.group(1))], masked)


class MaskedRewriteStep(RepairStepBase):
    """A repair step whose rewrite only ever sees code, never string content."""

    def process(self, text: str, config: RepairConfig) -> str:
        masked, strings = mask_strings(text)
        rewritten = self.rewrite(masked)
        if rewritten == masked:
            return text
        return restore_strings(rewritten, strings)

    def rewrite(self, masked: str) -> str:
        """Rewrite masked text. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement rewrite()")


class UnquotedKeyRepairer(MaskedRewriteStep):
    """Quotes bare identifiers used as object keys: ``{a: 1}``."""

    label = FIX_UNQUOTED_KEYS

    def should_apply(self, config: RepairConfig) -> bool:
        return config.quote_keys

    def rewrite(self, masked: str) -> str:
        return get_engine().sub(UNQUOTED_KEY_PATTERN, r'\1"\2"\3', masked)


class TrailingCommaRepairer(MaskedRewriteStep):
    """Drops a comma that directly precedes ``}`` or ``]``."""

    label = FIX_TRAILING_COMMAS

    def should_apply(self, config: RepairConfig) -> bool:
        return config.remove_trailing_commas

    def rewrite(self, masked: str) -> str:
        return get_engine().sub(TRAILING_COMMA_PATTERN, r"\1", masked)


class BareValueRepairer(MaskedRewriteStep):
    """Quotes bare-word values: ``{"a": b}``. JSON literals are left alone."""

    label = FIX_UNQUOTED_VALUES

    def should_apply(self, config: RepairConfig) -> bool:
        return config.quote_bare_values

    def rewrite(self, masked: str) -> str:
        return get_engine().sub(BARE_VALUE_PATTERN, self._quote_value, masked)

    @staticmethod
    def _quote_value(match: Any) -> str:
        prefix, value, suffix = match.group(1, 2, 3)
        if value in JSON_LITERALS:
            return match.group(0)
        return f'{prefix}"{value}"{suffix}'


class MissingCommaRepairer(MaskedRewriteStep):
    """
    Inserts commas between elements that are separated only by a newline.

    Covers ``"a"⏎"b"``, ``}⏎{``, ``]⏎[``, ``}⏎"b"`` and ``"a"⏎{``. Elements
    sitting next to each other on the same line are left alone.
    """

    label = FIX_MISSING_COMMAS

    def should_apply(self, config: RepairConfig) -> bool:
        return config.insert_missing_commas

    def rewrite(self, masked: str) -> str:
        return get_engine().sub(MISSING_COMMA_PATTERN, self._insert_comma, masked)

    @staticmethod
    def _insert_comma(match: Any) -> str:
        closing, gap, opening = match.group(1, 2, 3)
        if (closing, opening) not in _COMMA_PAIRS:
            return match.group(0)
        return f"{closing},{gap}{opening}"
