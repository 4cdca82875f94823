"""
Quote normalization preprocessing step.

This module contains the step that turns every single-quoted string into a
JSON double-quoted string literal.
"""

from ..core.constants import FIX_SINGLE_QUOTES
from ..core.scanner import iter_segments, scan_string
from ..utils.config import RepairConfig
from .base import RepairStepBase


class QuoteUnifier(RepairStepBase):
    """
    Converts single-quoted strings to double-quoted JSON strings.

    Double-quoted strings are copied verbatim. Single-quoted strings are
    decoded with JavaScript/Python escape rules (``\\'``, ``\\xNN``,
    ``\\uNNNN``, ...) and re-escaped for JSON, so ``'say "hi"'`` becomes
    ``"say \\"hi\\""``. Where a single-quoted string ends is decided by the
    scanner's apostrophe lookahead.
    """

    label = FIX_SINGLE_QUOTES

    def should_apply(self, config: RepairConfig) -> bool:
        """Apply if quote unification is enabled."""
        return config.unify_quotes

    def process(self, text: str, config: RepairConfig) -> str:
        """Rewrite single-quoted strings in the text."""
        if "'" not in text:
            return text

        result = []
        for segment in iter_segments(text):
            if segment.is_string and segment.quote == "'":
                literal, _ = scan_string(text, segment.start, as_json=True)
                result.append(literal)
            else:
                result.append(segment.text)
        return "".join(result)
