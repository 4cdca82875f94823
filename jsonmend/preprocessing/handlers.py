"""
Special content handlers for preprocessing.

This module contains the steps that strip JavaScript comments and translate
Python literals, both without touching the content of string literals.
"""

import re

from ..core.constants import (
    FIX_PYTHON_LITERALS,
    FIX_STRIP_COMMENTS,
    PYTHON_LITERAL_MAP,
    QUOTE_CHARS,
)
from ..core.scanner import map_outside_strings, scan_string
from ..utils.config import RepairConfig
from .base import RepairStepBase

_PYTHON_LITERAL_RE = re.compile(r"\b(?:None|True|False)\b")


class CommentHandler(RepairStepBase):
    """Removes comments from JSON text."""

    label = FIX_STRIP_COMMENTS

    def should_apply(self, config: RepairConfig) -> bool:
        """Apply if comment removal is enabled."""
        return config.strip_comments

    def process(self, text: str, config: RepairConfig) -> str:
        """Remove comments from JSON text."""
        return self._remove_comments(text)

    @staticmethod
    def _remove_comments(text: str) -> str:
        """Remove single-line and multi-line comments from JSON."""
        result = []
        i = 0
        length = len(text)

        while i < length:
            char = text[i]
            next_char = text[i + 1] if i + 1 < length else ""

            if char in QUOTE_CHARS:
                literal, i = scan_string(text, i)
                result.append(literal)
            elif char == "/" and next_char == "/":
                # Single-line comment - skip to end of line, keep the newline
                end = text.find("\n", i)
                i = length if end == -1 else end
            elif char == "/" and next_char == "*":
                # Multi-line comment - unterminated ones run to end of input
                end = text.find("*/", i + 2)
                i = length if end == -1 else end + 2

                # Keep the tokens on either side apart
                has_space_before = bool(result) and result[-1][-1:].isspace()
                has_space_after = i < length and text[i].isspace()
                if not has_space_before and not has_space_after:
                    result.append(" ")
            else:
                result.append(char)
                i += 1

        return "".join(result)


class PythonLiteralHandler(RepairStepBase):
    """Translates Python's None/True/False into JSON literals."""

    label = FIX_PYTHON_LITERALS

    def should_apply(self, config: RepairConfig) -> bool:
        """Apply if Python literal conversion is enabled."""
        return config.convert_python_literals

    def process(self, text: str, config: RepairConfig) -> str:
        """Replace standalone Python literals outside of strings."""
        return map_outside_strings(text, self._replace_literals)

    @staticmethod
    def _replace_literals(code: str) -> str:
        return _PYTHON_LITERAL_RE.sub(lambda m: PYTHON_LITERAL_MAP[m.group(0)], code)
