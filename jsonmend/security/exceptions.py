"""
Exception hierarchy for jsonmend.

Nothing in the repair pipeline raises these to the caller: the engine catches
them and turns them into entries of ``RepairResult.errors``. They exist so
that the stages, the limit validator and the engine share one vocabulary for
what went wrong and where.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorLocation:
    """Line/column location of an error inside the repaired text."""

    line: int
    column: int
    offset: int

    @classmethod
    def from_offset(cls, text: str, offset: int) -> "ErrorLocation":
        """Compute a 1-based line and column for a character offset."""
        offset = max(0, min(offset, len(text)))
        line = text.count("\n", 0, offset) + 1
        line_start = text.rfind("\n", 0, offset) + 1
        return cls(line=line, column=offset - line_start + 1, offset=offset)


class JsonMendError(Exception):
    """Base exception for jsonmend."""

    def __init__(
        self,
        message: str,
        location: Optional[ErrorLocation] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.location = location
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.location is not None:
            parts.append(
                f" at line {self.location.line}, column {self.location.column}"
            )
        if self.suggestions:
            parts.append("\nSuggestions:")
            parts.extend(f"\n  - {suggestion}" for suggestion in self.suggestions)
        return "".join(parts)


class RepairError(JsonMendError):
    """The text could not be parsed, even after every repair stage ran."""

    def __init__(
        self,
        message: str,
        location: Optional[ErrorLocation] = None,
        suggestions: Optional[list[str]] = None,
        fixes: Optional[list[str]] = None,
    ):
        self.fixes = fixes or []
        super().__init__(message, location, suggestions)


class SecurityError(JsonMendError):
    """Input violates one of the configured resource limits."""
