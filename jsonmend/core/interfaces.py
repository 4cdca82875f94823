"""
Core interfaces for the repair system.

This module defines the contracts the pipeline and the reviver rely on, so
that custom steps or parse functions can be plugged in.
"""

from typing import Any, Protocol


class RepairStep(Protocol):
    """Protocol for text-rewriting steps in the repair pipeline."""

    label: str

    def process(self, text: str, config: Any) -> str:
        """Rewrite the input text according to this step."""
        ...

    def should_apply(self, config: Any) -> bool:
        """Determine if this step should be applied given the configuration."""
        ...


class TextParser(Protocol):
    """Parses text into a JSON value, raising ``RepairError`` when it cannot."""

    def __call__(self, text: str) -> Any: ...
