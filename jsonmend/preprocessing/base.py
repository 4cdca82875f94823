"""
Base classes for repair steps.

This module contains the base class shared by every text-rewriting step so
they can be composed in a ``RepairPipeline``.
"""

from ..utils.config import RepairConfig


class RepairStepBase:
    """Base class for repair steps with common functionality."""

    # Reported in RepairResult.fixes when the step changes the text
    label = ""

    def should_apply(self, _config: RepairConfig) -> bool:
        """Default implementation - always apply. Override in subclasses."""
        return True

    def process(self, text: str, _config: RepairConfig) -> str:
        """Process the text. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement process()")
