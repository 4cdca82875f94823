"""
Resource limits for jsonmend.
This module rejects oversized input before any repair stage runs.
"""

from ..utils.config import RepairLimits
from .exceptions import SecurityError


class LimitValidator:
    """Validates input against ``RepairLimits``."""

    def __init__(self, limits: RepairLimits):
        self.limits = limits

    def validate_input_size(self, text: str) -> None:
        """Validate that input text size is within limits."""
        if len(text) > self.limits.max_input_size:
            raise SecurityError(
                f"Input size {len(text)} exceeds limit {self.limits.max_input_size}"
            )
