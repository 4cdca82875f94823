"""
JSON repair steps.

This module provides the text-rewriting steps of the repair pipeline. Each
step is a focused, single-responsibility component; ``RepairPipeline`` runs
them in a fixed order and records which ones changed the text.
"""

from .base import RepairStepBase
from .handlers import CommentHandler, PythonLiteralHandler
from .normalizers import QuoteUnifier
from .pipeline import PipelineOutcome, RepairPipeline
from .repairers import (
    BareValueRepairer,
    MaskedRewriteStep,
    MissingCommaRepairer,
    TrailingCommaRepairer,
    UnquotedKeyRepairer,
)

__all__ = [
    "RepairPipeline",
    "PipelineOutcome",
    "RepairStepBase",
    "MaskedRewriteStep",
    "CommentHandler",
    "PythonLiteralHandler",
    "QuoteUnifier",
    "UnquotedKeyRepairer",
    "TrailingCommaRepairer",
    "BareValueRepairer",
    "MissingCommaRepairer",
]
