"""
Repair pipeline for composable JSON repair steps.

This module implements the pipeline pattern: steps run in a fixed order and
the pipeline records the label of every step that actually changed the text.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.interfaces import RepairStep
from ..utils.config import RepairConfig
from .handlers import CommentHandler, PythonLiteralHandler
from .normalizers import QuoteUnifier
from .repairers import (
    BareValueRepairer,
    MissingCommaRepairer,
    TrailingCommaRepairer,
    UnquotedKeyRepairer,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineOutcome:
    """Text produced by a pipeline run and the labels of the steps that fired."""

    text: str
    fixes: tuple[str, ...] = ()


class RepairPipeline:
    """Manages a sequence of repair steps applied to JSON-like text."""

    def __init__(self, steps: Optional[list[RepairStep]] = None):
        self.steps = steps or []

    def add_step(self, step: RepairStep) -> None:
        """Add a repair step to the pipeline."""
        self.steps.append(step)

    def run(self, text: str, config: Optional[RepairConfig] = None) -> PipelineOutcome:
        """Apply all applicable steps and report which ones changed the text."""
        if config is None:
            config = RepairConfig()

        result = text
        fixes = []
        for step in self.steps:
            if not step.should_apply(config):
                continue
            rewritten = step.process(result, config)
            if rewritten != result:
                logger.debug("%s: %s", type(step).__name__, step.label)
                fixes.append(step.label)
                result = rewritten
        return PipelineOutcome(result, tuple(fixes))

    def process(self, text: str, config: Optional[RepairConfig] = None) -> str:
        """Apply all applicable steps to the text."""
        return self.run(text, config).text

    @classmethod
    def create_default_pipeline(cls) -> "RepairPipeline":
        """Create the standard pipeline with every step in its fixed order."""
        pipeline = cls()

        # Cleanup steps, comments first so quotes inside them never open strings
        pipeline.add_step(CommentHandler())
        pipeline.add_step(PythonLiteralHandler())

        # Normalization
        pipeline.add_step(QuoteUnifier())

        # Structure repair
        pipeline.add_step(UnquotedKeyRepairer())
        pipeline.add_step(TrailingCommaRepairer())
        pipeline.add_step(BareValueRepairer())
        pipeline.add_step(MissingCommaRepairer())

        return pipeline
