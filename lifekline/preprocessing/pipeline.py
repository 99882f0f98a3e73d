"""
Repair pipeline for composable text repair steps.

This module implements the pipeline pattern so each parsing strategy can
apply an ordered sequence of repairs to its candidate span.
"""

from typing import Optional

from ..core.interfaces import RepairStep
from ..utils.config import ParseConfig
from .normalizers import QuoteNormalizer
from .repairers import TrailingCommaRepairer


class RepairPipeline:
    """Manages a sequence of repair steps applied to a candidate span."""

    def __init__(self, steps: Optional[list[RepairStep]] = None):
        self.steps = steps or []

    def add_step(self, step: RepairStep) -> None:
        """Add a repair step to the pipeline."""
        self.steps.append(step)

    def applicable_steps(self, config: Optional[ParseConfig] = None) -> list[RepairStep]:
        """Steps that the configuration enables, in order."""
        return [step for step in self.steps if step.should_apply(config)]

    def step_names(self, config: Optional[ParseConfig] = None) -> tuple[str, ...]:
        return tuple(step.name for step in self.applicable_steps(config))

    def process(self, text: str, config: Optional[ParseConfig] = None) -> str:
        """Apply all applicable repair steps to the text."""
        result = text
        for step in self.applicable_steps(config):
            result = step.process(result, config)
        return result

    @classmethod
    def trailing_commas(cls) -> "RepairPipeline":
        """Create the cheap repair sequence tried first."""
        return cls([TrailingCommaRepairer()])

    @classmethod
    def quotes_then_commas(cls) -> "RepairPipeline":
        """Create the last-resort sequence that also rewrites single quotes."""
        return cls([TrailingCommaRepairer(), QuoteNormalizer(), TrailingCommaRepairer()])
