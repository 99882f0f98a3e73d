"""
Base classes for repair steps.

This module contains the base class used by text repair steps so they can be
composed in a pipeline.
"""

from typing import Optional

from ..utils.config import ParseConfig


class RepairStepBase:
    """Base class for text-to-text repair steps."""

    name = "repair"

    def should_apply(self, _config: Optional[ParseConfig]) -> bool:
        """Default implementation - always apply. Override in subclasses."""
        return True

    def process(self, text: str, _config: Optional[ParseConfig] = None) -> str:
        """Process the text. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement process()")
