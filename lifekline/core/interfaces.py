"""
Core interfaces and protocols for the extraction pipeline.

This module defines the contracts that extractors and repair steps implement,
enabling the parsing strategies to compose them freely.
"""

from typing import Any, Optional, Protocol


class Extractor(Protocol):
    """Protocol for components that locate a candidate JSON span in raw text."""

    name: str

    def extract(self, text: str) -> Optional[str]:
        """Return the candidate span, or None when not applicable."""
        ...


class RepairStep(Protocol):
    """Protocol for text-to-text repair steps in the repair pipeline."""

    name: str

    def process(self, text: str, config: Any = None) -> str:
        """Process the input text according to this repair step."""
        ...

    def should_apply(self, config: Any) -> bool:
        """Determine if this step should be applied given the configuration."""
        ...
