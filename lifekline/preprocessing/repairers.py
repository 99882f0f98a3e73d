"""
Structure repair steps.

This module contains the repair step that removes trailing commas, the most
common strict-JSON violation in model output.
"""

from typing import Optional

from ..core.regex_engine import sub as regex_sub
from ..utils.config import ParseConfig
from .base import RepairStepBase

# A run of commas (with any whitespace between them) directly before a closer.
TRAILING_COMMA_PATTERN = r",(?:\s*,)*\s*([}\]])"


class TrailingCommaRepairer(RepairStepBase):
    """Removes commas followed, modulo whitespace, by ``}`` or ``]``."""

    name = "trailing_commas"

    def should_apply(self, config: Optional[ParseConfig]) -> bool:
        """Apply if trailing comma repair is enabled."""
        return config is None or config.remove_trailing_commas

    def process(self, text: str, _config: Optional[ParseConfig] = None) -> str:
        """Remove trailing commas before closing braces/brackets."""
        return remove_trailing_commas(text)


def remove_trailing_commas(text: str) -> str:
    """Delete every comma that is followed only by whitespace and a closer."""
    if "," not in text:
        return text
    return regex_sub(TRAILING_COMMA_PATTERN, r"\1", text)
