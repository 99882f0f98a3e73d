"""
Security limits and validation for lifekline.
This module rejects oversized model output before any scanning work starts.
"""

from ..utils.config import ParseLimits
from .exceptions import SecurityError


class LimitValidator:
    """Validates parsing limits to prevent resource exhaustion."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits

    def validate_input_size(self, text: str) -> None:
        """Validate that input text size is within limits."""
        if len(text) > self.limits.max_input_size:
            raise SecurityError(
                f"Input size {len(text)} exceeds limit {self.limits.max_input_size}",
                raw_prefix=text[:200],
            )
