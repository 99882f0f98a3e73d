"""
Model-output preprocessing module.

This module provides the extractors that locate a JSON-like span in free-form
text and the repair steps that turn near-miss JSON into strict JSON. The steps
are single-responsibility components composed by the parsing strategies.
"""

from .base import RepairStepBase
from .extractors import (
    BalancedBlockExtractor,
    GreedySpanExtractor,
    MarkerExtractor,
    strip_code_fence,
)
from .normalizers import QuoteNormalizer, convert_single_quotes
from .pipeline import RepairPipeline
from .repairers import TrailingCommaRepairer, remove_trailing_commas

__all__ = [
    "RepairPipeline",
    "RepairStepBase",
    "BalancedBlockExtractor",
    "MarkerExtractor",
    "GreedySpanExtractor",
    "QuoteNormalizer",
    "TrailingCommaRepairer",
    "convert_single_quotes",
    "remove_trailing_commas",
    "strip_code_fence",
]
