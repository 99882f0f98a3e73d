"""
lifekline Core Parsing Engine.

This module provides the strategy orchestration that recovers JSON from
model output.
"""

from .engine import StrategyOrchestrator, parse_life_analysis, parse_model_json
from .strategies import (
    DirectStrategy,
    ExtractingStrategy,
    ParsingStrategy,
    build_default_strategies,
    strict_parse,
)

__all__ = [
    'parse_model_json', 'parse_life_analysis', 'StrategyOrchestrator',
    'ParsingStrategy', 'DirectStrategy', 'ExtractingStrategy',
    'build_default_strategies', 'strict_parse',
]
