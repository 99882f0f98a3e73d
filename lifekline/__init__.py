"""
lifekline - tolerant parsing of life K-line analyses out of LLM output.

Language models asked for one JSON object routinely wrap it in prose, leave
trailing commas, use single quotes, drift field names or encode numbers as
text. lifekline recovers the payload and turns it into a canonical result, or
raises an error that carries enough of the raw output to diagnose the drift.

Key Features:
- Ordered strategies: direct parse, sentinel markers, balanced block, greedy span
- Repairs: trailing commas, single-quoted literals (last resort only)
- Schema normalization: chart aliases, text-encoded charts, numeric coercion,
  pillar splitting
- Validation with a diagnostic snapshot on failure
- Optional OpenAI-backed client with the matching prompt builder

Quick Start:
    import lifekline

    result = lifekline.parse_life_analysis(model_output)
    result.chart_data[0].close
    result.analysis.bazi

    # Just the JSON recovery
    data = lifekline.parse_model_json("Sure! {'a': 1,}")
"""

from .client import Gender, UserInput, generate_life_analysis
from .core.engine import StrategyOrchestrator, parse_life_analysis, parse_model_json
from .schema import (
    AnalysisSummary,
    ChartPoint,
    DebugSnapshot,
    LifeDestinyResult,
    SchemaNormalizer,
    SchemaValidator,
    normalize_parsed_data,
)
from .security.exceptions import (
    ExtractionError,
    JSONSyntaxError,
    LifeKlineError,
    ParseError,
    SchemaError,
    SecurityError,
    UpstreamError,
)
from .utils.config import ClientSettings, ParseConfig, ParseLimits, SchemaSettings

__version__ = "0.1.0"

__all__ = [
    # Pipeline entry points
    "parse_life_analysis", "parse_model_json", "generate_life_analysis",
    "StrategyOrchestrator", "SchemaNormalizer", "SchemaValidator", "normalize_parsed_data",
    # Result model
    "LifeDestinyResult", "ChartPoint", "AnalysisSummary", "DebugSnapshot",
    "UserInput", "Gender",
    # Configuration classes
    "ParseConfig", "ParseLimits", "SchemaSettings", "ClientSettings",
    # Exception classes
    "LifeKlineError", "ParseError", "ExtractionError", "JSONSyntaxError",
    "SchemaError", "SecurityError", "UpstreamError",
]
