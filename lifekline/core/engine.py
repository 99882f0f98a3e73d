"""
Parsing engine for lifekline - turns model output into the canonical result.
"""

import logging
from typing import Any, Optional

from ..schema.models import LifeDestinyResult
from ..schema.normalizer import SchemaNormalizer
from ..schema.validator import SchemaValidator
from ..security.exceptions import SchemaError, UpstreamError
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .error_handling import AttemptCollector, ErrorReporter, bounded_prefix
from .strategies import ParsingStrategy, build_default_strategies

logger = logging.getLogger(__name__)


class StrategyOrchestrator:
    """Tries an ordered list of parsing strategies, first success wins."""

    def __init__(
        self,
        config: Optional[ParseConfig] = None,
        strategies: Optional[list[ParsingStrategy]] = None,
    ):
        self.config = config or ParseConfig()
        self.strategies = (
            strategies if strategies is not None else build_default_strategies(self.config)
        )
        self.limit_validator = LimitValidator(self.config.limits)

    def parse(self, text: str) -> Any:
        """
        Recover one JSON value from model output.

        Args:
            text: The raw model completion

        Returns:
            The value produced by the first successful strict parse

        Raises:
            ExtractionError: If no strategy located a JSON-like span
            JSONSyntaxError: If spans were found but none parsed after repair
            SecurityError: If the input exceeds configured limits
        """
        if not isinstance(text, str):
            raise TypeError(f"Model output must be a string, got {type(text).__name__}")
        self.limit_validator.validate_input_size(text)

        collector = AttemptCollector()
        for strategy in self.strategies:
            found, value = strategy.attempt(text, self.config, collector)
            if found:
                logger.debug(
                    "Parsed model output with strategy %s after %d attempts",
                    strategy.name,
                    len(collector.attempts),
                )
                return value

        error = ErrorReporter(text, self.config.debug_prefix_length).create_parse_error(
            collector
        )
        logger.warning(
            "All %d parsing strategies failed (%s)",
            collector.stats.strategies_tried,
            error.category,
        )
        raise error


def parse_model_json(text: str, config: Optional[ParseConfig] = None) -> Any:
    """
    Parse JSON out of free-form model output using every repair strategy.

    Args:
        text: The raw model completion
        config: Optional ParseConfig for markers, repairs and limits

    Returns:
        Parsed Python data structure

    Raises:
        ExtractionError: If no JSON-like span exists in the text
        JSONSyntaxError: If no candidate span parses after repair
    """
    return StrategyOrchestrator(config).parse(text)


def parse_life_analysis(
    content: Optional[str], config: Optional[ParseConfig] = None
) -> LifeDestinyResult:
    """
    Run the full pipeline: parse, normalize, validate and build the result.

    Args:
        content: The ``content`` field of a chat-completion response message
        config: Optional ParseConfig

    Returns:
        A newly constructed LifeDestinyResult

    Raises:
        UpstreamError: If ``content`` is missing or empty
        ExtractionError, JSONSyntaxError: If no JSON value can be recovered
        SchemaError: If the normalized value lacks required structure
    """
    if not content or not content.strip():
        raise UpstreamError("Model returned no content")

    config = config or ParseConfig()
    parsed = StrategyOrchestrator(config).parse(content)
    normalized = SchemaNormalizer(config.schema).normalize(parsed)

    validator = SchemaValidator(config.min_bazi_length, config.error_reporting)
    try:
        validator.check(normalized, raw_text=content, parsed=parsed)
    except SchemaError as e:
        _log_schema_failure(e, content, config)
        raise

    return LifeDestinyResult.from_dict(normalized)


def _log_schema_failure(error: SchemaError, content: str, config: ParseConfig) -> None:
    snapshot = error.snapshot
    logger.warning(
        "Model output failed schema validation: %s",
        "; ".join(error.reasons),
    )
    logger.warning(
        "Raw model output (first %d chars):\n%s",
        config.error_reporting.log_prefix_length,
        bounded_prefix(content, config.error_reporting.log_prefix_length),
    )
    logger.warning(
        "Parsed keys: %s; normalized keys: %s; chartData is list: %s, length: %s; "
        "analysis type: %s, bazi is list: %s, length: %s",
        snapshot.parsed_keys,
        snapshot.normalized_keys,
        snapshot.chart_is_list,
        snapshot.chart_length,
        snapshot.analysis_type,
        snapshot.bazi_is_list,
        snapshot.bazi_length,
    )
