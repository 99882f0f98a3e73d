"""
Parsing strategies for recovering JSON from model output.

Each strategy locates a candidate span (or uses the raw text as-is), applies
zero or more repair sequences and attempts a strict parse after each one.
Strategies never share mutable state, so a failed strategy cannot affect the
ones tried after it.
"""

import json
import logging
from typing import Any, Optional

from ..preprocessing.extractors import (
    BalancedBlockExtractor,
    GreedySpanExtractor,
    MarkerExtractor,
)
from ..preprocessing.pipeline import RepairPipeline
from ..utils.config import ParseConfig
from .error_handling import AttemptCollector, AttemptRecord, CandidateSpan
from .interfaces import Extractor

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def strict_parse(text: str) -> Any:
    """Parse ``text`` under the standard JSON grammar with no leniency.

    Unlike ``json.loads`` defaults, ``NaN`` and ``Infinity`` are rejected, and
    nesting deeper than the decoder can recurse is reported as a syntax
    failure.

    Raises:
        ValueError: If the text is not strict JSON (``json.JSONDecodeError``
            is a subclass).
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError(f"Nesting too deep to decode: {e}") from e


class ParsingStrategy:
    """Base strategy: one candidate span, one or more repair sequences."""

    name = "strategy"

    def __init__(self, repair_sequences: Optional[list[RepairPipeline]] = None):
        self.repair_sequences = repair_sequences or [RepairPipeline()]

    def find_candidate(self, text: str) -> Optional[CandidateSpan]:
        """Locate the span this strategy parses. Override in subclasses."""
        raise NotImplementedError("Subclasses must implement find_candidate()")

    def attempt(
        self, text: str, config: ParseConfig, collector: AttemptCollector
    ) -> tuple[bool, Any]:
        """Try every repair sequence on the candidate span.

        Returns:
            ``(True, value)`` on the first successful strict parse, otherwise
            ``(False, None)``.
        """
        candidate = self.find_candidate(text)
        collector.strategy_started(self.counts_as_candidate(candidate))
        if candidate is None:
            logger.debug("Strategy %s found no candidate span", self.name)
            return False, None

        tried: set[str] = set()
        for pipeline in self.repair_sequences:
            repaired = pipeline.process(candidate.text, config)
            # Identical text parses identically.
            if repaired in tried:
                continue
            tried.add(repaired)

            repairs = pipeline.step_names(config)
            record = AttemptRecord(
                strategy=self.name, repairs=repairs, candidate_length=len(candidate.text)
            )
            try:
                value = strict_parse(repaired)
            except ValueError as e:
                record.error = str(e)
                collector.add_attempt(record)
                logger.debug("Attempt failed: %s", record.describe())
                continue

            collector.add_attempt(record)
            logger.debug("Attempt succeeded: %s", record.describe())
            return True, value

        return False, None

    def counts_as_candidate(self, candidate: Optional[CandidateSpan]) -> bool:
        return candidate is not None


class DirectStrategy(ParsingStrategy):
    """Strict parse of the full raw text, unmodified."""

    name = "direct"

    def find_candidate(self, text: str) -> Optional[CandidateSpan]:
        return CandidateSpan(text=text, strategy=self.name)

    def counts_as_candidate(self, candidate: Optional[CandidateSpan]) -> bool:
        # The raw text itself is not an extracted span.
        return False


class ExtractingStrategy(ParsingStrategy):
    """Strategy that delegates span location to an extractor."""

    def __init__(
        self,
        extractor: Extractor,
        repair_sequences: Optional[list[RepairPipeline]] = None,
    ):
        super().__init__(repair_sequences)
        self.extractor = extractor
        self.name = extractor.name

    def find_candidate(self, text: str) -> Optional[CandidateSpan]:
        span = self.extractor.extract(text)
        if not span:
            return None
        return CandidateSpan(text=span, strategy=self.name)


def build_default_strategies(config: Optional[ParseConfig] = None) -> list[ParsingStrategy]:
    """Create the ordered strategy list: direct, markers, balanced, greedy."""
    config = config or ParseConfig()
    extraction = config.extraction

    def with_fallback_repairs() -> list[RepairPipeline]:
        return [RepairPipeline.trailing_commas(), RepairPipeline.quotes_then_commas()]

    return [
        DirectStrategy(),
        ExtractingStrategy(
            MarkerExtractor(
                extraction.start_marker,
                extraction.end_marker,
                strip_code_fences=extraction.strip_code_fences,
            ),
            [RepairPipeline.trailing_commas()],
        ),
        ExtractingStrategy(BalancedBlockExtractor(), with_fallback_repairs()),
        ExtractingStrategy(GreedySpanExtractor("{", "}"), with_fallback_repairs()),
        ExtractingStrategy(GreedySpanExtractor("[", "]"), with_fallback_repairs()),
    ]
