"""
Common error handling utilities for model-output parsing.

This module provides attempt collection, bounded raw-text prefixes and error
construction shared by the parsing strategies.
"""

from dataclasses import dataclass
from typing import Optional

from ..security.exceptions import ExtractionError, JSONSyntaxError, ParseError


@dataclass
class AttemptRecord:
    """One strict-parse attempt made by a parsing strategy."""

    strategy: str
    repairs: tuple[str, ...] = ()
    error: Optional[str] = None
    candidate_length: int = 0

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def describe(self) -> str:
        """Render the attempt as a single diagnostic line."""
        steps = " -> ".join((self.strategy,) + self.repairs + ("parse",))
        outcome = "ok" if self.succeeded else f"failed: {self.error}"
        return f"{steps} [{self.candidate_length} chars] {outcome}"


@dataclass
class AttemptStats:
    """Counts of strategies that produced a candidate span."""

    strategies_tried: int = 0
    candidates_found: int = 0

    @property
    def found_any_candidate(self) -> bool:
        return self.candidates_found > 0


class AttemptCollector:
    """Collects strict-parse attempts across strategies for one invocation."""

    def __init__(self) -> None:
        self.attempts: list[AttemptRecord] = []
        self.stats = AttemptStats()

    def add_attempt(self, attempt: AttemptRecord) -> None:
        """Add an attempt to the collection."""
        self.attempts.append(attempt)

    def strategy_started(self, produced_candidate: bool) -> None:
        """Record that a strategy ran and whether it located a span."""
        self.stats.strategies_tried += 1
        if produced_candidate:
            self.stats.candidates_found += 1

    def clear(self) -> None:
        """Clear all collected attempts."""
        self.attempts.clear()
        self.stats = AttemptStats()


class ErrorReporter:
    """Builds bounded diagnostics from the original model output."""

    def __init__(self, original_text: str = "", prefix_length: int = 2000):
        self.original_text = original_text
        self.prefix_length = prefix_length

    @property
    def raw_prefix(self) -> str:
        return bounded_prefix(self.original_text, self.prefix_length)

    def create_parse_error(self, collector: AttemptCollector) -> ParseError:
        """Classify a total parsing failure as extraction or syntax."""
        if not collector.stats.found_any_candidate:
            return ExtractionError(
                "No JSON-like span found in model output",
                raw_prefix=self.raw_prefix,
                attempts=collector.attempts,
            )
        return JSONSyntaxError(
            "Unable to parse model output as JSON after all repair strategies",
            raw_prefix=self.raw_prefix,
            attempts=collector.attempts,
        )


def bounded_prefix(text: Optional[str], length: int) -> str:
    """Return at most ``length`` leading characters of ``text``."""
    if not text:
        return ""
    return text[: max(length, 0)]


@dataclass
class CandidateSpan:
    """A substring of the raw text believed to hold JSON."""

    text: str
    strategy: str
