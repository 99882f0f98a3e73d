"""
Minimum-shape validation for normalized model output.

On rejection the validator captures a :class:`DebugSnapshot` so the failure can
be diagnosed from logs or the raised error alone, without re-issuing the
request.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.constants import CANONICAL_CHART_KEY, LEGACY_CHART_KEY
from ..core.error_handling import bounded_prefix
from ..security.exceptions import SchemaError
from ..utils.config import DEFAULT_MIN_BAZI_LENGTH, ErrorReporting
from .values import type_name


@dataclass
class DebugSnapshot:
    """Diagnostic view of a value that failed validation."""

    raw_prefix: str
    parsed_keys: list[str]
    normalized_keys: list[str]
    chart_is_list: bool
    chart_length: Optional[int]
    analysis_type: str
    bazi_is_list: bool
    bazi_length: Optional[int]
    normalized_preview: str = ""

    def render(self) -> str:
        """Render the snapshot as the human-readable block embedded in errors."""
        return "\n".join(
            [
                f"Parsed top-level keys: {self.parsed_keys}",
                f"Normalized top-level keys: {self.normalized_keys}",
                f"chartData is list: {self.chart_is_list}, length: {self.chart_length}",
                f"analysis type: {self.analysis_type}, "
                f"bazi is list: {self.bazi_is_list}, length: {self.bazi_length}",
                f"Normalized data (first {len(self.normalized_preview)} chars of JSON):",
                self.normalized_preview,
                f"Raw output (first {len(self.raw_prefix)} chars):",
                self.raw_prefix,
            ]
        )


@dataclass
class ValidationReport:
    """Outcome of validating one normalized value."""

    ok: bool
    reasons: list[str] = field(default_factory=list)
    snapshot: Optional[DebugSnapshot] = None


def resolve_chart(normalized: Any) -> Any:
    """The chart field of a normalized value, accepting the legacy key."""
    if not isinstance(normalized, Mapping):
        return None
    chart = normalized.get(CANONICAL_CHART_KEY)
    if chart is None:
        chart = normalized.get(LEGACY_CHART_KEY)
    return chart


def _top_level_keys(value: Any) -> list[str]:
    return list(value.keys()) if isinstance(value, Mapping) else []


def _preview(value: Any, length: int) -> str:
    try:
        text = json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        text = repr(value)
    return text[:length]


class SchemaValidator:
    """Checks a normalized value against the minimum result shape."""

    def __init__(
        self,
        min_bazi_length: int = DEFAULT_MIN_BAZI_LENGTH,
        reporting: Optional[ErrorReporting] = None,
    ):
        self.min_bazi_length = min_bazi_length
        self.reporting = reporting or ErrorReporting()

    def find_problems(self, normalized: Any) -> list[str]:
        """List every reason ``normalized`` is rejected; empty when accepted."""
        problems: list[str] = []

        chart = resolve_chart(normalized)
        if not isinstance(chart, list) or not chart:
            problems.append("chartData must be a non-empty list")
        else:
            for index, point in enumerate(chart):
                if not isinstance(point, Mapping):
                    problems.append(
                        f"chartData[{index}] must be an object, got {type_name(point)}"
                    )

        analysis = normalized.get("analysis") if isinstance(normalized, Mapping) else None
        if not isinstance(analysis, Mapping):
            problems.append("analysis must be an object")
            return problems

        bazi = analysis.get("bazi")
        if not isinstance(bazi, list):
            problems.append("analysis.bazi must be a list")
        elif len(bazi) < self.min_bazi_length:
            problems.append(
                f"analysis.bazi must contain at least {self.min_bazi_length} "
                f"pillars, got {len(bazi)}"
            )
        return problems

    def validate(
        self, normalized: Any, *, raw_text: str = "", parsed: Any = None
    ) -> ValidationReport:
        """Validate ``normalized`` and capture a snapshot when it is rejected."""
        problems = self.find_problems(normalized)
        if not problems:
            return ValidationReport(ok=True)
        snapshot = self.snapshot(normalized, raw_text=raw_text, parsed=parsed)
        return ValidationReport(ok=False, reasons=problems, snapshot=snapshot)

    def check(self, normalized: Any, *, raw_text: str = "", parsed: Any = None) -> None:
        """Raise :class:`SchemaError` when ``normalized`` is rejected."""
        report = self.validate(normalized, raw_text=raw_text, parsed=parsed)
        if report.ok:
            return
        snapshot = report.snapshot
        if snapshot is None:
            snapshot = self.snapshot(normalized, raw_text=raw_text, parsed=parsed)
        raise SchemaError(
            "Model output is incomplete or malformed; check the prompt or output format",
            snapshot=snapshot,
            reasons=report.reasons,
        )

    def snapshot(self, normalized: Any, *, raw_text: str = "", parsed: Any = None) -> DebugSnapshot:
        """Build the diagnostic snapshot for ``normalized``."""
        chart = resolve_chart(normalized)
        analysis = normalized.get("analysis") if isinstance(normalized, Mapping) else None
        bazi = analysis.get("bazi") if isinstance(analysis, Mapping) else None
        return DebugSnapshot(
            raw_prefix=bounded_prefix(raw_text, self.reporting.debug_prefix_length),
            parsed_keys=_top_level_keys(parsed),
            normalized_keys=_top_level_keys(normalized),
            chart_is_list=isinstance(chart, list),
            chart_length=len(chart) if isinstance(chart, list) else None,
            analysis_type=type_name(analysis) if analysis is not None else "missing",
            bazi_is_list=isinstance(bazi, list),
            bazi_length=len(bazi) if isinstance(bazi, list) else None,
            normalized_preview=_preview(normalized, self.reporting.preview_length),
        )


def validate_life_destiny_data(normalized: Any, min_bazi_length: int = DEFAULT_MIN_BAZI_LENGTH) -> bool:
    """Return True iff ``normalized`` meets the minimum result shape."""
    return not SchemaValidator(min_bazi_length).find_problems(normalized)
