"""
Schema normalization for parsed model output.

Maps an arbitrarily shaped parsed value onto the canonical result shape:
chart aliases are resolved, text-encoded charts are recovered, scalar fields
are coerced and pillar labels are split. Normalization never raises; bad data
is absorbed into documented defaults and validation is the only gate.
"""

import datetime
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from ..core.constants import (
    ANALYSIS_CATEGORIES,
    BAZI_SEPARATOR_PATTERN,
    CANONICAL_CHART_KEY,
    INTEGRAL_POINT_FIELDS,
    PRICE_POINT_FIELDS,
    RESULT_CONTAINER_KEY,
)
from ..core.regex_engine import split as regex_split
from ..core.strategies import strict_parse
from ..preprocessing.extractors import BalancedBlockExtractor
from ..preprocessing.repairers import remove_trailing_commas
from ..utils.config import SchemaSettings
from .aliases import probe_nested
from .values import ValueKind, kind_of, to_finite_number

logger = logging.getLogger(__name__)


def _plain_number(number: float) -> Any:
    """Render integral floats as ints so ``"50"`` normalizes to ``50``."""
    return int(number) if number.is_integer() else number


class SchemaNormalizer:
    """Normalizes a parsed value toward the canonical result shape."""

    def __init__(
        self,
        settings: Optional[SchemaSettings] = None,
        current_year: Optional[Callable[[], int]] = None,
    ):
        self.settings = settings or SchemaSettings()
        self._current_year = current_year or (lambda: datetime.date.today().year)
        self._block_extractor = BalancedBlockExtractor()

    def normalize(self, value: Any) -> Any:
        """Return a normalized copy of ``value``; non-mappings are returned unchanged."""
        if kind_of(value) is not ValueKind.MAPPING:
            return value

        data = dict(value)

        chart_key, chart = probe_nested(
            self.settings.chart_aliases, data, RESULT_CONTAINER_KEY
        )
        if kind_of(chart) is ValueKind.TEXT:
            chart = self._recover_text_chart(chart)
        if kind_of(chart) is ValueKind.SEQUENCE:
            logger.debug("Resolved chart from alias %r (%d entries)", chart_key, len(chart))
            data[CANONICAL_CHART_KEY] = [self.normalize_point(item) for item in chart]

        analysis = data.get("analysis")
        if kind_of(analysis) is ValueKind.MAPPING:
            data["analysis"] = self.normalize_analysis(analysis)

        if kind_of(data.get(CANONICAL_CHART_KEY)) is not ValueKind.SEQUENCE:
            self._wrap_fallback_chart(data)

        return data

    def _recover_text_chart(self, chart: str) -> Any:
        """Recover a chart sequence embedded in text, or None."""
        for candidate in (chart, self._block_extractor.extract(chart)):
            if not candidate:
                continue
            try:
                return strict_parse(remove_trailing_commas(candidate))
            except ValueError:
                continue
        logger.debug("Discarding text-encoded chart that does not parse")
        return None

    def _wrap_fallback_chart(self, data: dict[str, Any]) -> None:
        _, maybe = probe_nested(
            self.settings.fallback_chart_aliases, data, RESULT_CONTAINER_KEY
        )
        kind = kind_of(maybe)
        if kind is ValueKind.SEQUENCE:
            data[CANONICAL_CHART_KEY] = [self.normalize_point(item) for item in maybe]
        elif kind is ValueKind.MAPPING:
            logger.debug("Wrapping single chart mapping as a one-element chart")
            data[CANONICAL_CHART_KEY] = [self.normalize_point(maybe)]

    def normalize_point(self, item: Any) -> Any:
        """Coerce one chart element; non-mapping elements are returned as-is."""
        if kind_of(item) is ValueKind.TEXT:
            try:
                item = strict_parse(item)
            except ValueError:
                return item
        if kind_of(item) is not ValueKind.MAPPING:
            return item

        point = dict(item)
        converted = {
            name: to_finite_number(point.get(name))
            for name in INTEGRAL_POINT_FIELDS + PRICE_POINT_FIELDS
        }

        point["age"] = int(converted["age"]) if converted["age"] is not None else 0
        point["year"] = (
            int(converted["year"]) if converted["year"] is not None else self._current_year()
        )

        for name in ("open", "close", "score"):
            number = converted[name]
            point[name] = _plain_number(number) if number is not None else 0

        # high/low fall back to open, then close, then zero
        base = next(
            (converted[name] for name in ("open", "close") if converted[name] is not None),
            0.0,
        )
        for name in ("high", "low"):
            number = converted[name]
            point[name] = _plain_number(number if number is not None else base)

        if kind_of(point.get("reason")) is not ValueKind.TEXT:
            point["reason"] = ""
        for name in ("ganZhi", "daYun"):
            if point.get(name) is None:
                point[name] = ""
        return point

    def normalize_analysis(self, analysis: Mapping[str, Any]) -> dict[str, Any]:
        """Coerce pillar labels and category scores in the analysis mapping."""
        result = dict(analysis)

        bazi = result.get("bazi")
        kind = kind_of(bazi)
        if kind is ValueKind.TEXT:
            result["bazi"] = split_pillars(bazi)
        elif kind is ValueKind.SEQUENCE:
            result["bazi"] = list(bazi)
        elif kind is not ValueKind.NULL:
            result["bazi"] = [bazi]

        for category in ANALYSIS_CATEGORIES:
            score_key = f"{category}Score"
            number = to_finite_number(result.get(score_key))
            if number is not None:
                result[score_key] = _plain_number(number)

        return result


def split_pillars(text: str) -> list[str]:
    """Split pillar text on runs of ASCII commas, full-width commas or whitespace."""
    parts = regex_split(BAZI_SEPARATOR_PATTERN, text)
    return [part.strip() for part in parts if part and part.strip()]


def normalize_parsed_data(value: Any, settings: Optional[SchemaSettings] = None) -> Any:
    """Normalize ``value`` with a default :class:`SchemaNormalizer`."""
    return SchemaNormalizer(settings).normalize(value)
