"""
Canonical result model.

The dataclasses here are built only from values that passed
:class:`~lifekline.schema.validator.SchemaValidator`; ``to_dict`` returns the
wire shape ``{"chartData": [...], "analysis": {...}}``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.constants import ANALYSIS_CATEGORIES
from .validator import resolve_chart
from .values import ValueKind, kind_of, to_finite_number


def _number(value: Any, default: float = 0) -> Any:
    number = to_finite_number(value)
    if number is None:
        return default
    return int(number) if number.is_integer() else number


def _text(value: Any) -> str:
    kind = kind_of(value)
    if kind is ValueKind.TEXT:
        return value
    if kind is ValueKind.NULL:
        return ""
    return str(value)


@dataclass
class ChartPoint:
    """One year of the life trajectory."""

    age: int
    year: int
    gan_zhi: str = ""
    da_yun: str = ""
    open: float = 0
    close: float = 0
    high: float = 0
    low: float = 0
    score: float = 0
    reason: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChartPoint":
        return cls(
            age=int(_number(data.get("age"))),
            year=int(_number(data.get("year"))),
            gan_zhi=_text(data.get("ganZhi")),
            da_yun=_text(data.get("daYun")),
            open=_number(data.get("open")),
            close=_number(data.get("close")),
            high=_number(data.get("high")),
            low=_number(data.get("low")),
            score=_number(data.get("score")),
            reason=_text(data.get("reason")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "age": self.age,
            "year": self.year,
            "ganZhi": self.gan_zhi,
            "daYun": self.da_yun,
            "open": self.open,
            "close": self.close,
            "high": self.high,
            "low": self.low,
            "score": self.score,
            "reason": self.reason,
        }


@dataclass
class CategoryAssessment:
    """Text and score for one analysis category."""

    text: str = ""
    score: float = 0


@dataclass
class AnalysisSummary:
    """Per-category assessments plus the four pillar labels."""

    bazi: list[str]
    categories: dict[str, CategoryAssessment] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnalysisSummary":
        known = {"bazi"}
        categories = {}
        for category in ANALYSIS_CATEGORIES:
            score_key = f"{category}Score"
            known.update((category, score_key))
            categories[category] = CategoryAssessment(
                text=_text(data.get(category)), score=_number(data.get(score_key))
            )
        extras = {key: value for key, value in data.items() if key not in known}
        return cls(
            bazi=[_text(label) for label in data.get("bazi") or []],
            categories=categories,
            extras=extras,
        )

    def __getitem__(self, category: str) -> CategoryAssessment:
        return self.categories[category]

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"bazi": list(self.bazi)}
        for category, assessment in self.categories.items():
            result[category] = assessment.text
            result[f"{category}Score"] = assessment.score
        result.update(self.extras)
        return result


@dataclass
class LifeDestinyResult:
    """The canonical result: a non-empty chart and its analysis."""

    chart_data: list[ChartPoint]
    analysis: AnalysisSummary

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LifeDestinyResult":
        """Build from a normalized mapping that passed validation."""
        return cls(
            chart_data=[ChartPoint.from_dict(point) for point in resolve_chart(data)],
            analysis=AnalysisSummary.from_dict(data["analysis"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "chartData": [point.to_dict() for point in self.chart_data],
            "analysis": self.analysis.to_dict(),
        }
