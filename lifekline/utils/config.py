"""
Configuration and limits for lifekline parsing.

This module defines the limits, repair switches, schema requirements and
client settings used across the extraction pipeline.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from dotenv import load_dotenv

DEFAULT_START_MARKER = "###JSON_START###"
DEFAULT_END_MARKER = "###JSON_END###"

DEFAULT_CHART_ALIASES = (
    "chartData",
    "chartPoints",
    "chart",
    "points",
    "kline",
    "chart_data",
    "chart_points",
)
DEFAULT_FALLBACK_CHART_ALIASES = ("chart", "points", "kline")

# One label per pillar: year, month, day, hour.
DEFAULT_MIN_BAZI_LENGTH = 4


@dataclass
class ParseLimits:
    """Security limits applied before any parsing work starts."""

    max_input_size: int = 10 * 1024 * 1024

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")


@dataclass
class ExtractionSettings:
    """Settings for locating the JSON payload inside model output."""

    start_marker: str = DEFAULT_START_MARKER
    end_marker: str = DEFAULT_END_MARKER
    strip_code_fences: bool = True


@dataclass
class RepairSettings:
    """Settings for near-miss JSON repair."""

    remove_trailing_commas: bool = True
    normalize_quotes: bool = True


@dataclass
class SchemaSettings:
    """Minimum shape requirements for the canonical result."""

    min_bazi_length: int = DEFAULT_MIN_BAZI_LENGTH
    chart_aliases: tuple[str, ...] = DEFAULT_CHART_ALIASES
    fallback_chart_aliases: tuple[str, ...] = DEFAULT_FALLBACK_CHART_ALIASES

    def __post_init__(self) -> None:
        if self.min_bazi_length < 0:
            raise ValueError("min_bazi_length must not be negative")


@dataclass
class ErrorReporting:
    """Error reporting and diagnostic snapshot settings."""

    debug_prefix_length: int = 2000
    preview_length: int = 500
    log_prefix_length: int = 4000


@dataclass
class ParseConfig:
    """Configuration options for lifekline parsing."""

    limits: ParseLimits = field(default_factory=ParseLimits)
    extraction: ExtractionSettings = field(default_factory=ExtractionSettings)
    repair: RepairSettings = field(default_factory=RepairSettings)
    schema: SchemaSettings = field(default_factory=SchemaSettings)
    error_reporting: ErrorReporting = field(default_factory=ErrorReporting)

    # Flat accessors over the nested groups
    @property
    def max_input_size(self) -> int:
        """Maximum input size in characters."""
        return self.limits.max_input_size

    @property
    def start_marker(self) -> str:
        """Sentinel placed before the JSON payload."""
        return self.extraction.start_marker

    @property
    def end_marker(self) -> str:
        """Sentinel placed after the JSON payload."""
        return self.extraction.end_marker

    @property
    def remove_trailing_commas(self) -> bool:
        """Whether trailing commas are repaired before strict parsing."""
        return self.repair.remove_trailing_commas

    @property
    def normalize_quotes(self) -> bool:
        """Whether single-quoted literals may be rewritten as a last resort."""
        return self.repair.normalize_quotes

    @property
    def min_bazi_length(self) -> int:
        """Minimum number of pillar labels required in analysis.bazi."""
        return self.schema.min_bazi_length

    @property
    def debug_prefix_length(self) -> int:
        """Characters of raw text embedded in raised errors."""
        return self.error_reporting.debug_prefix_length

    @classmethod
    def conservative(cls) -> "ParseConfig":
        """Create a configuration that never rewrites quote characters."""
        return cls(repair=RepairSettings(normalize_quotes=False))

    @classmethod
    def lenient(cls, min_bazi_length: int = 1) -> "ParseConfig":
        """Create a configuration that accepts partial pillar lists."""
        return cls(schema=SchemaSettings(min_bazi_length=min_bazi_length))


@dataclass
class ClientSettings:
    """Settings for the chat-completion transport."""

    api_key: str = ""
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-5"
    temperature: float = 0.0
    max_tokens: int = 4000
    timeout: Optional[float] = 120.0

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides: Any) -> "ClientSettings":
        """Build settings from environment variables, loading ``.env`` first."""
        load_dotenv(dotenv_path=dotenv_path)
        settings = cls(
            api_key=os.getenv("LIFEKLINE_OPENAI_KEY") or os.getenv("OPENAI_API_KEY", ""),
            base_url=os.getenv("LIFEKLINE_OPENAI_BASE") or cls.base_url,
            model=os.getenv("LIFEKLINE_OPENAI_MODEL") or cls.model,
        )
        for name, value in overrides.items():
            if not hasattr(settings, name):
                raise ValueError(f"Unknown client setting: {name}")
            setattr(settings, name, value)
        return settings
