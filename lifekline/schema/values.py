"""
Tagging for strictly parsed JSON values.

``json.loads`` yields plain Python objects; ``kind_of`` maps each one onto a
closed set of variants so the normalizer can dispatch on an explicit tag.
"""

import math
from enum import Enum
from typing import Any, Optional


class ValueKind(Enum):
    """Variants of a strictly parsed JSON value."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"


def kind_of(value: Any) -> ValueKind:
    """Classify ``value``. Anything json.loads cannot produce is OTHER."""
    if value is None:
        return ValueKind.NULL
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, dict):
        return ValueKind.MAPPING
    return ValueKind.OTHER


def to_finite_number(value: Any) -> Optional[float]:
    """Convert a number or numeric text to a finite float, else None."""
    kind = kind_of(value)
    if kind is ValueKind.NUMBER:
        try:
            number = float(value)
        except OverflowError:
            return None
    elif kind is ValueKind.TEXT:
        stripped = value.strip()
        if not stripped:
            return None
        try:
            number = float(stripped)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def type_name(value: Any) -> str:
    """Short type label used in diagnostic snapshots."""
    return kind_of(value).value
