"""
lifekline error taxonomy and input limits.
"""

from .exceptions import (
    ExtractionError,
    JSONSyntaxError,
    LifeKlineError,
    ParseError,
    SchemaError,
    SecurityError,
    UpstreamError,
)
from .limits import LimitValidator

__all__ = [
    'LifeKlineError', 'ParseError', 'ExtractionError', 'JSONSyntaxError',
    'SchemaError', 'SecurityError', 'UpstreamError', 'LimitValidator',
]
