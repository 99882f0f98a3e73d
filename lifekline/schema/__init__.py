"""
lifekline schema normalization and validation.
"""

from .aliases import probe_aliases, probe_nested
from .models import AnalysisSummary, CategoryAssessment, ChartPoint, LifeDestinyResult
from .normalizer import SchemaNormalizer, normalize_parsed_data, split_pillars
from .validator import (
    DebugSnapshot,
    SchemaValidator,
    ValidationReport,
    validate_life_destiny_data,
)
from .values import ValueKind, kind_of, to_finite_number

__all__ = [
    'SchemaNormalizer', 'normalize_parsed_data', 'split_pillars',
    'SchemaValidator', 'ValidationReport', 'DebugSnapshot', 'validate_life_destiny_data',
    'ChartPoint', 'CategoryAssessment', 'AnalysisSummary', 'LifeDestinyResult',
    'ValueKind', 'kind_of', 'to_finite_number', 'probe_aliases', 'probe_nested',
]
