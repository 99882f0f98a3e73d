"""
lifekline configuration.
"""

from .config import (
    ClientSettings,
    ErrorReporting,
    ExtractionSettings,
    ParseConfig,
    ParseLimits,
    RepairSettings,
    SchemaSettings,
)

__all__ = [
    'ParseConfig', 'ParseLimits', 'ExtractionSettings', 'RepairSettings',
    'SchemaSettings', 'ErrorReporting', 'ClientSettings',
]
