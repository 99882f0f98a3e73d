"""
Field-name alias probing.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional


def probe_aliases(keys: Iterable[str], mapping: Any) -> tuple[Optional[str], Any]:
    """Return ``(key, value)`` for the first key in ``keys`` bound to a non-null value.

    Keys are probed in the given priority order. A non-mapping ``mapping`` or
    no match yields ``(None, None)``.
    """
    if not isinstance(mapping, Mapping):
        return None, None
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return key, value
    return None, None


def probe_nested(
    keys: Iterable[str], mapping: Any, container: str = "result"
) -> tuple[Optional[str], Any]:
    """Probe ``keys`` at the top level, then one level under ``container``."""
    keys = tuple(keys)
    key, value = probe_aliases(keys, mapping)
    if key is not None:
        return key, value
    if isinstance(mapping, Mapping):
        return probe_aliases(keys, mapping.get(container))
    return None, None
