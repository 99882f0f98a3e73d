"""
Content extraction steps.

This module contains the extractors that locate a JSON-like span inside
free-form model output: sentinel markers, bracket balancing and the greedy
first-to-last delimiter fallback.
"""

import re
from typing import Optional

from ..utils.config import DEFAULT_END_MARKER, DEFAULT_START_MARKER

_OPENERS = "{["
_CLOSERS = "}]"
_QUOTES = "\"'"

_CODE_FENCE_PATTERN = re.compile(
    r"^```[A-Za-z0-9_-]*[ \t]*\n?(.*?)\n?[ \t]*```$", re.DOTALL
)


class BalancedBlockExtractor:
    """Extracts the first self-balanced ``{...}`` or ``[...]`` block."""

    name = "balanced"

    def extract(self, text: str) -> Optional[str]:
        """Return the first balanced block, or None if none is terminated."""
        if not text:
            return None

        start_pos = self._find_start(text)
        if start_pos == -1:
            return None

        stack: list[str] = []
        string_char = ""
        escape_next = False

        for i in range(start_pos, len(text)):
            char = text[i]

            if string_char:
                if escape_next:
                    escape_next = False
                elif char == "\\":
                    escape_next = True
                elif char == string_char:
                    string_char = ""
                continue

            # Single quotes open literals too; models emit them often enough.
            if char in _QUOTES:
                string_char = char
            elif char in _OPENERS:
                stack.append(char)
            elif char in _CLOSERS:
                if stack:
                    stack.pop()
                if not stack:
                    return text[start_pos : i + 1]

        return None

    @staticmethod
    def _find_start(text: str) -> int:
        positions = [pos for pos in (text.find("{"), text.find("[")) if pos != -1]
        return min(positions) if positions else -1


class MarkerExtractor:
    """Extracts the text between two literal sentinel markers."""

    name = "markers"

    def __init__(
        self,
        start_marker: str = DEFAULT_START_MARKER,
        end_marker: str = DEFAULT_END_MARKER,
        strip_code_fences: bool = False,
    ):
        if not start_marker or not end_marker:
            raise ValueError("Sentinel markers must be non-empty")
        self.start_marker = start_marker
        self.end_marker = end_marker
        self.strip_code_fences = strip_code_fences

    def extract(self, text: str) -> Optional[str]:
        """Return the trimmed text between the markers, or None if not applicable."""
        if not text:
            return None

        start = text.find(self.start_marker)
        if start == -1:
            return None
        content_start = start + len(self.start_marker)

        end = text.find(self.end_marker, content_start)
        if end == -1:
            return None

        between = text[content_start:end].strip()
        if self.strip_code_fences:
            between = strip_code_fence(between)
        return between


class GreedySpanExtractor:
    """Extracts from the first opening delimiter to the last closing one."""

    def __init__(self, opener: str, closer: str):
        self.opener = opener
        self.closer = closer
        self.name = "greedy_object" if opener == "{" else "greedy_array"

    def extract(self, text: str) -> Optional[str]:
        """Return ``text[first opener : last closer]`` inclusive, or None."""
        if not text:
            return None
        start = text.find(self.opener)
        end = text.rfind(self.closer)
        if start == -1 or end < start:
            return None
        return text[start : end + 1]


def strip_code_fence(text: str) -> str:
    """Remove one surrounding markdown code fence (```json ... ```), if present."""
    match = _CODE_FENCE_PATTERN.match(text.strip())
    if match:
        return match.group(1).strip()
    return text
