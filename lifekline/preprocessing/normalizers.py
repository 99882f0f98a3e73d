"""
Text normalization steps.

This module contains the quote normalizer that rewrites single-quoted string
literals as double-quoted JSON strings. It is a heuristic: apostrophes that
appear outside double-quoted strings are indistinguishable from literal
delimiters, so it only runs after the stricter repairs have failed.
"""

from typing import Optional

from ..utils.config import ParseConfig
from .base import RepairStepBase


class QuoteNormalizer(RepairStepBase):
    """Converts single-quoted literals to double-quoted literals."""

    name = "quotes"

    def should_apply(self, config: Optional[ParseConfig]) -> bool:
        """Apply if quote normalization is enabled."""
        return config is None or config.normalize_quotes

    def process(self, text: str, _config: Optional[ParseConfig] = None) -> str:
        """Normalize quotes in JSON text."""
        return convert_single_quotes(text)


def convert_single_quotes(text: str) -> str:
    """Rewrite every terminated single-quoted literal as a double-quoted one.

    Double-quoted literals are copied through untouched. Inside a converted
    literal, ``\\'`` becomes a bare apostrophe and unescaped ``"`` is escaped.
    An unterminated single quote is left as-is.
    """
    if "'" not in text:
        return text

    result: list[str] = []
    length = len(text)
    i = 0

    while i < length:
        char = text[i]

        if char == '"':
            end = _find_literal_end(text, i, '"')
            stop = length if end == -1 else end + 1
            result.append(text[i:stop])
            i = stop
            continue

        if char == "'":
            end = _find_literal_end(text, i, "'")
            if end == -1:
                result.append(char)
                i += 1
                continue
            result.append('"')
            result.append(_requote_body(text[i + 1 : end]))
            result.append('"')
            i = end + 1
            continue

        result.append(char)
        i += 1

    return "".join(result)


def _find_literal_end(text: str, start: int, quote: str) -> int:
    """Index of the unescaped ``quote`` closing the literal opened at ``start``."""
    i = start + 1
    length = len(text)
    while i < length:
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i
        i += 1
    return -1


def _requote_body(body: str) -> str:
    out: list[str] = []
    i = 0
    length = len(body)
    while i < length:
        char = body[i]
        if char == "\\" and i + 1 < length:
            nxt = body[i + 1]
            # \' is not a valid JSON escape
            out.append("'" if nxt == "'" else char + nxt)
            i += 2
            continue
        if char == '"':
            out.append('\\"')
        else:
            out.append(char)
        i += 1
    return "".join(out)
