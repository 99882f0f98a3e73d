"""
Compiled-pattern helpers over the ``regex`` module.

Patterns are compiled once per ``(pattern, flags)`` pair and reused. Every
call runs synchronously in the caller's thread; the patterns the pipeline uses
match in linear time, so no timeout is applied.
"""

import functools
from typing import Any, Callable, Union

import regex

Replacement = Union[str, Callable[[Any], str]]


@functools.lru_cache(maxsize=128)
def compile_pattern(pattern: str, flags: int = 0) -> Any:
    """Return the compiled form of ``pattern``.

    Raises:
        regex.error: If the pattern does not compile
    """
    return regex.compile(pattern, flags)


def sub(pattern: str, repl: Replacement, text: str, flags: int = 0, count: int = 0) -> str:
    """Replace matches of ``pattern`` in ``text``."""
    return compile_pattern(pattern, flags).sub(repl, text, count=count)


def split(pattern: str, text: str, flags: int = 0, maxsplit: int = 0) -> list[str]:
    """Split ``text`` on matches of ``pattern``."""
    return compile_pattern(pattern, flags).split(text, maxsplit=maxsplit)
