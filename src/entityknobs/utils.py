"""Small primitives shared by the coercion and validation modules."""

from __future__ import annotations

import re
from collections.abc import Mapping
from re import Pattern as RegexPattern
from typing import Any
from urllib.parse import ParseResult, urlparse


def strip(text: str) -> str:
    """Trim surrounding whitespace."""
    return text.strip()


def split(text: str, separator: str = ",") -> list[str]:
    """Split text on a separator, keeping empty pieces."""
    return text.split(separator)


def is_array(value: Any) -> bool:
    """Check whether a value is a gapless sequential container.

    Lists and tuples are always contiguous. A mapping qualifies when its keys
    are exactly the integers ``0..n-1``, which is how sparse sequences tend
    to arrive from loosely-typed sources.
    """
    if isinstance(value, (list, tuple)):
        return True
    if isinstance(value, Mapping) and value:
        keys = list(value.keys())
        if not all(isinstance(k, int) and not isinstance(k, bool) for k in keys):
            return False
        return sorted(keys) == list(range(len(keys)))
    return False


def parse_url(text: str) -> ParseResult | None:
    """Parse a URL, returning None when the text cannot be parsed."""
    try:
        return urlparse(text)
    except ValueError:
        return None


def compile_pattern(pattern: str | RegexPattern) -> RegexPattern:
    """Compile a pattern unless it is already compiled."""
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def pattern_match(value: Any, pattern: str | RegexPattern) -> bool:
    """Check whether a value contains a match for the pattern.

    Numbers are matched against their text form; any other non-string value
    never matches.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        return False
    return compile_pattern(pattern).search(value) is not None
