"""Identifier format checks."""

import re
from typing import Any

_HEX = "[0-9a-f]"
UUID_PATTERN = re.compile(
    "^" + "-".join(f"{_HEX}{{{n}}}" for n in (8, 4, 4, 4, 12)) + "$"
)


def is_valid_uuid(value: Any) -> bool:
    """Check for the canonical lower-case 8-4-4-4-12 hex form.

    Upper-case digits, braces and surrounding whitespace are all rejected.
    """
    if not isinstance(value, str):
        return False
    return UUID_PATTERN.fullmatch(value) is not None
