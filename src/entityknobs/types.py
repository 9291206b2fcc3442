"""Type tags, type predicates and string coercion for field values."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Dict, Tuple

from .utils import is_array, parse_url, split, strip

logger = logging.getLogger(__name__)

_HEX_NUMBER = re.compile(r"^[-+]?0[xX][0-9a-fA-F]+$")


class FieldType(Enum):
    """Closed vocabulary of recognized field type tags.

    A descriptor may also carry a tag outside this vocabulary. Such custom
    tags are checked against the value's Python type name, but a mismatch is
    never reported as an error.

    Attributes:
        ID: Textual identifier
        TABLE: Any composite value (mapping or sequence)
        ARRAY: Gapless sequence
        STRING: Text
        NUMBER: Integer or float
        BOOLEAN: True/False
        URL: Text with a scheme, host and path
        TIMESTAMP: Numeric epoch value
    """

    ID = "id"
    TABLE = "table"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    URL = "url"
    TIMESTAMP = "timestamp"

    @classmethod
    def from_tag(cls, tag: str | FieldType | None) -> FieldType | None:
        """Resolve a tag to a FieldType, or None for custom/absent tags."""
        if tag is None or isinstance(tag, FieldType):
            return tag
        try:
            return cls(tag)
        except ValueError:
            return None


def tag_name(tag: str | FieldType) -> str:
    """Return the plain string form of a tag."""
    return tag.value if isinstance(tag, FieldType) else tag


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    parsed = parse_url(value)
    return bool(parsed and parsed.scheme and parsed.netloc and parsed.path)


_PREDICATES: Dict[FieldType, Callable[[Any], bool]] = {
    FieldType.ID: lambda v: isinstance(v, str),
    FieldType.TABLE: lambda v: isinstance(v, (Mapping, list, tuple)),
    FieldType.ARRAY: is_array,
    FieldType.STRING: lambda v: isinstance(v, str),
    FieldType.NUMBER: is_number,
    FieldType.BOOLEAN: lambda v: isinstance(v, bool),
    FieldType.URL: _is_url,
    FieldType.TIMESTAMP: is_number,
}


def is_recognized(tag: str | FieldType | None) -> bool:
    """Check whether a tag belongs to the recognized vocabulary."""
    return FieldType.from_tag(tag) is not None


def is_valid_type(tag: str | FieldType, value: Any) -> bool:
    """Check a value against a type tag.

    Args:
        tag: Recognized tag or custom tag name
        value: Value to check

    Returns:
        True if the value satisfies the tag's predicate
    """
    field_type = FieldType.from_tag(tag)
    if field_type is None:
        return type(value).__name__ == tag
    return _PREDICATES[field_type](value)


class TypeCoercer:
    """Coerce textual input into a declared field type.

    Only strings are coerced. Text is always trimmed first; after that each
    tag has its own conversion, and the result is checked with
    :func:`is_valid_type`.
    """

    def __init__(self) -> None:
        self._coercion_map: Dict[FieldType, Callable[[str], Tuple[Any, bool]]] = {
            FieldType.NUMBER: self._to_number,
            FieldType.TIMESTAMP: self._to_number,
            FieldType.BOOLEAN: self._to_bool,
            FieldType.ARRAY: self._to_array,
        }

    def coerce(self, tag: str | FieldType, value: Any) -> Tuple[Any, bool]:
        """Coerce a value toward a tag and check the outcome.

        Args:
            tag: Declared type tag
            value: Input value

        Returns:
            Tuple of (value to store, type check passed). When a conversion
            fails the trimmed text is returned unchanged.
        """
        if not isinstance(value, str):
            return value, is_valid_type(tag, value)

        text = strip(value)
        coercion_func = self._coercion_map.get(FieldType.from_tag(tag))  # type: ignore[arg-type]
        if coercion_func is None:
            return text, is_valid_type(tag, text)

        coerced, ok = coercion_func(text)
        if not ok:
            logger.debug(f"Could not coerce {text!r} to {tag_name(tag)}")
            return text, False
        return coerced, is_valid_type(tag, coerced)

    def _to_number(self, text: str) -> Tuple[Any, bool]:
        """Parse decimal integers, floats and 0x-prefixed hex integers."""
        if "_" in text:
            return None, False
        try:
            return int(text), True
        except ValueError:
            pass
        if _HEX_NUMBER.match(text):
            return int(text, 16), True
        try:
            number = float(text)
        except ValueError:
            return None, False
        if not math.isfinite(number):
            return None, False
        return number, True

    def _to_bool(self, text: str) -> Tuple[Any, bool]:
        lowered = text.lower()
        if lowered not in ("true", "false"):
            return None, False
        return lowered == "true", True

    def _to_array(self, text: str) -> Tuple[Any, bool]:
        if text == "":
            return [], True
        return [strip(item) for item in split(text, ",")], True


_default_coercer = TypeCoercer()


def coerce(tag: str | FieldType, value: Any) -> Tuple[Any, bool]:
    """Coerce a value with the shared :class:`TypeCoercer`."""
    return _default_coercer.coerce(tag, value)
