"""Schema definition with fluent API for entity validation.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, fields as dataclass_fields
from re import Pattern as RegexPattern
from typing import TYPE_CHECKING, Any, Tuple, Union

from .exceptions import SchemaDefinitionError
from .types import FieldType, is_recognized, tag_name
from .utils import compile_pattern

if TYPE_CHECKING:
    from .result import ValidationOptions, ValidationResult

logger = logging.getLogger(__name__)

# (ok, error message, extra fields to merge into the record)
FieldValidator = Callable[[Any, dict, str], Any]
SelfCheck = Callable[["Schema", dict, Any, bool], Any]
SchemaResolver = Callable[[dict], Tuple[Union["Schema", None], Union[str, None]]]


@dataclass(frozen=True)
class LiteralDefault:
    """Default assigned as-is."""

    value: Any

    def resolve(self, record: dict) -> Any:
        return self.value


@dataclass(frozen=True)
class GeneratorDefault:
    """Default computed from the record being validated."""

    generator: Callable[[dict], Any]

    def resolve(self, record: dict) -> Any:
        return self.generator(record)


Default = Union[LiteralDefault, GeneratorDefault]


def as_default(value: Any) -> Default | None:
    """Wrap a plain value or callable as a Default.

    None means "no default". Callables become generators, anything else
    becomes a literal.
    """
    if value is None or isinstance(value, (LiteralDefault, GeneratorDefault)):
        return value
    if callable(value):
        return GeneratorDefault(value)
    return LiteralDefault(value)


@dataclass
class FieldDescriptor:
    """Expected shape and rules for one field of a record.

    Attributes:
        type: Recognized tag (see FieldType) or a custom tag
        default: Literal or generator default applied on insert
        required: Field must be present and non-empty
        immutable: Field cannot be set during an update
        enum: Allowed values (checked after coercion)
        pattern: Regex the value must contain a match for
        schema: Sub-schema, or a resolver returning (schema, error)
        insert_value: Value is produced by the insert callback of the options
        func: Custom validator called as func(value, record, field_name)
    """

    type: str | FieldType | None = None
    default: Any = None
    required: bool = False
    immutable: bool = False
    enum: Sequence[Any] | None = None
    pattern: str | RegexPattern | None = None
    schema: Schema | SchemaResolver | None = None
    insert_value: bool = False
    func: FieldValidator | None = None

    def __post_init__(self) -> None:
        if isinstance(self.type, FieldType):
            self.type = self.type.value
        self.default = as_default(self.default)
        if self.enum is not None:
            self.enum = tuple(self.enum)
        if self.pattern is not None:
            try:
                self.pattern = compile_pattern(self.pattern)
            except re.error as e:
                raise SchemaDefinitionError(f"invalid pattern {self.pattern!r}: {e}") from e
            if self.type is not None and self.type not in ("string", "id", "url", "number", "timestamp"):
                logger.warning(f"Pattern set on a field of type '{self.type}'; only text and numbers can match")

    @property
    def has_recognized_type(self) -> bool:
        return is_recognized(self.type)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], field_name: str | None = None) -> FieldDescriptor:
        """Build a descriptor from a mapping of attribute names.

        Raises:
            SchemaDefinitionError: If the mapping contains unknown attributes
        """
        known = {f.name for f in dataclass_fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise SchemaDefinitionError(
                f"unknown descriptor attributes: {', '.join(sorted(unknown))}", field_name
            )
        return cls(**data)


class Schema:
    """Schema definition with fluent API for validation.

    A schema is authored once and treated as read-only configuration. Field
    order carries no meaning.

    Example:
        ```python
        schema = (
            Schema("api")
            .field("id", "id", insert_value=True)
            .field("name", "string", required=True)
            .field("retries", "number", default=5)
            .field("methods", "array")
            .field("protocol", "string", enum=["http", "https"])
        )
        ```
    """

    def __init__(
        self,
        name: str = "unnamed",
        fields: Mapping[str, FieldDescriptor | Mapping[str, Any]] | None = None,
        self_check: SelfCheck | None = None,
    ):
        """Initialize schema.

        Args:
            name: Schema name for identification
            fields: Field descriptors, or mappings of descriptor attributes
            self_check: Record-level check called as
                self_check(schema, record, context, is_update)
        """
        self.name = name
        self.self_check = self_check
        self.fields: dict[str, FieldDescriptor] = {}
        for field_name, descriptor in (fields or {}).items():
            self.add_field(field_name, descriptor)

    def add_field(self, name: str, descriptor: FieldDescriptor | Mapping[str, Any]) -> Schema:
        """Add a prepared descriptor (fluent API)."""
        if not isinstance(descriptor, FieldDescriptor):
            descriptor = FieldDescriptor.from_mapping(descriptor, name)
        self.fields[name] = descriptor
        return self

    def field(
        self,
        name: str,
        type: str | FieldType | None = None,
        *,
        default: Any = None,
        required: bool = False,
        immutable: bool = False,
        enum: Sequence[Any] | None = None,
        pattern: str | RegexPattern | None = None,
        schema: Schema | SchemaResolver | None = None,
        insert_value: bool = False,
        func: FieldValidator | None = None,
    ) -> Schema:
        """Add a field definition (fluent API).

        Returns:
            Self for chaining
        """
        return self.add_field(name, FieldDescriptor(
            type=type,
            default=default,
            required=required,
            immutable=immutable,
            enum=enum,
            pattern=pattern,
            schema=schema,
            insert_value=insert_value,
            func=func,
        ))

    def with_self_check(self, self_check: SelfCheck) -> Schema:
        """Set the record-level check (fluent API)."""
        self.self_check = self_check
        return self

    def validate(self, record: dict, options: ValidationOptions | None = None) -> ValidationResult:
        """Validate a record against this schema.

        See :func:`entityknobs.engine.validate_entity`; the record is
        mutated in place.
        """
        from .engine import validate_entity

        return validate_entity(record, self, options)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, fields={sorted(self.fields)})"

    def to_dict(self) -> dict[str, Any]:
        """Describe the schema's declarative parts as a dictionary.

        Callables (generators, resolvers, validators, self-check) are only
        flagged, not serialized.
        """
        described = {}
        for name, descriptor in self.fields.items():
            entry: dict[str, Any] = {
                "type": tag_name(descriptor.type) if descriptor.type else None,
                "required": descriptor.required,
                "immutable": descriptor.immutable,
            }
            if isinstance(descriptor.default, LiteralDefault):
                entry["default"] = descriptor.default.value
            elif isinstance(descriptor.default, GeneratorDefault):
                entry["default"] = "<generator>"
            if descriptor.enum is not None:
                entry["enum"] = list(descriptor.enum)
            if descriptor.pattern is not None:
                entry["pattern"] = descriptor.pattern.pattern  # type: ignore[union-attr]
            if isinstance(descriptor.schema, Schema):
                entry["schema"] = descriptor.schema.to_dict()
            elif descriptor.schema is not None:
                entry["schema"] = "<resolver>"
            if descriptor.insert_value:
                entry["insert_value"] = True
            if descriptor.func is not None:
                entry["func"] = True
            described[name] = entry
        return {
            "name": self.name,
            "self_check": self.self_check is not None,
            "fields": described,
        }
