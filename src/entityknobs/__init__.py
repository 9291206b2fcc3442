"""Schema-driven entity validation and coercion.

Validate a record (a plain dict) against a declarative schema: defaults are
applied, textual values are coerced to their declared types, nested
sub-schemas are validated recursively, and every problem is reported at once.

Example:
    ```python
    from entityknobs import Schema, validate_entity

    schema = (
        Schema("consumer")
        .field("username", "string", required=True)
        .field("retries", "number", default=5)
    )

    record = {"username": " alice ", "retries": "3"}
    valid, errors, fatal_error = validate_entity(record, schema)
    # record == {"username": "alice", "retries": 3}
    ```
"""

from entityknobs.engine import validate_entity, validate_many
from entityknobs.errors import ErrorSet, add_error
from entityknobs.exceptions import (
    ConfigurationError,
    EntityknobsError,
    SchemaDefinitionError,
    ValidationError,
)
from entityknobs.identifiers import is_valid_uuid
from entityknobs.result import ValidationOptions, ValidationResult
from entityknobs.schema import (
    Default,
    FieldDescriptor,
    GeneratorDefault,
    LiteralDefault,
    Schema,
)
from entityknobs.settings import load_options
from entityknobs.types import FieldType, TypeCoercer, coerce, is_valid_type

__version__ = "0.1.0"

__all__ = [
    # Engine
    "validate_entity",
    "validate_many",
    # Schema
    "Schema",
    "FieldDescriptor",
    "Default",
    "LiteralDefault",
    "GeneratorDefault",
    # Types
    "FieldType",
    "TypeCoercer",
    "coerce",
    "is_valid_type",
    # Results
    "ValidationResult",
    "ValidationOptions",
    "ErrorSet",
    "add_error",
    # Identifiers
    "is_valid_uuid",
    # Settings
    "load_options",
    # Exceptions
    "EntityknobsError",
    "ValidationError",
    "SchemaDefinitionError",
    "ConfigurationError",
]
