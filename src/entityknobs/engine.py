"""Validate entities against a schema.

The record passed in is mutated: defaults are assigned, textual values are
trimmed and coerced to their declared type, and custom validators may merge
extra fields into it. The same dict is available on the result as
``result.record``; callers must not assume the input is unchanged.

Validation runs in phases:

1. Defaults and insert values (skipped for updates)
2. Per-field checks: immutability, type and coercion, enum, pattern,
   sub-schema, required, custom validator
3. Unknown fields (keys holding None count as absent)
4. Record-level self-check, only when no field errors were found

Field errors are aggregated; a failed self-check is returned on its own as
``fatal_error``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Tuple

from .errors import ErrorSet, add_error, prefix_errors
from .result import ValidationOptions, ValidationResult
from .schema import FieldDescriptor, Schema
from .types import is_number, coerce, is_recognized, tag_name
from .utils import pattern_match

logger = logging.getLogger(__name__)


def _is_present(record: Mapping[str, Any], name: str) -> bool:
    return record.get(name) is not None


def _apply_defaults(record: dict, schema: Schema, options: ValidationOptions) -> None:
    for name, descriptor in schema.fields.items():
        if not _is_present(record, name) and descriptor.default is not None:
            record[name] = descriptor.default.resolve(record)
            logger.debug(f"Applied default to '{name}' in schema '{schema.name}'")
        if descriptor.insert_value and callable(options.insert_value):
            record[name] = options.insert_value(descriptor)


def _resolve_sub_schema(
    record: dict, descriptor: FieldDescriptor
) -> Tuple[Schema | None, str | None]:
    sub_schema = descriptor.schema
    if isinstance(sub_schema, Schema) or sub_schema is None:
        return sub_schema, None
    resolved = sub_schema(record)
    if isinstance(resolved, tuple):
        resolved_schema, err = (tuple(resolved) + (None,))[:2]
        return resolved_schema, err
    return resolved, None


def _normalize_outcome(outcome: Any) -> Tuple[Any, Any, Any]:
    """Unpack a callback result into (ok, error, extra)."""
    if isinstance(outcome, tuple):
        padded = tuple(outcome) + (None, None, None)
        return padded[0], padded[1], padded[2]
    return outcome, None, None


def _enum_matches(allowed: Any, value: Any) -> bool:
    """Compare like-typed values; ints and floats compare by value."""
    if is_number(allowed) and is_number(value):
        return allowed == value
    return type(allowed) is type(value) and allowed == value


def _check_sub_schema(
    record: dict,
    name: str,
    descriptor: FieldDescriptor,
    options: ValidationOptions,
    errors: ErrorSet | None,
) -> ErrorSet | None:
    sub_schema, err = _resolve_sub_schema(record, descriptor)
    if err:
        return add_error(errors, name, err)
    if sub_schema is None:
        return errors

    if not _is_present(record, name):
        if any(sub.default is not None for sub in sub_schema.fields.values()):
            # Seed the composite so the nested defaults get applied
            record[name] = {}
        else:
            for sub_name, sub in sub_schema.fields.items():
                if sub.required:
                    errors = add_error(errors, name, f"{name}.{sub_name} is required")

    value = record.get(name)
    if isinstance(value, dict):
        logger.debug(f"Validating '{name}' against sub-schema '{sub_schema.name}'")
        sub_result = validate_entity(value, sub_schema, options)
        if sub_result.errors:
            for path, message in prefix_errors(sub_result.errors, name).items():
                errors = add_error(errors, path, message)
        elif sub_result.fatal_error is not None:
            errors = add_error(errors, name, sub_result.fatal_error)
    return errors


def _check_field(
    record: dict,
    name: str,
    descriptor: FieldDescriptor,
    options: ValidationOptions,
    errors: ErrorSet | None,
) -> ErrorSet | None:
    # Immutable
    if options.is_update and _is_present(record, name) and descriptor.immutable and not descriptor.required:
        errors = add_error(errors, name, f"{name} cannot be updated")

    # Type, with coercion of textual values
    if _is_present(record, name) and descriptor.type is not None:
        value, is_valid_type = coerce(descriptor.type, record[name])
        record[name] = value
        if not is_valid_type and is_recognized(descriptor.type):
            errors = add_error(errors, name, f"{name} is not a {tag_name(descriptor.type)}")

    # Enum
    if _is_present(record, name) and descriptor.enum is not None:
        value = record[name]
        if not any(_enum_matches(allowed, value) for allowed in descriptor.enum):
            allowed_str = '", "'.join(str(allowed) for allowed in descriptor.enum)
            errors = add_error(
                errors, name, f'"{value}" is not allowed. Allowed values are: "{allowed_str}"'
            )

    # Pattern
    if _is_present(record, name) and descriptor.pattern is not None:
        if not pattern_match(record[name], descriptor.pattern):
            errors = add_error(errors, name, f"{name} has an invalid value")

    # Sub-schema
    if descriptor.schema is not None:
        errors = _check_sub_schema(record, name, descriptor, options, errors)

    if options.partial_update and not _is_present(record, name):
        return errors

    # Required, after defaults and coercion
    value = record.get(name)
    if descriptor.required and (value is None or value == ""):
        errors = add_error(errors, name, f"{name} is required")

    # Custom validator, only when the field has no error yet
    if callable(descriptor.func) and (errors is None or name not in errors):
        ok, err, extra = _normalize_outcome(descriptor.func(record.get(name), record, name))
        if extra:
            record.update(extra)
        if ok is False and err:
            errors = add_error(errors, name, err)

    return errors


def validate_entity(
    record: dict,
    schema: Schema,
    options: ValidationOptions | None = None,
) -> ValidationResult:
    """Validate a record against a schema, mutating it in place.

    Args:
        record: Entity to validate. Defaults and coerced values are written
            back into it.
        schema: Schema against which to validate the entity
        options: Update modes, insert callback and self-check context

    Returns:
        ValidationResult; unpacks as ``valid, errors, fatal_error``
    """
    if options is None:
        options = ValidationOptions()
    errors: ErrorSet | None = None

    if not options.is_update:
        _apply_defaults(record, schema, options)

    for name, descriptor in schema.fields.items():
        errors = _check_field(record, name, descriptor, options, errors)

    # Unknown fields
    for key in list(record.keys()):
        if key not in schema.fields and _is_present(record, key):
            errors = add_error(errors, key, f"{key} is an unknown field")

    if errors:
        logger.debug(f"Schema '{schema.name}' rejected entity with {len(errors)} error(s)")
        return ValidationResult.failure(record, errors)

    if callable(schema.self_check):
        ok, err, _ = _normalize_outcome(
            schema.self_check(schema, record, options.context, options.is_update)
        )
        if ok is False:
            logger.debug(f"Self-check of schema '{schema.name}' failed: {err}")
            return ValidationResult.fatal(record, err)

    return ValidationResult.success(record)


def validate_many(
    records: Iterable[dict],
    schema: Schema,
    options: ValidationOptions | None = None,
    stop_on_error: bool = False,
) -> list[ValidationResult]:
    """Validate multiple records with the same schema and options.

    Args:
        records: Records to validate, each mutated in place
        schema: Schema to validate against
        options: Options shared by every call
        stop_on_error: If True, stop after the first invalid record

    Returns:
        List of ValidationResults, in input order
    """
    results = []
    for record in records:
        result = validate_entity(record, schema, options)
        results.append(result)
        if not result.valid and stop_on_error:
            break
    return results
