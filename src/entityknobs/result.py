"""Validation options and result types.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .exceptions import ValidationError

if TYPE_CHECKING:
    from .schema import FieldDescriptor


@dataclass
class ValidationOptions:
    """Options controlling one validation call.

    Attributes:
        partial_update: Only fields present in the record are validated for
            presence; defaults are not applied
        full_update: The record replaces an existing entity; defaults are not
            applied and immutable fields are rejected
        insert_value: Callback producing the value of fields flagged with
            ``insert_value`` (e.g. a generated id or creation time)
        context: Opaque handle passed to the schema's self-check (e.g. a DAO)
    """

    partial_update: bool = False
    full_update: bool = False
    insert_value: Callable[[FieldDescriptor], Any] | None = None
    context: Any = None

    @property
    def is_update(self) -> bool:
        return self.partial_update or self.full_update


@dataclass
class ValidationResult:
    """Outcome of validating a record.

    A failed result has exactly one of two shapes: ``errors`` holds every
    field-level problem, or ``fatal_error`` holds the message of a failed
    record-level self-check. The two are never set together.

    ``record`` is the same dict that was passed in, after defaulting and
    coercion were applied to it. The result unpacks as
    ``valid, errors, fatal_error``.
    """

    valid: bool
    errors: dict[str, str] | None = None
    fatal_error: str | None = None
    record: dict[str, Any] = field(default_factory=dict, repr=False)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    def __iter__(self) -> Iterator[Any]:
        return iter((self.valid, self.errors, self.fatal_error))

    @property
    def is_fatal(self) -> bool:
        return self.fatal_error is not None

    @classmethod
    def success(cls, record: dict[str, Any]) -> ValidationResult:
        return cls(valid=True, record=record)

    @classmethod
    def failure(cls, record: dict[str, Any], errors: dict[str, str]) -> ValidationResult:
        """Create a result carrying aggregated field errors."""
        return cls(valid=False, errors=errors, record=record)

    @classmethod
    def fatal(cls, record: dict[str, Any], message: str | None) -> ValidationResult:
        """Create a result for a failed self-check.

        The self-check may fail without a message; ``fatal_error`` is then a
        generic one so the failure shape stays distinguishable.
        """
        return cls(valid=False, fatal_error=message or "self-check failed", record=record)

    def raise_for_errors(self) -> dict[str, Any]:
        """Raise ValidationError if the result is not valid.

        Returns:
            The validated record

        Raises:
            ValidationError: With ``errors`` or ``fatal_error`` in its context
        """
        if self.valid:
            return self.record
        if self.fatal_error is not None:
            raise ValidationError(self.fatal_error, context={"fatal_error": self.fatal_error})
        errors = self.errors or {}
        summary = "; ".join(errors[path] for path in sorted(errors))
        raise ValidationError(f"Entity failed validation: {summary}", context={"errors": dict(errors)})
