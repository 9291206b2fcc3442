"""Exception hierarchy for the entityknobs package.

Field-level problems found while validating a record are never raised; they
are collected into the error set of a ``ValidationResult``. The exceptions
here cover the cases where the caller asks for a raise, where a schema is
authored incorrectly, or where settings cannot be loaded.

Example:
    ```python
    from entityknobs import validate_entity
    from entityknobs.exceptions import ValidationError

    try:
        validate_entity(record, schema).raise_for_errors()
    except ValidationError as e:
        logger.error(f"Rejected: {e}")
        logger.error(f"Field errors: {e.context.get('errors')}")
    ```
"""

from typing import Any, Dict


class EntityknobsError(Exception):
    """Base exception for the entityknobs package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (field names, values, etc.)
        details: Alternative to context (both are supported)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class ValidationError(EntityknobsError):
    """Raised when a caller asks for a failed validation result to be raised.

    The context carries either the aggregated ``errors`` mapping or the
    ``fatal_error`` message of the record-level self-check.

    Example:
        ```python
        raise ValidationError(
            "Entity failed validation",
            context={"errors": {"name": "name is required"}}
        )
        ```
    """

    pass


class SchemaDefinitionError(EntityknobsError):
    """Raised when a schema or field descriptor is authored incorrectly.

    Common scenarios include:
    - A pattern that does not compile
    - A field descriptor built from an unknown attribute
    """

    def __init__(self, message: str, field_name: str | None = None):
        self.field_name = field_name
        if field_name:
            message = f"Field '{field_name}': {message}"
        super().__init__(message, context={"field_name": field_name} if field_name else None)


class ConfigurationError(EntityknobsError):
    """Raised when validation settings are invalid or cannot be loaded.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown setting",
            context={"key": "partial", "allowed": ["partial_update", "full_update"]}
        )
        ```
    """

    pass


__all__ = [
    "EntityknobsError",
    "ValidationError",
    "SchemaDefinitionError",
    "ConfigurationError",
]
