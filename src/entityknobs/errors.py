"""Error set builder.

An error set maps a field path to a single message. Nested fields use
dot-joined paths (``address.city``). A later message for the same path
replaces the earlier one.
"""

from __future__ import annotations

from collections.abc import Mapping

ErrorSet = dict[str, str]


def add_error(errors: Mapping[str, str] | None, field: str, message: str) -> ErrorSet:
    """Return a new error set with ``message`` recorded for ``field``.

    Args:
        errors: Existing error set, or None if nothing was recorded yet
        field: Field path
        message: Human-readable message

    Returns:
        New error set; the input is never modified
    """
    updated = dict(errors) if errors else {}
    updated[field] = message
    return updated


def prefix_errors(errors: Mapping[str, str], prefix: str) -> ErrorSet:
    """Re-key an error set under ``prefix.``."""
    return {f"{prefix}.{path}": message for path, message in errors.items()}
