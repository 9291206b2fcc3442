"""Tests for ValidationResult and ValidationOptions."""

import pytest

from entityknobs import (
    ValidationError,
    ValidationOptions,
    ValidationResult,
)


class TestValidationResult:
    """Test result shapes."""

    def test_success(self):
        """Test a successful result."""
        record = {"a": 1}
        result = ValidationResult.success(record)
        assert bool(result) is True
        assert tuple(result) == (True, None, None)
        assert result.raise_for_errors() is record

    def test_failure(self):
        """Test an aggregated failure."""
        result = ValidationResult.failure({}, {"a": "a is required"})
        valid, errors, fatal_error = result
        assert valid is False
        assert errors == {"a": "a is required"}
        assert fatal_error is None
        assert not result.is_fatal

    def test_fatal(self):
        """Test a self-check failure."""
        result = ValidationResult.fatal({}, "conflict")
        assert tuple(result) == (False, None, "conflict")
        assert result.is_fatal

    def test_raise_for_errors_with_field_errors(self):
        """Test raising an aggregated failure."""
        result = ValidationResult.failure({}, {"b": "b is required", "a": "a is not a number"})
        with pytest.raises(ValidationError) as exc_info:
            result.raise_for_errors()
        assert str(exc_info.value) == "Entity failed validation: a is not a number; b is required"
        assert exc_info.value.context["errors"] == {"b": "b is required", "a": "a is not a number"}

    def test_raise_for_errors_with_fatal(self):
        """Test raising a self-check failure."""
        with pytest.raises(ValidationError) as exc_info:
            ValidationResult.fatal({}, "conflict").raise_for_errors()
        assert str(exc_info.value) == "conflict"
        assert exc_info.value.details == {"fatal_error": "conflict"}


class TestValidationOptions:
    """Test option flags."""

    def test_defaults(self):
        """Test default options describe an insert."""
        options = ValidationOptions()
        assert options.is_update is False
        assert options.insert_value is None
        assert options.context is None

    def test_update_modes(self):
        """Test either update mode counts as an update."""
        assert ValidationOptions(partial_update=True).is_update
        assert ValidationOptions(full_update=True).is_update

    def test_both_update_modes(self):
        """Test both update modes may be requested together."""
        options = ValidationOptions(partial_update=True, full_update=True)
        assert options.is_update
        assert options.partial_update and options.full_update
