"""Tests for the error set builder."""

from entityknobs import add_error
from entityknobs.errors import prefix_errors


class TestAddError:
    """Test add_error."""

    def test_creates_set_lazily(self):
        """Test the first insertion creates the set."""
        assert add_error(None, "name", "name is required") == {"name": "name is required"}

    def test_does_not_mutate_input(self):
        """Test the input set is left untouched."""
        errors = {"a": "first"}
        updated = add_error(errors, "b", "second")
        assert errors == {"a": "first"}
        assert updated == {"a": "first", "b": "second"}

    def test_last_writer_wins(self):
        """Test a second message for a path replaces the first."""
        errors = add_error(None, "port", "port is not a number")
        errors = add_error(errors, "port", "port has an invalid value")
        assert errors == {"port": "port has an invalid value"}

    def test_order_independent(self):
        """Test insertion order does not change the resulting set."""
        first = add_error(add_error(None, "a", "x"), "b", "y")
        second = add_error(add_error(None, "b", "y"), "a", "x")
        assert first == second


class TestPrefixErrors:
    """Test prefix_errors."""

    def test_prefixes_paths(self):
        """Test child paths are joined with a dot."""
        assert prefix_errors({"url": "m1", "a.b": "m2"}, "upstream") == {
            "upstream.url": "m1",
            "upstream.a.b": "m2",
        }
