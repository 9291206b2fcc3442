"""Pytest configuration for entityknobs tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from entityknobs import Schema  # noqa: E402


@pytest.fixture
def upstream_schema():
    """Nested schema with defaults on the inner composite."""
    return (
        Schema("upstream")
        .field("url", "url", required=True)
        .field("retries", "number", default=5)
        .field("timeout", "timestamp", default=60000)
    )


@pytest.fixture
def api_schema(upstream_schema):
    """Schema exercising most descriptor attributes."""
    return (
        Schema("api")
        .field("id", "id", immutable=True)
        .field("name", "string", required=True)
        .field("created_at", "timestamp", immutable=True)
        .field("methods", "array")
        .field("strip_path", "boolean", default=False)
        .field("protocol", "string", enum=["http", "https"], default="http")
        .field("host", "string", pattern=r"^[a-z0-9.-]+$")
        .field("upstream", "table", schema=upstream_schema)
    )
