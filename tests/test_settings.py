"""Tests for loading validation settings."""

import json

import pytest
import yaml

from entityknobs import ConfigurationError, load_options
from entityknobs.settings import get_environment_overrides, load_settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove settings that may leak in from the environment."""
    for name in ("ENTITYKNOBS_PARTIAL_UPDATE", "ENTITYKNOBS_FULL_UPDATE"):
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    """Test settings sources."""

    def test_empty(self):
        """Test no source gives no settings."""
        assert load_settings() == {}

    def test_mapping(self):
        """Test a mapping source."""
        assert load_settings({"partial_update": True}) == {"partial_update": True}

    def test_yaml_file(self, tmp_path):
        """Test a YAML settings file."""
        path = tmp_path / "validation.yaml"
        path.write_text(yaml.safe_dump({"full_update": True}))
        assert load_settings(path) == {"full_update": True}

    def test_json_file(self, tmp_path):
        """Test a JSON settings file."""
        path = tmp_path / "validation.json"
        path.write_text(json.dumps({"partial_update": False}))
        assert load_settings(str(path)) == {"partial_update": False}

    def test_empty_yaml_file(self, tmp_path):
        """Test an empty file gives no settings."""
        path = tmp_path / "validation.yml"
        path.write_text("")
        assert load_settings(path) == {}

    def test_missing_file(self, tmp_path):
        """Test a missing file is a configuration error."""
        with pytest.raises(ConfigurationError):
            load_settings(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path):
        """Test unknown file formats are rejected."""
        path = tmp_path / "validation.toml"
        path.write_text("partial_update = true")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_non_mapping_file(self, tmp_path):
        """Test files must hold a mapping."""
        path = tmp_path / "validation.yaml"
        path.write_text("- partial_update\n")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_unknown_key(self):
        """Test unknown settings are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({"partial": True})
        assert exc_info.value.context["unknown"] == ["partial"]

    def test_non_boolean_value(self):
        """Test settings must be booleans."""
        with pytest.raises(ConfigurationError):
            load_settings({"partial_update": "sometimes"})


class TestEnvironmentOverrides:
    """Test ENTITYKNOBS_ environment variables."""

    def test_overrides(self, monkeypatch):
        """Test environment values are parsed and applied."""
        monkeypatch.setenv("ENTITYKNOBS_PARTIAL_UPDATE", "yes")
        monkeypatch.setenv("ENTITYKNOBS_UNRELATED", "1")
        assert get_environment_overrides() == {"partial_update": True}
        assert load_settings({"partial_update": False}) == {"partial_update": True}

    def test_custom_prefix(self, monkeypatch):
        """Test a custom prefix."""
        monkeypatch.setenv("MYAPP_FULL_UPDATE", "true")
        assert load_settings(prefix="MYAPP_") == {"full_update": True}


class TestLoadOptions:
    """Test building ValidationOptions."""

    def test_callbacks_attached(self):
        """Test runtime callbacks are passed through."""
        dao = object()

        def insert_value(descriptor):
            return "id"

        options = load_options({"full_update": True}, insert_value=insert_value, context=dao)
        assert options.full_update is True
        assert options.partial_update is False
        assert options.insert_value is insert_value
        assert options.context is dao

    def test_modes_from_file_and_environment(self, monkeypatch):
        """Test modes from a file and the environment are combined."""
        monkeypatch.setenv("ENTITYKNOBS_PARTIAL_UPDATE", "true")
        options = load_options({"full_update": True})
        assert options.partial_update is True
        assert options.full_update is True
