"""Load validation options from configuration files and the environment.

Settings files hold the declarative part of :class:`ValidationOptions`
(the update modes). Callables such as the insert-value callback and the
self-check context cannot live in a file and are passed in directly.

Environment variable format:
    ENTITYKNOBS_<SETTING>

Examples:
    - ENTITYKNOBS_PARTIAL_UPDATE=true
    - ENTITYKNOBS_FULL_UPDATE=no
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError
from .result import ValidationOptions

logger = logging.getLogger(__name__)

ENV_PREFIX = "ENTITYKNOBS_"
SETTING_KEYS = ("partial_update", "full_update")


def _parse_value(value: str) -> Any:
    """Parse an environment variable value to appropriate type."""
    if value.lower() in ["true", "yes", "1"]:
        return True
    elif value.lower() in ["false", "no", "0"]:
        return False
    return value


def _load_file(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path).resolve()
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}", context={"path": str(path)})

    suffix = path.suffix.lower()
    with open(path) as f:
        if suffix in [".yaml", ".yml"]:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ConfigurationError(f"Unsupported file format: {suffix}", context={"path": str(path)})

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Settings file must contain a mapping: {path}")
    return dict(data)


def get_environment_overrides(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    """Collect settings from environment variables with the given prefix.

    Variables whose suffix is not a known setting are ignored.
    """
    overrides = {}
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        setting = key[len(prefix):].lower()
        if setting in SETTING_KEYS:
            overrides[setting] = _parse_value(value)
        else:
            logger.debug(f"Ignoring unknown environment setting {key}")
    return overrides


def load_settings(
    source: Union[str, Path, Mapping[str, Any], None] = None,
    prefix: str = ENV_PREFIX,
) -> Dict[str, Any]:
    """Load settings from a file or mapping, then apply environment overrides.

    Args:
        source: Path to a YAML/JSON file, a mapping, or None for environment only
        prefix: Environment variable prefix

    Returns:
        Settings dictionary restricted to known keys

    Raises:
        ConfigurationError: If the source is unreadable or contains unknown keys
    """
    if source is None:
        settings: Dict[str, Any] = {}
    elif isinstance(source, Mapping):
        settings = dict(source)
    else:
        settings = _load_file(source)

    unknown = set(settings) - set(SETTING_KEYS)
    if unknown:
        raise ConfigurationError(
            f"Unknown settings: {', '.join(sorted(unknown))}",
            context={"unknown": sorted(unknown), "allowed": list(SETTING_KEYS)},
        )

    settings.update(get_environment_overrides(prefix))
    for key, value in settings.items():
        if not isinstance(value, bool):
            raise ConfigurationError(
                f"Setting '{key}' must be a boolean, got {value!r}",
                context={"key": key, "value": value},
            )
    return settings


def load_options(
    source: Union[str, Path, Mapping[str, Any], None] = None,
    *,
    prefix: str = ENV_PREFIX,
    insert_value: Callable[[Any], Any] | None = None,
    context: Any = None,
) -> ValidationOptions:
    """Build ValidationOptions from settings plus runtime callbacks.

    Args:
        source: Path to a YAML/JSON file, a mapping, or None
        prefix: Environment variable prefix
        insert_value: Insert-value callback for the options
        context: Opaque handle passed to self-checks

    Returns:
        ValidationOptions instance
    """
    settings = load_settings(source, prefix)
    logger.debug(f"Loaded validation settings: {settings}")
    return ValidationOptions(insert_value=insert_value, context=context, **settings)
