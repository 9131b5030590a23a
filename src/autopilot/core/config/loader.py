"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config

No environment variable overrides the launcher; the environment only
matters for which terminals are on PATH.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import AutopilotConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Merged configuration failed validation."""


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/autopilot/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "autopilot" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Project directory (defaults to current directory)

    Returns:
        Path to .autopilot.json in the project root
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".autopilot.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`.
    Nested dicts are merged, not replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 20}})
        {'a': 1, 'b': {'x': 10, 'y': 20}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON object, or None if missing, unreadable or not an object
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config at %s: top level is not an object", path)
            return None
    except (json.JSONDecodeError, OSError) as e:
        # Config should be resilient: warn and fall back to the lower layers
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def get_default_config() -> dict[str, Any]:
    """Default configuration as a plain dictionary."""
    return AutopilotConfig().model_dump()


def load_config(project_dir: Path | None = None) -> AutopilotConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Project config (.autopilot.json)
        2. User config (~/.config/autopilot/config.json)
        3. Defaults

    Args:
        project_dir: Project directory to load .autopilot.json from

    Returns:
        Validated AutopilotConfig instance

    Raises:
        ConfigError: If the merged config fails validation
    """
    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    try:
        return AutopilotConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid autopilot configuration: {e}") from e
