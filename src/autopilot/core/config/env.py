"""
.env loading for the launcher and the progress dashboard.

Nothing in autopilot reads its own settings from the environment (those
live in config.json / .autopilot.json). The .env layers exist for the
variables the spawned windows and the dashboard inherit:

    NO_COLOR     rich drops colour from the dashboard and launch messages
    DISPLAY      X display the Linux terminals open on
    WT_SESSION   set inside Windows Terminal; passed through untouched

Layers, lowest first: ``$XDG_CONFIG_HOME/autopilot/.env`` then the
project's ``.env``. A later layer overrides an earlier one, and a variable
already exported by the shell is never replaced.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from dotenv import dotenv_values

from .loader import get_xdg_config_home

logger = logging.getLogger(__name__)


def get_user_env_path() -> Path:
    """Path to ~/.config/autopilot/.env (or XDG equivalent)."""
    return get_xdg_config_home() / "autopilot" / ".env"


def read_env_file(path: Path) -> dict[str, str]:
    """
    Parse one .env file.

    Keys declared without a value (``FOO`` on its own line) are skipped, as
    is a file that doesn't exist.
    """
    if not path.is_file():
        return {}
    return {key: value for key, value in dotenv_values(path).items() if value is not None}


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> dict[str, str]:
    """
    Apply user and project .env files to ``os.environ``.

    Args:
        project_dir: Directory holding the project .env (defaults to cwd)
        user_env_paths: User-level files; defaults to ``get_user_env_path()``
        project_env_paths: Project-level files; defaults to ``<project>/.env``

    Returns:
        The variables that were set, after layering
    """
    if project_dir is None:
        project_dir = Path.cwd()
    if user_env_paths is None:
        user_env_paths = [get_user_env_path()]
    if project_env_paths is None:
        project_env_paths = [project_dir / ".env"]

    merged: dict[str, str] = {}
    for path in [*user_env_paths, *project_env_paths]:
        merged.update(read_env_file(Path(path)))

    applied = {key: value for key, value in merged.items() if key not in os.environ}
    os.environ.update(applied)
    if applied:
        logger.debug("Loaded from .env: %s", ", ".join(sorted(applied)))
    return applied


__all__ = ["get_user_env_path", "load_layered_env", "read_env_file"]
