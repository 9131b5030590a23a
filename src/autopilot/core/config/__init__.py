"""
Configuration models and loading.

Pydantic models for autopilot configuration with multi-layer merging:
defaults < user < project.
"""

from .env import load_layered_env
from .loader import (
    ConfigError,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import AutopilotConfig, DashboardConfig, WorkerConfig

__all__ = [
    # Models
    "AutopilotConfig",
    "DashboardConfig",
    "WorkerConfig",
    # Loader functions
    "ConfigError",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "load_layered_env",
]
