"""
Autopilot - detached launcher for a long-running worker loop.

Opens the worker script in a new terminal window and, next to it, a live
progress dashboard that follows the worker's planning files.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from autopilot.core.config.models import AutopilotConfig
from autopilot.core.launch.models import LaunchFailure, LaunchSuccess, Platform

__all__ = ["AutopilotConfig", "LaunchFailure", "LaunchSuccess", "Platform", "__version__"]
