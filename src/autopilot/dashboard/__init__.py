"""
Live progress dashboard for autopilot.

Renders the worker's STATE.md and ralph.log in a terminal and toggles the
pause marker. ``DASHBOARD_SCRIPT`` is the file the launcher runs through the
Python interpreter in the second window.
"""

from pathlib import Path

from autopilot.dashboard.models import (
    IterationEntry,
    IterationStatus,
    PlanningPaths,
    PlanningState,
    ProgressSnapshot,
)
from autopilot.dashboard.pause import PauseFlag
from autopilot.dashboard.renderer import ProgressRenderer
from autopilot.dashboard.watch import watch_progress
from autopilot.dashboard.watcher import ProgressWatcher

DASHBOARD_SCRIPT = Path(__file__).resolve().parent.parent / "bin" / "progress-watcher.py"

__all__ = [
    "DASHBOARD_SCRIPT",
    "IterationEntry",
    "IterationStatus",
    "PauseFlag",
    "PlanningPaths",
    "PlanningState",
    "ProgressRenderer",
    "ProgressSnapshot",
    "ProgressWatcher",
    "watch_progress",
]
