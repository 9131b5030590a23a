"""
Live progress loop for the autopilot dashboard.

Redraws when a planning file changes, when the pause marker flips, when a
key is pressed, and otherwise every 2s while an iteration is running or
every 10s while idle. Reads files only; no API calls are ever made.
"""

import logging
import time
from datetime import datetime
from pathlib import Path

from rich.console import Console, RenderableType
from rich.live import Live

from autopilot.core.config.models import DashboardConfig
from autopilot.dashboard.keys import KeyReader
from autopilot.dashboard.models import PlanningPaths, ProgressSnapshot
from autopilot.dashboard.pause import PauseFlag
from autopilot.dashboard.renderer import ProgressRenderer
from autopilot.dashboard.watcher import ProgressWatcher

logger = logging.getLogger(__name__)

QUIT_KEYS = ("q", "\x03")
KEY_POLL_SECONDS = 0.25


def _apply_key(key: str, pause: PauseFlag) -> str | None:
    """Handle pause/resume keys; returns an error notice on failure."""
    try:
        if key == "p":
            pause.pause()
        elif key == "r":
            pause.resume()
    except OSError as e:
        action = "creating" if key == "p" else "deleting"
        logger.warning("Error %s pause file %s: %s", action, pause.path, e)
        return f"Error {action} pause file: {e}"
    return None


def watch_progress(
    project_root: Path,
    config: DashboardConfig | None = None,
    *,
    console: Console | None = None,
    key_reader: KeyReader | None = None,
    max_frames: int | None = None,
) -> int:
    """
    Run the live dashboard until the user quits.

    Args:
        project_root: Project whose planning directory is watched
        config: Dashboard settings
        console: Rich console to draw on
        key_reader: Key source (defaults to stdin)
        max_frames: Stop after this many loop ticks (used by tests)

    Returns:
        Process exit code (0)
    """
    config = config or DashboardConfig()
    console = console or Console()
    paths = PlanningPaths.from_config(project_root, config)
    watcher = ProgressWatcher(paths, config=config)
    pause = PauseFlag(paths.pause)
    renderer = ProgressRenderer(recent=config.recent_iterations)
    keys = key_reader or KeyReader()

    snapshot: ProgressSnapshot = watcher.poll()
    paused = pause.is_paused
    notice: str | None = None

    def frame() -> RenderableType:
        return renderer.render(snapshot, paused=paused, now=datetime.now(), notice=notice)

    ticks = 0
    try:
        with keys, Live(frame(), console=console, auto_refresh=False) as live:
            next_refresh = time.monotonic() + watcher.refresh_interval()
            while max_frames is None or ticks < max_frames:
                ticks += 1
                key = keys.read_key(KEY_POLL_SECONDS)
                if key in QUIT_KEYS:
                    break

                redraw = False
                if key in ("p", "r"):
                    notice = _apply_key(key, pause)
                    redraw = True

                latest = watcher.poll()
                if latest is not snapshot:
                    snapshot = latest
                    redraw = True

                if pause.is_paused != paused:
                    paused = pause.is_paused
                    redraw = True

                if redraw or time.monotonic() >= next_refresh:
                    live.update(frame(), refresh=True)
                    next_refresh = time.monotonic() + watcher.refresh_interval()
    except KeyboardInterrupt:
        pass

    console.print("\n[yellow]Stopping progress watcher...[/yellow]")
    return 0


__all__ = ["watch_progress"]
