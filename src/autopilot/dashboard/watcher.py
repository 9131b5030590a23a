"""
Planning file polling for the autopilot dashboard.

Watches STATE.md and ralph.log and rebuilds the progress snapshot only
when one of them changes on disk.
"""

from collections.abc import Callable
from pathlib import Path

from autopilot.core.config.models import DashboardConfig
from autopilot.dashboard.models import PlanningPaths, ProgressSnapshot
from autopilot.dashboard.parser import parse_log, parse_state

# (mtime, size) of a file, or None when it doesn't exist
_Stamp = tuple[float, int] | None


def _stamp(path: Path) -> _Stamp:
    try:
        stat = path.stat()
    except OSError:
        return None
    return (stat.st_mtime, stat.st_size)


class ProgressWatcher:
    """
    Poll the planning files and detect changes.

    Example:
        >>> watcher = ProgressWatcher(PlanningPaths.from_config(Path(".")))
        >>> snapshot = watcher.poll()
        >>> snapshot.state is None  # no STATE.md yet
        True
    """

    def __init__(
        self,
        paths: PlanningPaths,
        on_change: Callable[[ProgressSnapshot], None] | None = None,
        config: DashboardConfig | None = None,
    ):
        """
        Initialize the progress watcher.

        Args:
            paths: Locations of STATE.md, ralph.log and the pause marker
            on_change: Callback invoked when the snapshot changes
            config: Dashboard settings (refresh intervals)
        """
        self.paths = paths
        self.on_change = on_change
        self.config = config or DashboardConfig()

        self._stamps: tuple[_Stamp, _Stamp] | None = None
        self._snapshot: ProgressSnapshot | None = None

    def poll(self) -> ProgressSnapshot:
        """
        Return the current snapshot, re-reading files only if they changed.

        The same snapshot object is returned for as long as neither file
        changes, so callers can detect updates with an identity check.
        """
        stamps = (_stamp(self.paths.state), _stamp(self.paths.log))
        if self._snapshot is not None and stamps == self._stamps:
            return self._snapshot

        snapshot = self._read_snapshot()
        self._stamps = stamps
        if snapshot != self._snapshot:
            self._snapshot = snapshot
            if self.on_change:
                self.on_change(snapshot)
        return self._snapshot

    def _read_snapshot(self) -> ProgressSnapshot:
        snapshot = ProgressSnapshot()

        if self.paths.state.exists():
            try:
                snapshot.state = parse_state(self.paths.state.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError) as e:
                snapshot.state_error = str(e)

        if self.paths.log.exists():
            try:
                snapshot.entries = parse_log(self.paths.log.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError) as e:
                snapshot.log_error = str(e)

        return snapshot

    def refresh_interval(self) -> float:
        """Shorter interval while an iteration is running, longer when idle."""
        snapshot = self._snapshot or self.poll()
        if snapshot.running_entry is not None:
            return self.config.refresh_running
        return self.config.refresh_idle


__all__ = ["ProgressWatcher"]
