"""
Progress models for the autopilot dashboard.

These models represent what the worker writes to its planning directory:
the current position in STATE.md and one block per iteration in ralph.log.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from autopilot.core.config.models import DashboardConfig


class IterationStatus(str, Enum):
    """Known iteration outcomes written by the worker."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    RETRY = "RETRY"
    RUNNING = "RUNNING"
    SKIPPED = "SKIPPED"


class PlanningState(BaseModel):
    """Current position parsed from STATE.md."""

    phase: str = Field(default="", description="Current phase")
    plan: str = Field(default="", description="Current plan")
    status: str = Field(default="", description="Free-form status line")
    progress: str = Field(default="", description="Progress bar or summary line")
    last_activity: str = Field(default="", description="Last activity line")


class IterationEntry(BaseModel):
    """
    One iteration block from ralph.log.

    Field values are kept as written; ``known_status`` maps the status onto
    IterationStatus when it is one of the recognised values.
    """

    iteration: str = Field(..., description="Iteration number")
    timestamp: str = Field(default="", description="When the iteration started")
    task: str = Field(default="", description="Task identifier")
    status: str = Field(default="", description="Iteration status as written")
    duration: str = Field(default="", description="Duration text, '-' when unknown")
    summary: str = Field(default="", description="One-line summary")

    @property
    def known_status(self) -> IterationStatus | None:
        try:
            return IterationStatus(self.status.strip().upper())
        except ValueError:
            return None

    @property
    def is_running(self) -> bool:
        return self.known_status == IterationStatus.RUNNING

    @property
    def started_at(self) -> datetime | None:
        """Timestamp parsed as ISO-8601, or None when it can't be read."""
        value = self.timestamp.strip()
        if not value:
            return None
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None

    def elapsed_seconds(self, now: datetime | None = None) -> int | None:
        """Whole seconds since the iteration started, or None if unknown."""
        started = self.started_at
        if started is None:
            return None
        if now is None:
            now = datetime.now(started.tzinfo) if started.tzinfo else datetime.now()
        # Compare like with like; naive values are taken as local time
        if started.tzinfo is None and now.tzinfo is not None:
            started = started.astimezone()
        elif started.tzinfo is not None and now.tzinfo is None:
            now = now.astimezone()
        return max(0, int((now - started).total_seconds()))


class ProgressSnapshot(BaseModel):
    """Everything the dashboard renders in one frame."""

    state: PlanningState | None = Field(default=None, description="None until STATE.md exists")
    entries: list[IterationEntry] = Field(default_factory=list)
    state_error: str | None = Field(default=None, description="Error reading STATE.md")
    log_error: str | None = Field(default=None, description="Error reading ralph.log")

    @property
    def running_entry(self) -> IterationEntry | None:
        """The last entry, when it is still running."""
        if self.entries and self.entries[-1].is_running:
            return self.entries[-1]
        return None

    @property
    def completed_entries(self) -> list[IterationEntry]:
        """Entries with a status other than RUNNING."""
        return [e for e in self.entries if e.status and not e.is_running]


@dataclass(frozen=True)
class PlanningPaths:
    """Locations of the files the worker writes, relative to a project root."""

    root: Path
    state: Path
    log: Path
    pause: Path

    @classmethod
    def from_config(cls, root: Path, config: DashboardConfig | None = None) -> PlanningPaths:
        config = config or DashboardConfig()
        planning = root / config.planning_dir
        return cls(
            root=root,
            state=planning / config.state_file,
            log=planning / config.log_file,
            pause=planning / config.pause_file,
        )


def format_elapsed(seconds: int) -> str:
    """Format elapsed seconds as ``42s`` or ``3m 5s``."""
    if seconds > 60:
        return f"{seconds // 60}m {seconds % 60}s"
    return f"{seconds}s"


__all__ = [
    "IterationEntry",
    "IterationStatus",
    "PlanningPaths",
    "PlanningState",
    "ProgressSnapshot",
    "format_elapsed",
]
