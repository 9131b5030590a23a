"""
Configuration data models for autopilot.

These models define the structure of .autopilot.json and
~/.config/autopilot/config.json, with validation via Pydantic.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class WorkerConfig(BaseModel):
    """
    The long-running worker script opened in its own terminal window.
    """
    script: str = Field(
        default="~/.autopilot/bin/ralph.sh",
        min_length=1,
        description="Worker script path (relative paths resolve against the project)"
    )
    title: str = Field(
        default="Autopilot",
        min_length=1,
        description="Window title for the worker terminal"
    )


class DashboardConfig(BaseModel):
    """
    Live progress dashboard opened next to the worker.

    The dashboard only reads the planning files the worker writes, so it
    costs nothing to keep open.
    """
    enabled: bool = Field(
        default=True,
        description="Open the dashboard window after the worker launches"
    )
    title: str = Field(
        default="Autopilot Progress",
        min_length=1,
        description="Window title for the dashboard terminal"
    )
    interpreter: str | None = Field(
        default=None,
        description="Python interpreter for the dashboard (defaults to the current one)"
    )
    planning_dir: str = Field(
        default=".planning",
        min_length=1,
        description="Directory holding the worker's state and log files"
    )
    state_file: str = Field(default="STATE.md", min_length=1)
    log_file: str = Field(default="ralph.log", min_length=1)
    pause_file: str = Field(default=".pause", min_length=1)
    refresh_running: float = Field(
        default=2.0,
        gt=0.0,
        description="Refresh interval in seconds while an iteration is running"
    )
    refresh_idle: float = Field(
        default=10.0,
        gt=0.0,
        description="Refresh interval in seconds while idle"
    )
    recent_iterations: int = Field(
        default=5,
        ge=1,
        description="Number of completed iterations to show"
    )


class AutopilotConfig(BaseModel):
    """
    Top-level autopilot configuration.

    Loaded from defaults, user config and project config.

    Example:
        >>> config = AutopilotConfig(dashboard=DashboardConfig(enabled=False))
        >>> config.dashboard.enabled
        False
    """
    model_config = ConfigDict(extra="ignore")

    worker: WorkerConfig = Field(
        default_factory=WorkerConfig,
        description="Worker script settings"
    )
    dashboard: DashboardConfig = Field(
        default_factory=DashboardConfig,
        description="Progress dashboard settings"
    )

    def worker_script_path(self, project_dir: Path) -> Path:
        """Absolute worker script path, with ``~`` expanded."""
        script = Path(self.worker.script).expanduser()
        if not script.is_absolute():
            script = project_dir / script
        return script.absolute()
