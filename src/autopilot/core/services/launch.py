"""
Launch service: open the worker (and its dashboard) in new terminal windows.

Usage:
    >>> from autopilot.core.services.launch import LaunchService
    >>> service = LaunchService.from_config()
    >>> outcome = service.launch_worker()
    >>> outcome.exit_code
    0

Flow:
    resolve a terminal -> spawn the worker -> best-effort spawn the dashboard

Only a failure to spawn the worker is reported as a failed outcome. The
dashboard is a convenience: if it can't be opened the worker keeps running
and the outcome is still a success, with ``dashboard_pid`` left as None.
Nothing is retried and nothing waits on the spawned windows.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from autopilot.core.config.loader import load_config
from autopilot.core.config.models import AutopilotConfig
from autopilot.core.launch import (
    TERMINAL_REGISTRY,
    FailureReason,
    LaunchFailure,
    LaunchOutcome,
    LaunchRequest,
    LaunchSuccess,
    PayloadKind,
    Platform,
    Probe,
    Registry,
    SpawnSpec,
    TerminalCandidate,
    probe_executable,
    resolve_terminal,
    show_manual_instructions,
    spawn_detached,
)
from autopilot.dashboard import DASHBOARD_SCRIPT

logger = logging.getLogger(__name__)

Spawner = Callable[[SpawnSpec], int]


class LaunchService:
    """
    Orchestrates terminal resolution and the two detached launches.

    Every collaborator is passed in explicitly so tests can substitute a
    fake registry, probe or spawner without touching process-wide state.

    Example:
        >>> service = LaunchService(
        ...     AutopilotConfig(),
        ...     Path("/project"),
        ...     platform=Platform.LINUX,
        ...     probe=lambda name: name == "xterm",
        ...     spawner=lambda spec: 4242,
        ... )
        >>> service.launch_worker().terminal
        'xterm'
    """

    def __init__(
        self,
        config: AutopilotConfig,
        project_dir: Path,
        *,
        platform: Platform | None = None,
        registry: Registry = TERMINAL_REGISTRY,
        probe: Probe = probe_executable,
        spawner: Spawner = spawn_detached,
        dashboard_script: Path = DASHBOARD_SCRIPT,
        console: Console | None = None,
    ) -> None:
        """
        Initialize service with dependencies.

        Args:
            config: Autopilot configuration
            project_dir: Project root; both windows start here
            platform: Host platform (detected when None)
            registry: Terminal table to resolve against
            probe: Terminal availability check
            spawner: Creates the detached process for a SpawnSpec
            dashboard_script: Payload run through the interpreter in window two
            console: Where user-facing messages go
        """
        self._config = config
        self._project_dir = project_dir
        self._platform = platform or Platform.current()
        self._registry = registry
        self._probe = probe
        self._spawner = spawner
        self._dashboard_script = dashboard_script
        self._console = console or Console()

    @classmethod
    def from_config(
        cls,
        config: AutopilotConfig | None = None,
        project_dir: Path | None = None,
        console: Console | None = None,
    ) -> LaunchService:
        """
        Create service from configuration, using the real platform and PATH.

        Args:
            config: Optional configuration (loaded from project_dir if None)
            project_dir: Project root (defaults to cwd)
            console: Optional console for messages

        Returns:
            Configured LaunchService instance
        """
        project_dir = (project_dir or Path.cwd()).absolute()
        if config is None:
            config = load_config(project_dir)
        return cls(config, project_dir, console=console)

    @property
    def config(self) -> AutopilotConfig:
        return self._config

    @property
    def project_dir(self) -> Path:
        return self._project_dir

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def worker_script(self) -> Path:
        return self._config.worker_script_path(self._project_dir)

    # ============================================================================
    # Resolution and requests
    # ============================================================================

    def resolve(self) -> TerminalCandidate | None:
        """Find the first available terminal for this platform."""
        return resolve_terminal(self._platform, registry=self._registry, probe=self._probe)

    def worker_request(self) -> LaunchRequest:
        """The worker launch: a raw script run by the window's shell."""
        return LaunchRequest(
            payload_path=str(self.worker_script),
            title=self._config.worker.title,
            kind=PayloadKind.SCRIPT,
            working_dir=str(self._project_dir),
        )

    def dashboard_request(self) -> LaunchRequest:
        """The dashboard launch: the watcher script run through Python."""
        return LaunchRequest(
            payload_path=str(self._dashboard_script),
            title=self._config.dashboard.title,
            kind=PayloadKind.INTERPRETED,
            working_dir=str(self._project_dir),
            interpreter=self._config.dashboard.interpreter or sys.executable,
            args=(str(self._project_dir),),
        )

    # ============================================================================
    # Launching
    # ============================================================================

    def launch_worker(self, *, with_dashboard: bool | None = None) -> LaunchOutcome:
        """
        Open the worker in a new terminal window, then the dashboard.

        Args:
            with_dashboard: Override the configured dashboard toggle

        Returns:
            LaunchSuccess with the worker pid (and dashboard pid if opened),
            or LaunchFailure with the reason
        """
        candidate = self.resolve()
        if candidate is None:
            logger.info("No supported terminal found for %s", self._platform.value)
            self.show_manual_instructions()
            return LaunchFailure(reason=FailureReason.NO_TERMINAL_FOUND)

        if not self.worker_script.exists():
            logger.warning("Worker script %s does not exist", self.worker_script)

        try:
            pid = self._spawner(candidate.script(self.worker_request()))
        except Exception as e:
            logger.info("Failed to launch %s: %s", candidate.name, e)
            self._console.print(
                f"\n[red]Failed to launch {escape(candidate.name)}: {escape(str(e))}[/red]\n"
            )
            self.show_manual_instructions()
            return LaunchFailure(reason=FailureReason.LAUNCH_FAILED, error=str(e))

        self._console.print(
            f"\nLaunched [bold]{escape(self.worker_script.name)}[/bold] "
            f"in new {escape(candidate.name)} window"
        )
        self._console.print(
            "You can now close this session - the worker will continue running.\n"
        )

        if with_dashboard is None:
            with_dashboard = self._config.dashboard.enabled
        dashboard_pid = self._launch_dashboard(candidate) if with_dashboard else None

        return LaunchSuccess(terminal=candidate.name, pid=pid, dashboard_pid=dashboard_pid)

    def _launch_dashboard(self, candidate: TerminalCandidate) -> int | None:
        """Best-effort dashboard launch; failures are logged, never raised."""
        strategy = candidate.strategy_for(PayloadKind.INTERPRETED)
        if strategy is None:
            logger.info("%s has no interpreter launch; skipping dashboard", candidate.name)
            self._console.print("[dim]Progress dashboard not available for this terminal.[/dim]")
            return None

        try:
            pid = self._spawner(strategy(self.dashboard_request()))
        except Exception as e:
            logger.info("Could not open progress dashboard in %s: %s", candidate.name, e)
            self._console.print(
                f"[dim]Could not open progress dashboard: {escape(str(e))}[/dim]\n"
                "[dim]Run 'autopilot watch' in another terminal to follow progress.[/dim]"
            )
            return None

        self._console.print(f"Opened progress dashboard in new {escape(candidate.name)} window\n")
        return pid

    def show_manual_instructions(self) -> None:
        show_manual_instructions(
            self._platform,
            worker_script=self.worker_script,
            project_dir=self._project_dir,
            registry=self._registry,
            console=self._console,
        )


__all__ = ["LaunchService", "Spawner"]
