"""
Data models for the launch service.

Defines the platform and payload enums, the per-launch request, the spawn
specification a strategy produces, the terminal registry entry, and the
structured outcome returned to callers.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class Platform(str, Enum):
    """Host platform family, selects the terminal registry row."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    @classmethod
    def current(cls) -> Platform:
        """
        Map ``sys.platform`` onto a platform family.

        Anything that is not Windows or macOS uses the X11-style linux table.
        """
        return cls.from_sys_platform(sys.platform)

    @classmethod
    def from_sys_platform(cls, value: str) -> Platform:
        if value in ("win32", "cygwin"):
            return cls.WINDOWS
        if value == "darwin":
            return cls.MACOS
        return cls.LINUX


class PayloadKind(str, Enum):
    """How the payload is started inside the new window."""

    SCRIPT = "script"  # Executed directly by the target shell
    INTERPRETED = "interpreted"  # Run through an explicit interpreter


class FailureReason(str, Enum):
    """Why a launch did not produce a worker window."""

    NO_TERMINAL_FOUND = "no_terminal_found"
    LAUNCH_FAILED = "launch_failed"


@dataclass(frozen=True)
class LaunchRequest:
    """
    One payload to open in a new terminal window.

    Attributes:
        payload_path: Absolute native path of the script to run
        title: Window title (ignored by terminals that cannot set one)
        kind: Whether the payload runs directly or through ``interpreter``
        working_dir: Directory the new window starts in
        interpreter: Interpreter executable for interpreted payloads
        args: Extra arguments appended after the payload path
    """

    payload_path: str
    title: str
    kind: PayloadKind
    working_dir: str
    interpreter: str | None = None
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class SpawnSpec:
    """
    Everything needed to create one detached process.

    ``command_line`` is set by Windows strategies that must control quoting
    themselves (``cmd.exe /c start ...``); when present it is handed to
    ``subprocess.Popen`` verbatim instead of ``argv``.
    """

    terminal: str
    executable: str
    argv: tuple[str, ...]
    working_dir: str
    command_line: str | None = None
    detach: bool = True
    discard_output: bool = True

    @property
    def args(self) -> str | list[str]:
        """Arguments for ``subprocess.Popen``."""
        if self.command_line is not None:
            return self.command_line
        return list(self.argv)


Strategy = Callable[[LaunchRequest], SpawnSpec]


@dataclass(frozen=True)
class TerminalCandidate:
    """
    A terminal emulator entry in the registry.

    Attributes:
        name: Executable name probed on the search path
        label: Human-readable name for instructions
        script: Strategy for raw scripts (the worker)
        interpreted: Strategy for interpreter payloads (the dashboard)
    """

    name: str
    label: str
    script: Strategy
    interpreted: Strategy | None = None

    def strategy_for(self, kind: PayloadKind) -> Strategy | None:
        """Return the strategy matching a payload kind, if any."""
        if kind == PayloadKind.SCRIPT:
            return self.script
        return self.interpreted


@dataclass(frozen=True)
class LaunchSuccess:
    """The worker window was spawned."""

    terminal: str
    pid: int
    dashboard_pid: int | None = None

    @property
    def success(self) -> bool:
        return True

    @property
    def exit_code(self) -> int:
        return 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "terminal": self.terminal,
            "pid": self.pid,
            "dashboard_pid": self.dashboard_pid,
        }


@dataclass(frozen=True)
class LaunchFailure:
    """The worker window could not be spawned."""

    reason: FailureReason
    error: str | None = field(default=None)

    @property
    def success(self) -> bool:
        return False

    @property
    def exit_code(self) -> int:
        return 1

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": False, "reason": self.reason.value}
        if self.error is not None:
            data["error"] = self.error
        return data


LaunchOutcome = Union[LaunchSuccess, LaunchFailure]


__all__ = [
    "FailureReason",
    "LaunchFailure",
    "LaunchOutcome",
    "LaunchRequest",
    "LaunchSuccess",
    "PayloadKind",
    "Platform",
    "SpawnSpec",
    "Strategy",
    "TerminalCandidate",
]
