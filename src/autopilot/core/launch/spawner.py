"""
Detached process creation.

Spawns the process described by a SpawnSpec so that it outlives the parent:
its own session on POSIX, a detached process group on Windows, and all
standard streams sent to DEVNULL so the child can never block on a pipe.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import Any

from autopilot.core.launch.models import SpawnSpec

logger = logging.getLogger(__name__)

# Windows process creation flags (not defined by subprocess on POSIX)
DETACHED_PROCESS = 0x00000008
CREATE_NEW_PROCESS_GROUP = 0x00000200


class LauncherError(Exception):
    """Base exception for launcher errors."""


class TerminalSpawnError(LauncherError):
    """Process creation for a terminal window failed."""

    def __init__(self, terminal: str, message: str) -> None:
        self.terminal = terminal
        self.message = message
        super().__init__(message)


def _popen_kwargs(spec: SpawnSpec) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"cwd": spec.working_dir or None}
    if spec.discard_output:
        kwargs["stdin"] = subprocess.DEVNULL
        kwargs["stdout"] = subprocess.DEVNULL
        kwargs["stderr"] = subprocess.DEVNULL
    if spec.detach:
        if sys.platform == "win32":
            kwargs["creationflags"] = DETACHED_PROCESS | CREATE_NEW_PROCESS_GROUP
        else:
            kwargs["start_new_session"] = True
    return kwargs


def spawn_detached(spec: SpawnSpec) -> int:
    """
    Start the process described by ``spec`` without waiting for it.

    The Popen handle is dropped before returning; nothing ever waits on or
    signals the child.

    Args:
        spec: Spawn specification built by a launch strategy

    Returns:
        Process id of the spawned launcher process

    Raises:
        TerminalSpawnError: If the process could not be created
    """
    logger.debug("Spawning %s: %r", spec.terminal, spec.args)
    try:
        process = subprocess.Popen(spec.args, **_popen_kwargs(spec))
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        raise TerminalSpawnError(spec.terminal, str(e)) from e

    pid = process.pid
    del process
    return pid


__all__ = [
    "CREATE_NEW_PROCESS_GROUP",
    "DETACHED_PROCESS",
    "LauncherError",
    "TerminalSpawnError",
    "spawn_detached",
]
