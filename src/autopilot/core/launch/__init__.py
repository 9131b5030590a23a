"""
Terminal resolution and detached launching.

This package finds a usable terminal emulator for the host platform and
builds the exact process invocation that opens a new window running a
payload script, detached from the invoking session.

Modules:
    models: Data models (Platform, LaunchRequest, SpawnSpec, outcomes)
    paths: Windows to POSIX-shell path translation
    strategies: Per-terminal command construction
    registry: Ordered terminal table per platform
    resolver: First-available terminal lookup
    spawner: Detached process creation
    instructions: Manual fallback recipe

Example Usage:
    >>> from autopilot.core.launch import Platform, resolve_terminal
    >>> candidate = resolve_terminal(Platform.current())
    >>> if candidate is None:
    ...     print("No terminal found")
"""

from autopilot.core.launch.instructions import manual_command, show_manual_instructions
from autopilot.core.launch.models import (
    FailureReason,
    LaunchFailure,
    LaunchOutcome,
    LaunchRequest,
    LaunchSuccess,
    PayloadKind,
    Platform,
    SpawnSpec,
    Strategy,
    TerminalCandidate,
)
from autopilot.core.launch.paths import to_posix_shell_path
from autopilot.core.launch.registry import TERMINAL_REGISTRY, Registry, candidates_for
from autopilot.core.launch.resolver import (
    Probe,
    probe_executable,
    probe_terminals,
    resolve_terminal,
)
from autopilot.core.launch.spawner import LauncherError, TerminalSpawnError, spawn_detached

__all__ = [
    # Models
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
    # Paths
    "to_posix_shell_path",
    # Registry / resolver
    "Registry",
    "TERMINAL_REGISTRY",
    "candidates_for",
    "Probe",
    "probe_executable",
    "probe_terminals",
    "resolve_terminal",
    # Spawning
    "LauncherError",
    "TerminalSpawnError",
    "spawn_detached",
    # Instructions
    "manual_command",
    "show_manual_instructions",
]
