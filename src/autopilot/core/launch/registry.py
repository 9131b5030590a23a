"""
Terminal registry: supported emulators per platform, in preference order.

The first available entry wins, so more capable terminals come first
(Windows Terminal before the legacy consoles). The table is read-only;
tests that need a different table pass their own mapping to the resolver.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from autopilot.core.launch import strategies
from autopilot.core.launch.models import Platform, TerminalCandidate

Registry = Mapping[Platform, tuple[TerminalCandidate, ...]]

TERMINAL_REGISTRY: Registry = MappingProxyType(
    {
        Platform.WINDOWS: (
            TerminalCandidate(
                name="wt.exe",
                label="Windows Terminal (wt.exe)",
                script=strategies.launch_windows_terminal,
                interpreted=strategies.launch_windows_terminal_interpreted,
            ),
            TerminalCandidate(
                name="cmd.exe",
                label="Command Prompt (cmd.exe)",
                script=strategies.launch_cmd,
                interpreted=strategies.launch_cmd_interpreted,
            ),
            TerminalCandidate(
                name="powershell.exe",
                label="PowerShell",
                script=strategies.launch_powershell,
                interpreted=strategies.launch_powershell_interpreted,
            ),
            TerminalCandidate(
                name="bash.exe",
                label="Git Bash",
                script=strategies.launch_git_bash,
                interpreted=strategies.launch_git_bash_interpreted,
            ),
        ),
        Platform.MACOS: (
            TerminalCandidate(
                name="osascript",
                label="Terminal.app",
                script=strategies.launch_mac_terminal,
                interpreted=strategies.launch_mac_terminal_interpreted,
            ),
        ),
        Platform.LINUX: (
            TerminalCandidate(
                name="gnome-terminal",
                label="gnome-terminal",
                script=strategies.launch_gnome_terminal,
                interpreted=strategies.launch_gnome_terminal_interpreted,
            ),
            TerminalCandidate(
                name="xterm",
                label="xterm",
                script=strategies.launch_xterm,
                interpreted=strategies.launch_xterm_interpreted,
            ),
            TerminalCandidate(
                name="x-terminal-emulator",
                label="x-terminal-emulator",
                script=strategies.launch_x_terminal_emulator,
                interpreted=strategies.launch_x_terminal_emulator_interpreted,
            ),
        ),
    }
)


def candidates_for(
    platform: Platform,
    registry: Registry = TERMINAL_REGISTRY,
) -> tuple[TerminalCandidate, ...]:
    """Return the ordered candidates for a platform (empty if none)."""
    return tuple(registry.get(platform, ()))


__all__ = ["Registry", "TERMINAL_REGISTRY", "candidates_for"]
