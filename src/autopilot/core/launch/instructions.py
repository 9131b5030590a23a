"""
Manual fallback instructions printed when no window could be opened.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from autopilot.core.launch.models import Platform
from autopilot.core.launch.registry import TERMINAL_REGISTRY, Registry, candidates_for

_RULE = "=" * 42

_PLATFORM_NAMES = {
    Platform.WINDOWS: "Windows",
    Platform.MACOS: "macOS",
    Platform.LINUX: "Linux",
}


def manual_command(platform: Platform, worker_script: str | Path) -> str:
    """The command a user types to start the worker by hand."""
    if platform == Platform.WINDOWS:
        return f"bash {worker_script}"
    return str(worker_script)


def show_manual_instructions(
    platform: Platform,
    *,
    worker_script: str | Path,
    project_dir: str | Path,
    registry: Registry = TERMINAL_REGISTRY,
    console: Console | None = None,
) -> None:
    """
    Print a step-by-step recipe for starting the worker manually.

    Lists the terminals that would have been used on this platform so the
    user can install one and retry.
    """
    out = console or Console()

    out.print()
    out.print(f"[bold]{_RULE}[/bold]")
    out.print("[bold] TERMINAL LAUNCH UNAVAILABLE[/bold]")
    out.print(f"[bold]{_RULE}[/bold]")
    out.print()
    out.print("Could not open the worker in a new terminal window.")
    out.print()
    out.print("To run autopilot manually:")
    out.print()
    out.print("  1. Open a new terminal window")
    out.print(f"  2. cd {escape(str(project_dir))}")
    out.print(f"  3. {escape(manual_command(platform, worker_script))}")
    out.print()

    candidates = candidates_for(platform, registry)
    if candidates:
        out.print(f"Supported terminals on {_PLATFORM_NAMES[platform]}:")
        for candidate in candidates:
            out.print(f"  - {escape(candidate.label)}")
    out.print()
    out.print(f"[bold]{_RULE}[/bold]")
    out.print()


__all__ = ["manual_command", "show_manual_instructions"]
