"""
Standardized error handling and exit codes for the autopilot CLI.
"""

from enum import IntEnum

from rich.console import Console

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for autopilot CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Launch failed, or no terminal could be found."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Invalid configuration",
        ...     reason="dashboard.refresh_idle must be greater than 0",
        ...     solution="edit .autopilot.json",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_config_error(error: Exception) -> None:
    """Print error when the merged configuration is invalid."""
    print_error(
        "Invalid autopilot configuration",
        reason=str(error),
        solution="fix .autopilot.json or ~/.config/autopilot/config.json",
    )


def print_project_not_found_error(path: str) -> None:
    """Print error when the project directory doesn't exist."""
    print_error(
        f"Project directory not found: {path}",
        reason="The dashboard reads .planning/ under the project root",
        solution="autopilot watch /path/to/project",
    )


__all__ = [
    "ExitCode",
    "print_config_error",
    "print_error",
    "print_project_not_found_error",
]
