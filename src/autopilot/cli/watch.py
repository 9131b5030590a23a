"""
Autopilot CLI - Watch command.

Live dashboard for a running worker, read from the project's planning
files. This is what the launcher opens in the second window.
"""

from pathlib import Path

import typer
from rich.console import Console

from autopilot.cli.errors import ExitCode, print_config_error, print_project_not_found_error
from autopilot.core.config import ConfigError, load_config
from autopilot.dashboard import watch_progress

console = Console()


def watch(
    project_root: Path | None = typer.Argument(
        None,
        help="Project to watch (defaults to cwd)",
    ),
) -> None:
    """
    Display the live progress dashboard.

    Shows the current position from STATE.md and recent iterations from
    ralph.log, refreshing every 2s while an iteration runs and every 10s
    otherwise.

    Keys:
        p    pause the worker after its current iteration
        r    resume
        q    quit the dashboard (the worker keeps running)
    """
    root = (project_root or Path.cwd()).absolute()
    if not root.is_dir():
        print_project_not_found_error(str(root))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    try:
        config = load_config(root)
    except ConfigError as e:
        print_config_error(e)
        raise typer.Exit(ExitCode.USER_ERROR)

    raise typer.Exit(watch_progress(root, config.dashboard, console=console))
