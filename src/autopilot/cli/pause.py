"""
Autopilot CLI - Pause and resume commands.

Toggle the pause marker the worker checks between iterations.
"""

from pathlib import Path

import typer
from rich.console import Console

from autopilot.cli.errors import ExitCode, print_config_error, print_error
from autopilot.core.config import ConfigError, load_config
from autopilot.dashboard import PauseFlag, PlanningPaths

console = Console()

_PROJECT_DIR_OPTION = typer.Option(
    None,
    "--project-dir",
    "-C",
    help="Project root (defaults to cwd)",
    exists=True,
    file_okay=False,
    dir_okay=True,
)


def _pause_flag(project_dir: Path | None) -> PauseFlag:
    root = (project_dir or Path.cwd()).absolute()
    try:
        config = load_config(root)
    except ConfigError as e:
        print_config_error(e)
        raise typer.Exit(ExitCode.USER_ERROR)
    return PauseFlag(PlanningPaths.from_config(root, config.dashboard).pause)


def pause(project_dir: Path | None = _PROJECT_DIR_OPTION) -> None:
    """Pause the worker after its current iteration."""
    flag = _pause_flag(project_dir)
    try:
        flag.pause()
    except OSError as e:
        print_error("Could not create pause file", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    console.print(f"[yellow]Paused.[/yellow] [dim]({flag.path})[/dim]")


def resume(project_dir: Path | None = _PROJECT_DIR_OPTION) -> None:
    """Let a paused worker continue."""
    flag = _pause_flag(project_dir)
    try:
        flag.resume()
    except OSError as e:
        print_error("Could not delete pause file", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    console.print("[green]Resumed.[/green]")
