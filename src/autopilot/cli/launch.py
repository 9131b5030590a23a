"""
Autopilot CLI - Launch command.

Opens the worker script in a new terminal window, plus the progress
dashboard in a second one.
"""

from pathlib import Path

import typer
from rich.console import Console

from autopilot.cli.errors import ExitCode, print_config_error
from autopilot.core.config import ConfigError, load_config
from autopilot.core.services.launch import LaunchService

console = Console()


def launch(
    no_dashboard: bool = typer.Option(
        False,
        "--no-dashboard",
        help="Only open the worker window",
    ),
    script: Path | None = typer.Option(
        None,
        "--script",
        "-s",
        help="Worker script to run (overrides worker.script)",
    ),
    project_dir: Path | None = typer.Option(
        None,
        "--project-dir",
        "-C",
        help="Project root both windows start in (defaults to cwd)",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
) -> None:
    """
    Launch the worker in a new terminal window.

    Picks the first supported terminal found on PATH, opens the worker in
    it, then opens the progress dashboard next to it. If no terminal can
    be opened, prints instructions for starting the worker by hand.

    Examples:
        autopilot launch                      # Worker + dashboard
        autopilot launch --no-dashboard       # Worker only
        autopilot launch -s ./loop.sh         # Different worker script
    """
    project = (project_dir or Path.cwd()).absolute()

    try:
        config = load_config(project)
    except ConfigError as e:
        print_config_error(e)
        raise typer.Exit(ExitCode.USER_ERROR)

    if script is not None:
        worker = config.worker.model_copy(update={"script": str(script)})
        config = config.model_copy(update={"worker": worker})

    service = LaunchService.from_config(config, project, console=console)
    outcome = service.launch_worker(with_dashboard=False if no_dashboard else None)
    if outcome.exit_code != ExitCode.SUCCESS:
        raise typer.Exit(outcome.exit_code)
