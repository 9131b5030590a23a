"""
Autopilot CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from autopilot import __version__
from autopilot.cli import launch, pause, terminals, watch
from autopilot.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_LAUNCH = "Start the Worker"
PANEL_PROGRESS = "Follow and Steer a Run"
PANEL_INSTALL = "Check Your Setup"

# Create the main Typer app
app = typer.Typer(
    name="autopilot",
    help="Launch a long-running worker loop in its own terminal window",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"autopilot version {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show autopilot version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Autopilot - detached worker launcher.

    Opens the worker script in a new terminal window so it keeps running
    after this session ends, and a progress dashboard next to it.

    Quick Start:
        autopilot launch             # Worker + dashboard windows
        autopilot watch              # Dashboard in this terminal
        autopilot pause              # Pause after the current iteration
        autopilot resume             # Continue
    """
    setup_logging(debug)

    # Precedence: OS env > project .env > user .env
    load_layered_env()

    # Store debug flag in context for subcommands
    ctx.obj = {"debug": debug}


# =============================================================================
# Start the Worker
# =============================================================================

app.command(name="launch", rich_help_panel=PANEL_LAUNCH)(launch.launch)


# =============================================================================
# Follow and Steer a Run
# =============================================================================

app.command(name="watch", rich_help_panel=PANEL_PROGRESS)(watch.watch)
app.command(name="pause", rich_help_panel=PANEL_PROGRESS)(pause.pause)
app.command(name="resume", rich_help_panel=PANEL_PROGRESS)(pause.resume)


# =============================================================================
# Check Your Setup
# =============================================================================

app.command(name="terminals", rich_help_panel=PANEL_INSTALL)(terminals.terminals)


@app.command(rich_help_panel=PANEL_INSTALL)
def version() -> None:
    """Show autopilot version and exit."""
    console.print(f"autopilot version {__version__}")
    raise typer.Exit(0)


__all__ = ["app", "setup_logging"]
