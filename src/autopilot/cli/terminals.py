"""
Autopilot CLI - Terminals command.

Shows which terminals are supported on this platform, which of them are
on PATH, and which one ``autopilot launch`` would pick.
"""

import typer
from rich.console import Console
from rich.table import Table

from autopilot.cli.errors import ExitCode
from autopilot.core.launch import Platform, probe_terminals

console = Console()

_PLATFORM_NAMES = {
    Platform.WINDOWS: "Windows",
    Platform.MACOS: "macOS",
    Platform.LINUX: "Linux",
}


def terminals() -> None:
    """List supported terminals in the order they are tried."""
    platform = Platform.current()
    results = probe_terminals(platform)

    table = Table(title=f"Supported terminals on {_PLATFORM_NAMES[platform]}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Executable", style="cyan")
    table.add_column("Terminal")
    table.add_column("Available")
    table.add_column("Dashboard")

    selected = next((candidate for candidate, ok in results if ok), None)
    for index, (candidate, available) in enumerate(results, start=1):
        marker = "[green]yes[/green]" if available else "[dim]no[/dim]"
        if candidate is selected:
            marker += " [bold green](selected)[/bold green]"
        table.add_row(
            str(index),
            candidate.name,
            candidate.label,
            marker,
            "yes" if candidate.interpreted is not None else "no",
        )

    console.print(table)
    if selected is None:
        console.print("\n[yellow]No supported terminal found on PATH.[/yellow]")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
