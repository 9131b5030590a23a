"""
Rich-based progress renderer for the autopilot dashboard.

Colour is dropped automatically when NO_COLOR is set, since rich's Console
honours it.
"""

from datetime import datetime

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from autopilot.dashboard.models import (
    IterationEntry,
    IterationStatus,
    ProgressSnapshot,
    format_elapsed,
)

_STATUS_STYLES: dict[IterationStatus, tuple[str, str]] = {
    IterationStatus.SUCCESS: ("✓", "green"),
    IterationStatus.FAILURE: ("✗", "red"),
    IterationStatus.RETRY: ("⟳", "yellow"),
    IterationStatus.RUNNING: ("▸", "cyan"),
    IterationStatus.SKIPPED: ("⊘", "yellow"),
}


def format_status(entry: IterationEntry) -> Text:
    """Status text with glyph and colour; unknown statuses are shown as written."""
    known = entry.known_status
    if known is None:
        return Text(entry.status)
    glyph, style = _STATUS_STYLES[known]
    return Text(f"{glyph} {entry.status}", style=style)


class ProgressRenderer:
    """
    Render one dashboard frame from a progress snapshot.

    The frame shows:
    - Header: title and render time
    - Current position and progress from STATE.md
    - The running iteration, if any, with elapsed time
    - The most recent completed iterations
    - Mode line (RUNNING / PAUSED) and key help

    Example:
        >>> renderer = ProgressRenderer()
        >>> frame = renderer.render(ProgressSnapshot(), paused=False)
    """

    def __init__(self, recent: int = 5):
        self.recent = recent

    def render(
        self,
        snapshot: ProgressSnapshot,
        *,
        paused: bool,
        now: datetime | None = None,
        notice: str | None = None,
    ) -> RenderableType:
        now = now or datetime.now()
        parts: list[RenderableType] = [self._render_header(now)]
        parts.extend(self._render_state(snapshot))
        parts.extend(self._render_running(snapshot, now))
        parts.extend(self._render_recent(snapshot))
        if snapshot.log_error:
            parts.append(Text(f"Error reading ralph.log: {snapshot.log_error}\n", style="red"))
        if notice:
            parts.append(Text(notice, style="red"))
        parts.append(Rule(style="dim"))
        parts.extend(self._render_footer(paused))
        return Group(*parts)

    def _render_header(self, now: datetime) -> Panel:
        header = Table.grid(expand=True)
        header.add_column()
        header.add_column(justify="right")
        header.add_row(
            Text("Autopilot Progress", style="bold cyan"),
            Text(now.strftime("%H:%M:%S"), style="dim"),
        )
        return Panel(header, border_style="cyan")

    def _render_state(self, snapshot: ProgressSnapshot) -> list[RenderableType]:
        if snapshot.state_error:
            return [Text(f"Error reading STATE.md: {snapshot.state_error}\n", style="red")]
        state = snapshot.state
        if state is None:
            return [Text("Waiting for STATE.md...\n", style="dim")]

        position = Table.grid(padding=(0, 1))
        position.add_column(style="bold")
        position.add_column()
        position.add_row("  Phase:", Text(state.phase))
        position.add_row("  Plan:", Text(state.plan))
        position.add_row("  Status:", Text(state.status))
        if state.last_activity:
            position.add_row("  Last:", Text(state.last_activity, style="dim"))

        parts: list[RenderableType] = [
            Text("Current Position:", style="bold"),
            position,
            Text(""),
        ]
        if state.progress:
            parts.extend(
                [Text("Progress:", style="bold"), Text(f"  {state.progress}"), Text("")]
            )
        return parts

    def _render_running(self, snapshot: ProgressSnapshot, now: datetime) -> list[RenderableType]:
        entry = snapshot.running_entry
        if entry is None:
            return []
        task = Text("  ")
        task.append(f"Task {entry.task}", style="bold")
        task.append(f" (iteration #{entry.iteration})")
        parts: list[RenderableType] = [Text("▸ Currently Running:", style="bold cyan"), task]
        elapsed = entry.elapsed_seconds(now)
        if elapsed is not None:
            parts.append(Text(f"  Elapsed: {format_elapsed(elapsed)}", style="dim"))
        parts.append(Text(""))
        return parts

    def _render_recent(self, snapshot: ProgressSnapshot) -> list[RenderableType]:
        recent = snapshot.completed_entries[-self.recent:]
        if not recent:
            return []
        parts: list[RenderableType] = [Text("Recent Iterations:", style="bold")]
        for entry in recent:
            line = Text("  ")
            line.append(f"#{entry.iteration}", style="cyan")
            line.append(" ")
            line.append_text(format_status(entry))
            parts.append(line)

            task = Text("      Task: ")
            task.append(entry.task, style="dim")
            parts.append(task)
            if entry.summary:
                parts.append(Text(f"      {entry.summary}"))
            if entry.duration and entry.duration != "-":
                parts.append(Text(f"      Duration: {entry.duration}", style="dim"))
            parts.append(Text(""))
        return parts

    def _render_footer(self, paused: bool) -> list[RenderableType]:
        mode = Text("Mode: ")
        if paused:
            mode.append("[PAUSED]", style="bold yellow")
        else:
            mode.append("[RUNNING]", style="bold green")
        return [mode, Text("Keys: [p]ause  [r]esume  [q]uit", style="dim")]


__all__ = ["ProgressRenderer", "format_status"]
