"""
Tests for the dashboard renderer.

Frames are printed to a recording console and checked as plain text.
"""

import io
from datetime import datetime, timezone

import pytest
from rich.console import Console

from autopilot.dashboard import IterationEntry, ProgressRenderer, ProgressSnapshot
from autopilot.dashboard.parser import parse_log, parse_state
from autopilot.dashboard.renderer import format_status

NOW = datetime(2026, 1, 15, 10, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def record_console():
    return Console(record=True, width=100, file=io.StringIO())


def render_text(console: Console, snapshot: ProgressSnapshot, **kwargs) -> str:
    renderer = ProgressRenderer(recent=kwargs.pop("recent", 5))
    console.print(renderer.render(snapshot, now=kwargs.pop("now", NOW), **kwargs))
    return console.export_text()


@pytest.fixture
def sample_snapshot(sample_state, sample_log):
    return ProgressSnapshot(state=parse_state(sample_state), entries=parse_log(sample_log))


class TestFormatStatus:
    """Tests for format_status."""

    @pytest.mark.parametrize(
        ("status", "text", "style"),
        [
            ("SUCCESS", "✓ SUCCESS", "green"),
            ("FAILURE", "✗ FAILURE", "red"),
            ("RETRY", "⟳ RETRY", "yellow"),
            ("RUNNING", "▸ RUNNING", "cyan"),
            ("SKIPPED", "⊘ SKIPPED", "yellow"),
        ],
    )
    def test_known(self, status: str, text: str, style: str) -> None:
        rendered = format_status(IterationEntry(iteration="1", status=status))
        assert rendered.plain == text
        assert rendered.style == style

    def test_unknown_shown_verbatim(self) -> None:
        rendered = format_status(IterationEntry(iteration="1", status="Blocked"))
        assert rendered.plain == "Blocked"
        assert rendered.style == ""


class TestProgressRenderer:
    """Tests for ProgressRenderer.render."""

    def test_renderer_holds_no_console(self) -> None:
        renderer = ProgressRenderer(recent=2)
        assert renderer.recent == 2
        assert not hasattr(renderer, "console")

    def test_full_frame(self, record_console, sample_snapshot) -> None:
        text = render_text(record_console, sample_snapshot, paused=False)

        assert "Autopilot Progress" in text
        assert "10:08:30" in text
        assert "Current Position:" in text
        assert "2 of 4 (Build)" in text
        assert "02-03" in text
        assert "Finished plan 02-02" in text
        assert "Progress:" in text
        assert "[=====-----] 50%" in text
        assert "Currently Running:" in text
        assert "Task 02-03 (iteration #3)" in text
        assert "Elapsed: 1m 30s" in text
        assert "Recent Iterations:" in text
        assert "#1 ✓ SUCCESS" in text
        assert "#2 ✗ FAILURE" in text
        assert "Task: 02-01" in text
        assert "Added the parser" in text
        assert "Duration: 4m 12s" in text
        assert "Mode: [RUNNING]" in text
        assert "Keys: [p]ause  [r]esume  [q]uit" in text

    def test_paused_mode(self, record_console) -> None:
        text = render_text(record_console, ProgressSnapshot(), paused=True)
        assert "Mode: [PAUSED]" in text

    def test_waiting_for_state(self, record_console) -> None:
        text = render_text(record_console, ProgressSnapshot(), paused=False)
        assert "Waiting for STATE.md..." in text
        assert "Currently Running:" not in text
        assert "Recent Iterations:" not in text

    def test_state_error(self, record_console) -> None:
        snapshot = ProgressSnapshot(state_error="Permission denied")
        text = render_text(record_console, snapshot, paused=False)
        assert "Error reading STATE.md: Permission denied" in text

    def test_log_error(self, record_console) -> None:
        snapshot = ProgressSnapshot(log_error="invalid start byte")
        text = render_text(record_console, snapshot, paused=False)
        assert "Error reading ralph.log: invalid start byte" in text

    def test_recent_limit(self, record_console, sample_snapshot) -> None:
        text = render_text(record_console, sample_snapshot, paused=False, recent=1)
        assert "#2 ✗ FAILURE" in text
        assert "#1 ✓ SUCCESS" not in text

    def test_placeholder_duration_hidden(self, record_console, sample_log) -> None:
        entries = parse_log(sample_log.replace("Duration: 4m 12s", "Duration: -"))
        text = render_text(record_console, ProgressSnapshot(entries=entries), paused=False)
        assert "Duration: 4m 12s" not in text
        assert "Duration: -" not in text

    def test_running_without_timestamp_has_no_elapsed(self, record_console) -> None:
        snapshot = ProgressSnapshot(
            entries=[IterationEntry(iteration="9", task="01-01", status="RUNNING")]
        )
        text = render_text(record_console, snapshot, paused=False)
        assert "Task 01-01 (iteration #9)" in text
        assert "Elapsed:" not in text

    def test_notice_shown(self, record_console) -> None:
        text = render_text(
            record_console, ProgressSnapshot(), paused=False, notice="Error creating pause file"
        )
        assert "Error creating pause file" in text

    def test_markup_in_content_is_literal(self, record_console) -> None:
        snapshot = ProgressSnapshot(state=parse_state("Phase: [bold]1[/bold]\n"))
        text = render_text(record_console, snapshot, paused=False)
        assert "[bold]1[/bold]" in text
