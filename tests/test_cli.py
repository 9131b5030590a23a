"""
Tests for the autopilot CLI commands.

The launch service, PATH lookups and process creation are patched so no
real terminal is ever opened.
"""

import importlib.util
import json
import sys
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from autopilot import __version__
from autopilot.cli import app
from autopilot.core.config import DashboardConfig
from autopilot.core.launch import FailureReason, LaunchFailure, LaunchSuccess
from autopilot.dashboard import DASHBOARD_SCRIPT

runner = CliRunner()


def only(*names: str):
    return lambda name: f"/usr/bin/{name}" if name in names else None


class TestHelpAndVersion:
    """Tests for top-level help and version output."""

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("launch", "watch", "pause", "resume", "terminals"):
            assert command in result.output

    def test_launch_help(self) -> None:
        result = runner.invoke(app, ["launch", "--help"])
        assert result.exit_code == 0
        assert "--no-dashboard" in result.output
        assert "--script" in result.output

    def test_version_option(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"autopilot version {__version__}" in result.output

    def test_version_command(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestLaunchCommand:
    """Tests for `autopilot launch`."""

    @pytest.fixture
    def mock_service(self):
        with patch("autopilot.cli.launch.LaunchService.from_config") as mock_from_config:
            service = MagicMock()
            service.launch_worker.return_value = LaunchSuccess(terminal="xterm", pid=1)
            mock_from_config.return_value = service
            yield mock_from_config, service

    def test_success_exit_code(self, project_dir, mock_service) -> None:
        _, service = mock_service
        result = runner.invoke(app, ["launch", "--project-dir", str(project_dir)])
        assert result.exit_code == 0
        service.launch_worker.assert_called_once_with(with_dashboard=None)

    def test_no_dashboard_flag(self, project_dir, mock_service) -> None:
        _, service = mock_service
        result = runner.invoke(
            app, ["launch", "--project-dir", str(project_dir), "--no-dashboard"]
        )
        assert result.exit_code == 0
        service.launch_worker.assert_called_once_with(with_dashboard=False)

    @pytest.mark.parametrize("reason", list(FailureReason))
    def test_failure_exit_code(self, project_dir, mock_service, reason) -> None:
        _, service = mock_service
        service.launch_worker.return_value = LaunchFailure(reason=reason)
        result = runner.invoke(app, ["launch", "--project-dir", str(project_dir)])
        assert result.exit_code == 1

    def test_script_option_overrides_config(self, project_dir, mock_service) -> None:
        mock_from_config, _ = mock_service
        script = project_dir / "bin" / "worker.sh"
        result = runner.invoke(
            app, ["launch", "--project-dir", str(project_dir), "--script", str(script)]
        )
        assert result.exit_code == 0
        config, project = mock_from_config.call_args[0]
        assert config.worker.script == str(script)
        assert project == project_dir

    def test_invalid_config(self, project_dir, mock_service) -> None:
        (project_dir / ".autopilot.json").write_text(
            json.dumps({"dashboard": {"refresh_idle": -1}})
        )
        result = runner.invoke(app, ["launch", "--project-dir", str(project_dir)])
        assert result.exit_code == 2
        assert "Invalid autopilot configuration" in result.output

    def test_missing_project_dir_rejected(self, tmp_path) -> None:
        result = runner.invoke(app, ["launch", "--project-dir", str(tmp_path / "nope")])
        assert result.exit_code != 0

    def test_no_terminal_end_to_end(self, project_dir) -> None:
        with patch("shutil.which", return_value=None), patch("subprocess.Popen") as mock_popen:
            result = runner.invoke(app, ["launch", "--project-dir", str(project_dir)])
        assert result.exit_code == 1
        assert "TERMINAL LAUNCH UNAVAILABLE" in result.output
        mock_popen.assert_not_called()

    def test_xterm_end_to_end(self, project_dir) -> None:
        (project_dir / ".autopilot.json").write_text(
            json.dumps({"worker": {"script": "bin/worker.sh"}})
        )
        with (
            patch("sys.platform", "linux"),
            patch("shutil.which", side_effect=only("xterm")),
            patch("subprocess.Popen", return_value=MagicMock(pid=99)) as mock_popen,
        ):
            result = runner.invoke(app, ["launch", "--project-dir", str(project_dir)])

        assert result.exit_code == 0
        assert "Launched worker.sh in new xterm window" in result.output
        assert "Opened progress dashboard" in result.output
        assert mock_popen.call_count == 2
        worker_args = mock_popen.call_args_list[0][0][0]
        assert worker_args[:4] == ["xterm", "-hold", "-title", "Autopilot"]
        worker = project_dir / "bin" / "worker.sh"
        assert worker_args[-1].endswith(f'"{worker}"')


class TestWatchCommand:
    """Tests for `autopilot watch`."""

    def test_missing_project_root(self, tmp_path) -> None:
        result = runner.invoke(app, ["watch", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Project directory not found" in result.output

    def test_runs_dashboard(self, project_dir) -> None:
        with patch("autopilot.cli.watch.watch_progress", return_value=0) as mock_watch:
            result = runner.invoke(app, ["watch", str(project_dir)])
        assert result.exit_code == 0
        args, kwargs = mock_watch.call_args
        assert args[0] == project_dir
        assert args[1] == DashboardConfig()

    def test_uses_project_dashboard_config(self, project_dir) -> None:
        (project_dir / ".autopilot.json").write_text(
            json.dumps({"dashboard": {"planning_dir": "plans"}})
        )
        with patch("autopilot.cli.watch.watch_progress", return_value=0) as mock_watch:
            runner.invoke(app, ["watch", str(project_dir)])
        assert mock_watch.call_args[0][1].planning_dir == "plans"

    def test_invalid_config(self, project_dir) -> None:
        (project_dir / ".autopilot.json").write_text(
            json.dumps({"dashboard": {"recent_iterations": 0}})
        )
        result = runner.invoke(app, ["watch", str(project_dir)])
        assert result.exit_code == 2


class TestPauseResumeCommands:
    """Tests for `autopilot pause` and `autopilot resume`."""

    def test_pause(self, project_dir) -> None:
        result = runner.invoke(app, ["pause", "--project-dir", str(project_dir)])
        assert result.exit_code == 0
        assert "Paused." in result.output
        assert (project_dir / ".planning" / ".pause").exists()

    def test_resume(self, project_dir) -> None:
        (project_dir / ".planning" / ".pause").write_bytes(b"")
        result = runner.invoke(app, ["resume", "--project-dir", str(project_dir)])
        assert result.exit_code == 0
        assert "Resumed." in result.output
        assert not (project_dir / ".planning" / ".pause").exists()

    def test_resume_when_not_paused(self, project_dir) -> None:
        result = runner.invoke(app, ["resume", "--project-dir", str(project_dir)])
        assert result.exit_code == 0

    def test_pause_error(self, project_dir) -> None:
        (project_dir / ".autopilot.json").write_text(
            json.dumps({"dashboard": {"planning_dir": "blocked"}})
        )
        (project_dir / "blocked").write_text("")
        result = runner.invoke(app, ["pause", "--project-dir", str(project_dir)])
        assert result.exit_code == 1
        assert "Could not create pause file" in result.output

    def test_debug_flag_accepted(self, project_dir) -> None:
        result = runner.invoke(app, ["--debug", "pause", "--project-dir", str(project_dir)])
        assert result.exit_code == 0


class TestTerminalsCommand:
    """Tests for `autopilot terminals`."""

    def test_lists_and_marks_selected(self) -> None:
        with patch("sys.platform", "linux"), patch("shutil.which", side_effect=only("xterm")):
            result = runner.invoke(app, ["terminals"])
        assert result.exit_code == 0
        assert "Supported terminals on Linux" in result.output
        assert "gnome-terminal" in result.output
        assert "x-terminal-emulator" in result.output
        assert "(selected)" in result.output

    def test_none_available(self) -> None:
        with patch("sys.platform", "darwin"), patch("shutil.which", return_value=None):
            result = runner.invoke(app, ["terminals"])
        assert result.exit_code == 1
        assert "Terminal.app" in result.output
        assert "No supported terminal found" in result.output


class TestDashboardScript:
    """Tests for the script the launcher runs in the dashboard window."""

    def test_script_ships_with_package(self) -> None:
        assert DASHBOARD_SCRIPT.is_file()
        assert DASHBOARD_SCRIPT.name == "progress-watcher.py"

    def test_main_runs_watch(self, project_dir, monkeypatch) -> None:
        spec = importlib.util.spec_from_file_location("progress_watcher", DASHBOARD_SCRIPT)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        monkeypatch.setattr(sys, "argv", ["progress-watcher.py", str(project_dir)])
        with patch("autopilot.cli.watch.watch_progress", return_value=0) as mock_watch:
            with pytest.raises(SystemExit) as exc_info:
                module.main()

        assert exc_info.value.code == 0
        assert mock_watch.call_args[0][0] == project_dir
