"""
Pytest configuration and shared fixtures.

Provides temp project directories, planning file writers, a recording
spawner and a capturing console. Platform and process creation are always
faked; no test ever opens a real terminal window.
"""

import io
from pathlib import Path

import pytest
from rich.console import Console

from autopilot.core.launch import SpawnSpec

# ==============================================================================
# Environment isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at an empty directory so user config never leaks in."""
    config_home = tmp_path / "xdg"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def project_dir(tmp_path):
    """
    Provide a temporary project directory with common structure.

    Creates:
    - .planning/ directory
    - bin/worker.sh (an executable worker script)
    """
    project = tmp_path / "project"
    project.mkdir()
    (project / ".planning").mkdir()

    bin_dir = project / "bin"
    bin_dir.mkdir()
    worker = bin_dir / "worker.sh"
    worker.write_text("#!/bin/bash\necho working\n")
    worker.chmod(0o755)

    return project


@pytest.fixture
def user_config_dir(isolated_config_home):
    """Provide the XDG_CONFIG_HOME/autopilot directory."""
    config_dir = isolated_config_home / "autopilot"
    config_dir.mkdir(parents=True)
    return config_dir


# ==============================================================================
# Planning file helpers
# ==============================================================================


_SAMPLE_STATE = """\
# Project State

Phase: 2 of 4 (Build)
Plan: 02-03
Status: In progress
Last activity: 2026-01-15 - Finished plan 02-02

Progress: [=====-----] 50%
"""

_SAMPLE_LOG = """\
Iteration: 1
Timestamp: 2026-01-15T10:00:00Z
Task: 02-01
Status: SUCCESS
Duration: 4m 12s
Summary: Added the parser
---
Iteration: 2
Timestamp: 2026-01-15T10:05:00Z
Task: 02-02
Status: FAILURE
Duration: 1m 3s
Summary: Tests failed
---
Iteration: 3
Timestamp: 2026-01-15T10:07:00Z
Task: 02-03
Status: RUNNING
Duration: -
Summary: -
"""


@pytest.fixture
def sample_state():
    """STATE.md content with every field set."""
    return _SAMPLE_STATE


@pytest.fixture
def sample_log():
    """ralph.log with two finished iterations and one still running."""
    return _SAMPLE_LOG


@pytest.fixture
def write_planning(project_dir):
    """Return a helper that writes STATE.md and/or ralph.log into .planning/."""

    def _write(state: str | None = None, log: str | None = None) -> Path:
        planning = project_dir / ".planning"
        if state is not None:
            (planning / "STATE.md").write_text(state)
        if log is not None:
            (planning / "ralph.log").write_text(log)
        return planning

    return _write


# ==============================================================================
# Launch Fixtures
# ==============================================================================


class RecordingSpawner:
    """Spawner stand-in that records every SpawnSpec and hands out fake pids."""

    def __init__(self, fail_on: set[int] | None = None, first_pid: int = 4242):
        self.specs: list[SpawnSpec] = []
        self.fail_on = fail_on or set()
        self._next_pid = first_pid

    def __call__(self, spec: SpawnSpec) -> int:
        call_number = len(self.specs) + 1
        self.specs.append(spec)
        if call_number in self.fail_on:
            raise OSError(f"cannot spawn {spec.terminal}")
        pid = self._next_pid
        self._next_pid += 1
        return pid


@pytest.fixture
def spawner():
    """A spawner that succeeds on every call."""
    return RecordingSpawner()


@pytest.fixture
def console():
    """A rich Console writing to a buffer; read it with ``console.file.getvalue()``."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def failing_spawner():
    """Return a factory for spawners that raise OSError on the given call numbers."""

    def _make(*call_numbers: int) -> RecordingSpawner:
        return RecordingSpawner(fail_on=set(call_numbers))

    return _make
