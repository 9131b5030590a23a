"""
Parsers for the worker's plain-text planning files.

STATE.md is scanned for ``Key: value`` lines. ralph.log is a sequence of
blocks separated by ``---`` lines, one block per iteration.
"""

import re

from autopilot.dashboard.models import IterationEntry, PlanningState

_STATE_FIELDS = {
    "Phase:": "phase",
    "Plan:": "plan",
    "Status:": "status",
    "Last activity:": "last_activity",
    "Progress:": "progress",
}

_LOG_FIELDS = {
    "Iteration:": "iteration",
    "Timestamp:": "timestamp",
    "Task:": "task",
    "Status:": "status",
    "Duration:": "duration",
    "Summary:": "summary",
}

_BLOCK_SEPARATOR = re.compile(r"^---[ \t]*$", re.MULTILINE)


def _match_field(line: str, fields: dict[str, str]) -> tuple[str, str] | None:
    for prefix, name in fields.items():
        if line.startswith(prefix):
            return name, line[len(prefix):].strip()
    return None


def parse_state(content: str) -> PlanningState:
    """
    Parse STATE.md into a PlanningState.

    Missing fields stay empty; a repeated field keeps its last value.

    Example:
        >>> parse_state("Phase: 2 of 4\\nStatus: In progress").phase
        '2 of 4'
    """
    values: dict[str, str] = {}
    for line in content.splitlines():
        if match := _match_field(line, _STATE_FIELDS):
            name, value = match
            values[name] = value
    return PlanningState(**values)


def parse_log(content: str) -> list[IterationEntry]:
    """
    Parse ralph.log into iteration entries, oldest first.

    Blocks without an ``Iteration:`` line are skipped.
    """
    entries: list[IterationEntry] = []
    normalized = content.replace("\r\n", "\n")
    for block in _BLOCK_SEPARATOR.split(normalized):
        if not block.strip():
            continue
        values: dict[str, str] = {}
        for line in block.splitlines():
            if match := _match_field(line, _LOG_FIELDS):
                name, value = match
                values[name] = value
        if values.get("iteration"):
            entries.append(IterationEntry(**values))
    return entries


__all__ = ["parse_log", "parse_state"]
