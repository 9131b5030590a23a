"""
Terminal resolution: first registry entry whose executable is on PATH.

Candidates are never scored or benchmarked. A probe that errors counts as
"not available" and resolution moves on to the next entry.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable

from autopilot.core.launch.models import Platform, TerminalCandidate
from autopilot.core.launch.registry import TERMINAL_REGISTRY, Registry, candidates_for

logger = logging.getLogger(__name__)

Probe = Callable[[str], bool]


def probe_executable(name: str) -> bool:
    """Check whether ``name`` resolves to an executable on the search path."""
    return shutil.which(name) is not None


def _is_available(candidate: TerminalCandidate, probe: Probe) -> bool:
    try:
        return bool(probe(candidate.name))
    except Exception as e:
        logger.debug("Probe for %s failed, treating as unavailable: %s", candidate.name, e)
        return False


def resolve_terminal(
    platform: Platform,
    *,
    registry: Registry = TERMINAL_REGISTRY,
    probe: Probe = probe_executable,
) -> TerminalCandidate | None:
    """
    Find the first usable terminal for a platform.

    Args:
        platform: Platform whose registry row is searched
        registry: Terminal table (defaults to the built-in registry)
        probe: Availability check, called with each candidate's name

    Returns:
        The first candidate whose probe succeeds, or None

    Examples:
        >>> candidate = resolve_terminal(Platform.LINUX, probe=lambda n: n == "xterm")
        >>> candidate.name
        'xterm'
    """
    for candidate in candidates_for(platform, registry):
        if _is_available(candidate, probe):
            logger.debug("Resolved terminal %s for %s", candidate.name, platform.value)
            return candidate
        logger.debug("Terminal %s not available", candidate.name)
    return None


def probe_terminals(
    platform: Platform,
    *,
    registry: Registry = TERMINAL_REGISTRY,
    probe: Probe = probe_executable,
) -> list[tuple[TerminalCandidate, bool]]:
    """Probe every candidate for a platform, for diagnostics."""
    return [
        (candidate, _is_available(candidate, probe))
        for candidate in candidates_for(platform, registry)
    ]


__all__ = ["Probe", "probe_executable", "probe_terminals", "resolve_terminal"]
