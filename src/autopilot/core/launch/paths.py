"""
Path translation for POSIX shells bundled with Windows terminals.

Git Bash (and the ``bash`` that Windows Terminal, cmd and PowerShell hand
off to) expects ``/c/Users/...`` rather than ``C:\\Users\\...``.
"""

from __future__ import annotations

import os
import re

from autopilot.core.launch.models import Platform

# Single ASCII drive letter followed by a separator or end of string.
# UNC and extended-length (\\?\) paths are not recognised and keep their prefix.
_DRIVE_PREFIX = re.compile(r"^([A-Za-z]):(?=/|$)")


def to_posix_shell_path(
    path: str | os.PathLike[str],
    platform: Platform | None = None,
) -> str:
    """
    Convert a native path to the dialect a POSIX shell on the host expects.

    On Windows, backslashes become forward slashes and a leading ``X:``
    becomes ``/x``. On macOS and Linux paths are already POSIX-shaped and are
    returned unchanged. Translation is idempotent.

    Args:
        path: Native filesystem path
        platform: Host platform (defaults to the running platform)

    Returns:
        Path string for a POSIX-style shell

    Examples:
        >>> to_posix_shell_path("C:\\\\Users\\\\a b", Platform.WINDOWS)
        '/c/Users/a b'
        >>> to_posix_shell_path("D:/x/y", Platform.WINDOWS)
        '/d/x/y'
        >>> to_posix_shell_path("/home/me", Platform.LINUX)
        '/home/me'
    """
    value = os.fspath(path)
    if platform is None:
        platform = Platform.current()
    if platform != Platform.WINDOWS:
        return value

    normalized = value.replace("\\", "/")
    match = _DRIVE_PREFIX.match(normalized)
    if match is None:
        return normalized
    return "/" + match.group(1).lower() + normalized[2:]


__all__ = ["to_posix_shell_path"]
