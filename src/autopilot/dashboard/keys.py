"""
Single-key input for the dashboard.

Puts the terminal in cbreak mode so keys arrive without Enter while Ctrl-C
still raises KeyboardInterrupt. Windows uses msvcrt. When stdin is not a
TTY, ``read_key`` just waits out the timeout.
"""

from __future__ import annotations

import os
import sys
import time
from types import TracebackType
from typing import Any, TextIO


class KeyReader:
    """Context manager yielding one lower-cased key at a time."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdin
        self._saved_attrs: Any = None
        self._fd: int | None = None

    @property
    def interactive(self) -> bool:
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    def __enter__(self) -> KeyReader:
        if self.interactive and sys.platform != "win32":
            import termios
            import tty

            self._fd = self.stream.fileno()
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._fd is not None and self._saved_attrs is not None:
            import termios

            termios.tcsetattr(self._fd, termios.TCSAFLUSH, self._saved_attrs)
            self._fd = None
            self._saved_attrs = None

    def read_key(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for a key press."""
        if not self.interactive:
            time.sleep(timeout)
            return None
        if sys.platform == "win32":
            return self._read_key_windows(timeout)
        return self._read_key_posix(timeout)

    def _read_key_posix(self, timeout: float) -> str | None:
        import select

        fd = self.stream.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(fd, 1)
        if not data:
            return None
        return data.decode(errors="ignore").lower() or None

    def _read_key_windows(self, timeout: float) -> str | None:
        import msvcrt

        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if msvcrt.kbhit():  # type: ignore[attr-defined]
                return msvcrt.getwch().lower()  # type: ignore[attr-defined]
            time.sleep(0.05)
        return None


__all__ = ["KeyReader"]
