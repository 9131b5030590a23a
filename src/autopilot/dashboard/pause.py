"""
Pause marker shared between the dashboard and the worker.

The worker checks for a zero-byte ``.planning/.pause`` file between
iterations and waits while it exists.
"""

from pathlib import Path


class PauseFlag:
    """Create, remove and check the pause marker file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def is_paused(self) -> bool:
        return self.path.exists()

    def pause(self) -> None:
        """Create the marker (and its directory)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(b"")

    def resume(self) -> None:
        """Remove the marker; already resumed is fine."""
        self.path.unlink(missing_ok=True)


__all__ = ["PauseFlag"]
