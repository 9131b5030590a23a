#!/usr/bin/env python3
"""
Autopilot progress watcher.

Opened by ``autopilot launch`` in its own terminal window:

    python progress-watcher.py [project-root]

Equivalent to ``autopilot watch [project-root]``.
"""

import sys

from autopilot.cli import app


def main() -> None:
    app(args=["watch", *sys.argv[1:]], prog_name="autopilot")


if __name__ == "__main__":
    main()
