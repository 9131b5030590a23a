"""
Service layer for autopilot.

Services compose the core packages into the operations the CLI exposes.

Design principles:
- Every user-facing action maps to a service method.
- Methods accept typed inputs and return typed outcomes.
- User-facing messages go through an injected rich Console, never sys.exit.
- Services are created via factory methods that accept configuration.

Modules:
    launch: LaunchService resolves a terminal and opens the worker and dashboard.
"""

from autopilot.core.services.launch import LaunchService, Spawner

__all__ = ["LaunchService", "Spawner"]
