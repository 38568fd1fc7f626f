"""Gatekeeper process manager: supervises the single gatekeeper worker.

Exposes three MCP tools:
  - start_gatekeeper:  Launch the gatekeeper (fails if one is tracked)
  - stop_gatekeeper:   Kill the gatekeeper and wait for it to exit
  - gatekeeper_status: Report "running" or "stopped"

Can run standalone:
    python -m gatekeeper_shell.process_manager
"""

from gatekeeper_shell.process_manager.errors import (
    AlreadyRunning,
    CheckFailed,
    NotRunning,
    SpawnFailed,
    SupervisorError,
    TerminateFailed,
    WaitFailed,
)
from gatekeeper_shell.process_manager.server import create_server
from gatekeeper_shell.process_manager.supervisor import WorkerSupervisor

__all__ = [
    "AlreadyRunning",
    "CheckFailed",
    "NotRunning",
    "SpawnFailed",
    "SupervisorError",
    "TerminateFailed",
    "WaitFailed",
    "WorkerSupervisor",
    "create_server",
]
