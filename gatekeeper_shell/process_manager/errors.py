"""Failures surfaced by the gatekeeper supervisor.

Every error is local to the call that raised it; none leave the supervisor
in a broken state.
"""

from __future__ import annotations


class SupervisorError(Exception):
    """Base class for all supervisor failures."""


class AlreadyRunning(SupervisorError):
    def __init__(self) -> None:
        super().__init__("gatekeeper already running")


class NotRunning(SupervisorError):
    def __init__(self) -> None:
        super().__init__("gatekeeper not running")


class _ReasonError(SupervisorError):
    template = "{reason}"

    def __init__(self, reason: object) -> None:
        self.reason = str(reason)
        super().__init__(self.template.format(reason=self.reason))


class SpawnFailed(_ReasonError):
    template = "failed to spawn gatekeeper: {reason}"


class TerminateFailed(_ReasonError):
    template = "failed to kill gatekeeper: {reason}"


class WaitFailed(_ReasonError):
    template = "failed to wait on gatekeeper: {reason}"


class CheckFailed(_ReasonError):
    template = "error checking status: {reason}"
