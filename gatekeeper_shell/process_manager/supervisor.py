"""Worker supervisor: owns the single gatekeeper process and its lifecycle."""

from __future__ import annotations

import logging
import os
import subprocess
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from gatekeeper_shell.models import WorkerCommand, WorkerStatus
from gatekeeper_shell.process_manager.errors import (
    AlreadyRunning,
    CheckFailed,
    NotRunning,
    SpawnFailed,
    SupervisorError,
    TerminateFailed,
    WaitFailed,
)

log = logging.getLogger(__name__)


class ProcessHandle(Protocol):
    """The parts of :class:`subprocess.Popen` the supervisor relies on."""

    pid: int

    def kill(self) -> None: ...

    def wait(self) -> int: ...

    def poll(self) -> int | None: ...


Spawner = Callable[..., ProcessHandle]


class WorkerSupervisor:
    """Starts, stops and polls exactly zero or one gatekeeper process.

    All state lives in ``_process``.  Every read or write of it happens with
    ``_lock`` held, including the blocking OS calls, so concurrent callers
    serialize and can never spawn a second worker or kill the same one
    twice.
    """

    def __init__(
        self,
        command: WorkerCommand | None = None,
        app_dir: str | Path | None = None,
        spawn: Spawner = subprocess.Popen,
    ) -> None:
        self.command = command or WorkerCommand()
        self.app_dir = str(app_dir) if app_dir is not None else os.getcwd()
        self._spawn = spawn
        self._lock = threading.Lock()
        self._process: ProcessHandle | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> int:
        """Spawn the worker and return its pid.

        Raises AlreadyRunning if a handle is tracked, whether or not the
        process behind it is still alive.
        """
        with self._lock:
            if self._process is not None:
                raise AlreadyRunning()

            cwd = self.command.resolve_cwd(self.app_dir)
            try:
                process = self._spawn(self.command.argv, cwd=cwd)
            except (OSError, ValueError, subprocess.SubprocessError) as exc:
                log.error("Failed to spawn '%s' in %s: %s",
                          self.command.describe(), cwd, exc)
                raise SpawnFailed(exc) from exc

            self._process = process
            log.info("Started gatekeeper (pid=%s): %s",
                     process.pid, self.command.describe())
            return process.pid

    def stop(self) -> None:
        """Kill the worker and block until it has been reaped."""
        with self._lock:
            # Claim the handle first: whatever happens next, it is not
            # put back.
            process, self._process = self._process, None
            if process is None:
                raise NotRunning()

            try:
                process.kill()
            except OSError as exc:
                log.warning(
                    "Failed to kill gatekeeper (pid=%s); it is no longer "
                    "tracked: %s", process.pid, exc,
                )
                raise TerminateFailed(exc) from exc

            try:
                code = process.wait()
            except OSError as exc:
                log.warning("Failed to reap gatekeeper (pid=%s): %s",
                            process.pid, exc)
                raise WaitFailed(exc) from exc

            log.info("Stopped gatekeeper (pid=%s, exit=%s)", process.pid, code)

    def status(self) -> WorkerStatus:
        """Report whether the worker is alive, dropping it if it has exited."""
        with self._lock:
            process = self._process
            if process is None:
                return WorkerStatus.STOPPED

            try:
                code = process.poll()
            except OSError as exc:
                log.warning("Liveness check failed for gatekeeper (pid=%s): %s",
                            process.pid, exc)
                raise CheckFailed(exc) from exc

            if code is None:
                return WorkerStatus.RUNNING

            log.info("Gatekeeper (pid=%s) exited on its own with code %s",
                     process.pid, code)
            self._process = None
            return WorkerStatus.STOPPED

    def shutdown(self) -> bool:
        """Stop the worker if one is tracked.

        Returns True if a worker was stopped, False if there was none.
        """
        try:
            self.stop()
        except NotRunning:
            return False
        except SupervisorError:
            log.exception("Failed to stop gatekeeper during shutdown")
            raise
        return True

    @property
    def pid(self) -> int | None:
        with self._lock:
            return self._process.pid if self._process is not None else None
