from __future__ import annotations

import sys
import time

import pytest

from gatekeeper_shell.models import WorkerCommand
from gatekeeper_shell.process_manager.supervisor import WorkerSupervisor

SLEEPER = WorkerCommand(
    executable=sys.executable,
    args=("-c", "import time; time.sleep(60)"),
)


class FakeProcess:
    """Stands in for subprocess.Popen so OS failures can be simulated."""

    def __init__(
        self,
        pid: int = 4242,
        exit_code: int | None = None,
        kill_error: OSError | None = None,
        wait_error: OSError | None = None,
        poll_error: OSError | None = None,
    ) -> None:
        self.pid = pid
        self.exit_code = exit_code
        self.kill_error = kill_error
        self.wait_error = wait_error
        self.poll_error = poll_error
        self.calls: list[str] = []

    def kill(self) -> None:
        self.calls.append("kill")
        if self.kill_error:
            raise self.kill_error
        self.exit_code = -9

    def wait(self) -> int:
        self.calls.append("wait")
        if self.wait_error:
            raise self.wait_error
        return self.exit_code if self.exit_code is not None else 0

    def poll(self) -> int | None:
        self.calls.append("poll")
        if self.poll_error:
            raise self.poll_error
        return self.exit_code


class FakeSpawner:
    def __init__(self, *processes: FakeProcess, delay: float = 0.0) -> None:
        self.processes = list(processes)
        self.delay = delay
        self.calls: list[tuple[list[str], str]] = []

    def __call__(self, argv: list[str], cwd: str) -> FakeProcess:
        self.calls.append((argv, cwd))
        if self.delay:
            time.sleep(self.delay)
        if self.processes:
            return self.processes.pop(0)
        return FakeProcess(pid=1000 + len(self.calls))


@pytest.fixture
def real_supervisor(tmp_path):
    sv = WorkerSupervisor(command=SLEEPER, app_dir=tmp_path)
    yield sv
    sv.shutdown()
