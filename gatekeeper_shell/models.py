from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# WorkerStatus: what the front end renders for the gatekeeper worker
# ---------------------------------------------------------------------------

class WorkerStatus(str, enum.Enum):
    RUNNING = "running"
    STOPPED = "stopped"


# ---------------------------------------------------------------------------
# WorkerCommand: the fixed command line used to launch the worker
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WorkerCommand:
    executable: str = "bun"
    args: tuple[str, ...] = ("run", "gatekeeper/src/index.ts")
    cwd: str = "."  # relative to the install location

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def resolve_cwd(self, app_dir: str | Path) -> str:
        """Join a relative ``cwd`` onto the install location.

        Absolute paths are used as-is.
        """
        cwd = Path(self.cwd)
        if cwd.is_absolute():
            return str(cwd)
        return str((Path(app_dir) / cwd).resolve())

    def describe(self) -> str:
        return " ".join(self.argv)
