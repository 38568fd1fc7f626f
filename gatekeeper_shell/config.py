from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8902


@dataclass(frozen=True)
class Config:
    app_dir: str = str(Path.cwd())
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    def resolve_app_dir(self) -> str:
        """Return the install location as an absolute path.

        Raises ValueError if the directory does not exist.
        """
        resolved = Path(self.app_dir).expanduser().resolve()
        if not resolved.is_dir():
            raise ValueError(f"App directory does not exist: {resolved}")
        return str(resolved)

    @classmethod
    def from_env(cls, env_path: str | Path | None = None) -> Config:
        load_dotenv(env_path)

        raw_port = os.getenv("PROCESS_MANAGER_PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"PROCESS_MANAGER_PORT is not a number: {raw_port!r}") from None

        return cls(
            app_dir=os.getenv("GATEKEEPER_APP_DIR", str(Path.cwd())),
            host=os.getenv("PROCESS_MANAGER_HOST", DEFAULT_HOST),
            port=port,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
