"""Runtime settings, read from the environment once at startup."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _optional_path(name: str, default: str) -> Optional[Path]:
    raw = os.getenv(name, default).strip()
    return Path(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    seed_path: Optional[Path] = None
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    environment: str = "production"
    host: str = "127.0.0.1"
    port: int = 3000

    @property
    def debug(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            seed_path=_optional_path("TASKS_SEED_PATH", "./task.json"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=_optional_path("LOG_DIR", "./logs"),
            environment=os.getenv("APP_ENV", "production").strip().lower(),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "3000")),
        )
