"""Settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

STORE_BACKENDS = ("file", "sqlite")


def _env(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None:
        return default
    if raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 3000

    store: str = "file"
    data_file: Path = Path("./data/tasks.json")
    db_path: Path = Path("./data/tasks.db")

    log_level: str = "INFO"
    # None disables the JSON log file
    log_dir: Optional[Path] = Path("./logs")

    def __post_init__(self) -> None:
        if self.store not in STORE_BACKENDS:
            raise ValueError(f"TASKS_STORE must be one of: {', '.join(STORE_BACKENDS)} (got {self.store!r})")


def load_settings() -> Settings:
    return Settings(
        host=_env("HOST", "127.0.0.1"),
        port=_env_int("PORT", 3000),
        store=_env("TASKS_STORE", "file").strip().lower(),
        data_file=_env_path("TASKS_DATA_FILE", Path("./data/tasks.json")) or Path("./data/tasks.json"),
        db_path=_env_path("DB_PATH", Path("./data/tasks.db")) or Path("./data/tasks.db"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        log_dir=_env_path("LOG_DIR", Path("./logs")),
    )
