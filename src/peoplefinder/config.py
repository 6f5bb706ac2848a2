"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DATA_DIR_ENV = "PEOPLEFINDER_DATA_DIR"
DEFAULT_PORT = 3000


def _get_default_data_dir() -> Path:
    """Data folder from the environment, else ``data`` in the working directory."""
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path("data")


@dataclass(slots=True)
class AppConfig:
    data_dir: Path | None = None
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    max_workers: int = 8

    def __post_init__(self) -> None:
        if self.data_dir is None:
            self.data_dir = _get_default_data_dir()
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    def resolve_data_dir(self, base_dir: Path | None = None) -> Path:
        if self.data_dir is None:
            self.data_dir = _get_default_data_dir()
        if Path(self.data_dir).is_absolute() or base_dir is None:
            return Path(self.data_dir)
        return base_dir / self.data_dir
