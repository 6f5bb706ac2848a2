"""Utility helpers for working with the data folder."""

from __future__ import annotations

from pathlib import Path
from typing import List

from peoplefinder.errors import DirectoryError

IMAGE_EXTENSIONS = frozenset({".jpg", ".png"})


def list_data_files(data_dir: Path) -> List[Path]:
    """Return the regular files directly inside ``data_dir``, sorted by name."""
    try:
        entries = sorted(Path(data_dir).iterdir(), key=lambda item: item.name)
    except OSError as exc:
        raise DirectoryError(f"Unable to list data directory {data_dir}: {exc}") from exc
    return [entry for entry in entries if entry.is_file()]


def extension(path: Path) -> str:
    return path.suffix.lower()


def is_image(path: Path) -> bool:
    return extension(path) in IMAGE_EXTENSIONS
