"""Shared fixtures for PeopleFinder tests."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Callable

import pytest

PEOPLE_COLUMNS = (
    "first_name",
    "last_name",
    "email",
    "username",
    "phone",
    "address",
    "country",
    "state",
)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Data folder with a text file, a CSV file and a matching image."""
    folder = tmp_path / "data"
    folder.mkdir()
    (folder / "a.txt").write_text("John,Doe,john@x.com\n", encoding="utf-8")
    (folder / "b.csv").write_text("name,email\nJane Doe,jane@x.com\n", encoding="utf-8")
    (folder / "pic_john.jpg").write_bytes(b"\xff\xd8\xff\xe0fakejpeg")
    return folder


@pytest.fixture
def make_people_db() -> Callable[..., Path]:
    """Factory creating a SQLite file with a ``people`` table."""

    def _make(path: Path, rows: list[tuple], columns: tuple[str, ...] = PEOPLE_COLUMNS) -> Path:
        conn = sqlite3.connect(path)
        try:
            conn.execute(f"CREATE TABLE people ({', '.join(columns)})")
            placeholders = ", ".join("?" for _ in columns)
            conn.executemany(f"INSERT INTO people VALUES ({placeholders})", rows)
            conn.commit()
        finally:
            conn.close()
        return path

    return _make
