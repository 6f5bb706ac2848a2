"""Exceptions raised while searching the data folder."""

from __future__ import annotations

from pathlib import Path


class PeopleFinderError(Exception):
    """Base class for search failures."""


class FileError(PeopleFinderError):
    """Failure tied to a single data file."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path.name}: {message}")
        self.path = path


class FileReadError(FileError):
    """A data file could not be opened or read."""


class ParseError(FileError):
    """A data file holds malformed content."""


class QueryError(FileError):
    """A database file could not be queried."""


class DirectoryError(PeopleFinderError):
    """The data directory itself cannot be listed."""
