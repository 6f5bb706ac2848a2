"""Search orchestration over the data folder."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping

from peoplefinder.errors import FileError
from peoplefinder.ingestion.images import find_related_images
from peoplefinder.ingestion.readers import RECORD_READERS, SQLITE_EXTENSIONS, query_people
from peoplefinder.matching.predicate import matches
from peoplefinder.models import MatchResult, SearchCriteria, SearchResults
from peoplefinder.utils.files import extension, list_data_files

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def is_searchable(path: Path) -> bool:
    ext = extension(path)
    return ext in RECORD_READERS or ext in SQLITE_EXTENSIONS


@dataclass(slots=True)
class FileOutcome:
    """Matches found in one file, or the reason the file was dropped."""

    path: Path
    matches: List[MatchResult] = field(default_factory=list)
    error: str | None = None


def search_file(path: Path, criteria: SearchCriteria) -> FileOutcome:
    """Search one file; any failure empties that file's contribution."""
    found: List[MatchResult] = []
    try:
        ext = extension(path)
        if ext in SQLITE_EXTENSIONS:
            for row in query_people(path, criteria):
                found.append(MatchResult(source=path.name, data=row))
        else:
            for payload, record in RECORD_READERS[ext](path):
                if matches(record, criteria):
                    found.append(MatchResult(source=path.name, data=payload))
    except FileError as exc:
        LOGGER.warning("Skipping %s: %s", path.name, exc)
        return FileOutcome(path, error=str(exc))
    except Exception as exc:
        LOGGER.exception("Unexpected failure while searching %s", path.name)
        return FileOutcome(path, error=f"{path.name}: {exc}")

    LOGGER.debug("%s: %d match(es)", path.name, len(found))
    return FileOutcome(path, matches=found)


class Searcher:
    """Runs one search across every supported file of a data folder."""

    def __init__(self, data_dir: Path, *, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        self.data_dir = Path(data_dir)
        self.max_workers = max(1, max_workers)

    def search(self, criteria: SearchCriteria) -> SearchResults:
        """Search the data folder.

        Raises :class:`~peoplefinder.errors.DirectoryError` when the folder
        cannot be listed. Results are ordered by file name, then by position
        within the file.
        """
        files = list_data_files(self.data_dir)
        images = find_related_images(files, criteria)

        if criteria.is_empty():
            LOGGER.info("Empty search criteria, nothing to match")
            return SearchResults(images=images)

        targets = [path for path in files if is_searchable(path)]
        LOGGER.info("Searching %d file(s) in %s", len(targets), self.data_dir)

        # map() yields in submission order and only returns once every task
        # has settled.
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            outcomes = list(pool.map(lambda path: search_file(path, criteria), targets))

        results = SearchResults(images=images)
        for outcome in outcomes:
            if outcome.error is not None:
                results.failed_files.append(outcome.path.name)
            results.results.extend(outcome.matches)
        return results


def search_directory(
    data_dir: Path,
    raw: Mapping[str, Any] | None,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> SearchResults:
    """Normalize ``raw`` criteria and search ``data_dir``."""
    criteria = SearchCriteria.from_mapping(raw)
    return Searcher(data_dir, max_workers=max_workers).search(criteria)
