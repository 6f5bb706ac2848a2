"""Format readers for the supported data files.

Each in-memory reader lazily yields ``(payload, record)`` pairs where the
payload is the original entry and the record is its flattened token tuple.
The SQLite reader matches inside the query and yields payload rows only.
"""

from __future__ import annotations

import csv
import json
import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Tuple

from peoplefinder.errors import FileReadError, ParseError, QueryError
from peoplefinder.matching.flatten import Record, flatten_line, flatten_object, flatten_row
from peoplefinder.models import SearchCriteria

LOGGER = logging.getLogger(__name__)

PEOPLE_TABLE = "people"

# Column of the people table -> criteria attribute it is compared with.
PEOPLE_COLUMNS: Dict[str, str] = {
    "email": "email",
    "username": "username",
    "phone": "phone_number",
    "first_name": "first_name",
    "last_name": "last_name",
    "address": "address",
    "country": "country",
    "state": "state",
}

SQLITE_EXTENSIONS = frozenset({".db", ".sqlite"})
FOLD_FUNCTION = "pf_lower"

RecordReader = Callable[[Path], Iterator[Tuple[Any, Record]]]


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8 text ({exc})") from exc
    except OSError as exc:
        raise FileReadError(path, str(exc)) from exc


def iter_text_records(path: Path) -> Iterator[Tuple[str, Record]]:
    """Yield every line of a text file, blank lines included."""
    for line in _read_text(path).split("\n"):
        line = line.rstrip("\r")
        yield line, flatten_line(line)


def iter_csv_records(path: Path) -> Iterator[Tuple[Dict[Any, Any], Record]]:
    """Stream CSV rows keyed by the header row."""
    try:
        handle = path.open(encoding="utf-8", newline="")
    except OSError as exc:
        raise FileReadError(path, str(exc)) from exc

    with handle:
        try:
            for row in csv.DictReader(handle):
                yield row, flatten_row(row)
        except (csv.Error, UnicodeDecodeError) as exc:
            raise ParseError(path, f"malformed CSV ({exc})") from exc


def _is_object(item: Any, path: Path, where: str) -> bool:
    if isinstance(item, dict):
        return True
    LOGGER.warning("Skipping non-object entry at %s in %s", where, path.name)
    return False


def iter_json_records(path: Path) -> Iterator[Tuple[Dict[str, Any], Record]]:
    """Yield the objects of a JSON file holding a top-level array."""
    try:
        data = json.loads(_read_text(path))
    except json.JSONDecodeError as exc:
        raise ParseError(path, f"malformed JSON ({exc})") from exc

    if not isinstance(data, list):
        LOGGER.warning("JSON data from file %s is not an array, skipping", path.name)
        return

    for index, item in enumerate(data):
        if _is_object(item, path, f"index {index}"):
            yield item, flatten_object(item)


def iter_jsonl_records(path: Path) -> Iterator[Tuple[Dict[str, Any], Record]]:
    """Yield one object per non-blank line; malformed lines are skipped."""
    for lineno, line in enumerate(_read_text(path).split("\n"), start=1):
        if not line.strip():
            continue
        try:
            item = json.loads(line)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Error parsing JSON line %s from file %s: %s", lineno, path.name, exc)
            continue
        if _is_object(item, path, f"line {lineno}"):
            yield item, flatten_object(item)


RECORD_READERS: Dict[str, RecordReader] = {
    ".txt": iter_text_records,
    ".csv": iter_csv_records,
    ".json": iter_json_records,
    ".jsonl": iter_jsonl_records,
}


def build_people_query(columns: List[str], criteria: SearchCriteria) -> Tuple[str, List[str]] | None:
    """Build a parameterized query over the available ``people`` columns.

    Every non-empty criterion adds one ``instr`` clause, so the values are
    bound and matched literally. Columns are lowercased by a Python function
    registered on the connection, since SQLite's ``LOWER`` only folds ASCII.
    Returns ``None`` when no clause applies.
    """
    available = {column.lower() for column in columns}
    clauses: List[str] = []
    params: List[str] = []

    for column, attr in PEOPLE_COLUMNS.items():
        value = getattr(criteria, attr)
        if value and column in available:
            clauses.append(f"instr({FOLD_FUNCTION}({column}), ?) > 0")
            params.append(value)

    if criteria.full_name and {"first_name", "last_name"} <= available:
        clauses.append(
            f"instr({FOLD_FUNCTION}(first_name) || ' ' || {FOLD_FUNCTION}(last_name), ?) > 0"
        )
        params.append(criteria.full_name)

    if not clauses:
        return None
    return f"SELECT * FROM {PEOPLE_TABLE} WHERE " + " OR ".join(clauses), params


def _fold(value: Any) -> str | None:
    """Lowercase a column value the way search criteria are lowercased."""
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    return str(value).lower()


def _plain_value(value: Any) -> Any:
    """Text for BLOB values: decoded when UTF-8, hex otherwise."""
    if not isinstance(value, bytes):
        return value
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return value.hex()


def _connect_read_only(path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(f"{path.resolve().as_uri()}?mode=ro", uri=True)
    conn.create_function(FOLD_FUNCTION, 1, _fold, deterministic=True)
    conn.row_factory = sqlite3.Row
    return conn


def query_people(path: Path, criteria: SearchCriteria) -> Iterator[Dict[str, Any]]:
    """Yield rows of the ``people`` table that match ``criteria``."""
    try:
        conn = _connect_read_only(path)
    except sqlite3.Error as exc:
        raise QueryError(path, f"cannot open database ({exc})") from exc

    with closing(conn):
        try:
            columns = [row["name"] for row in conn.execute(f"PRAGMA table_info({PEOPLE_TABLE})")]
            if not columns:
                raise QueryError(path, f"no '{PEOPLE_TABLE}' table")
            query = build_people_query(columns, criteria)
            if query is None:
                return
            sql, params = query
            LOGGER.debug("Querying %s: %s %s", path.name, sql, params)
            for row in conn.execute(sql, params):
                yield {key: _plain_value(row[key]) for key in row.keys()}
        except sqlite3.Error as exc:
            raise QueryError(path, str(exc)) from exc
