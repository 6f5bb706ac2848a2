"""Reduce structured records to ordered token sequences."""

from __future__ import annotations

from typing import Any, Mapping

from peoplefinder.utils.text import lower_strings, split_line

Record = tuple[Any, ...]


def flatten_line(line: str) -> Record:
    return tuple(split_line(line))


def flatten_row(row: Mapping[Any, Any]) -> Record:
    """Flatten a CSV row produced by :class:`csv.DictReader`.

    Cells past the header are collected by the reader as a list under the
    ``None`` key and are appended; cells missing from a short row are ``None``
    and are dropped.
    """
    tokens: list[str] = []
    for value in row.values():
        if value is None:
            continue
        if isinstance(value, list):
            tokens.extend(str(item).lower() for item in value)
        else:
            tokens.append(str(value).lower())
    return tuple(tokens)


def flatten_object(item: Mapping[str, Any]) -> Record:
    """Values of a JSON object in key order, strings lowercased."""
    return lower_strings(item.values())
