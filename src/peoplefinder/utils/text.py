"""Text helpers for turning raw values into match tokens."""

from __future__ import annotations

import re
from typing import Any, Iterable, List

_SEPARATORS = re.compile(r"[\s,]+")


def split_line(line: str) -> List[str]:
    """Split a text line on runs of whitespace and/or commas, lowercased."""
    return [token.lower() for token in _SEPARATORS.split(line)]


def lower_strings(values: Iterable[Any]) -> tuple[Any, ...]:
    """Lowercase string values, keeping anything else as-is."""
    return tuple(value.lower() if isinstance(value, str) else value for value in values)
