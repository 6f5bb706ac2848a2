"""Decide whether a flattened record satisfies the search criteria."""

from __future__ import annotations

from typing import Any, Sequence

from peoplefinder.models import SearchCriteria

FIELD_PRIORITY: tuple[str, ...] = (
    "email",
    "username",
    "phone_number",
    "first_name",
    "last_name",
    "full_name",
    "address",
    "country",
    "state",
)


def contains(token: Any, needle: str) -> bool:
    """Substring test that never matches an empty needle or a non-string token."""
    return bool(needle) and isinstance(token, str) and needle in token


def matches(
    record: Sequence[Any],
    criteria: SearchCriteria,
    priority: Sequence[str] = FIELD_PRIORITY,
) -> bool:
    """Return True when any token contains any non-empty criterion value.

    Fields are scanned in ``priority`` order and the scan stops at the first
    hit. Empty fields are skipped.
    """
    for name in priority:
        needle = getattr(criteria, name)
        if not needle:
            continue
        if any(contains(token, needle) for token in record):
            return True
    return False
