"""Core PeopleFinder data models."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, List, Mapping

# Attribute name -> form/JSON field name.
WIRE_NAMES: dict[str, str] = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "phone_number": "phoneNumber",
    "address": "address",
    "country": "country",
    "state": "state",
    "username": "username",
}


def _normalize(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


@dataclass(slots=True, frozen=True)
class SearchCriteria:
    """Normalized search fields; every value is lowercase or empty."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    address: str = ""
    country: str = ""
    state: str = ""
    username: str = ""

    def __post_init__(self) -> None:
        for item in fields(self):
            object.__setattr__(self, item.name, _normalize(getattr(self, item.name)))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "SearchCriteria":
        """Build criteria from wire (camelCase) or attribute names.

        Missing and ``None`` values become empty strings.
        """
        raw = raw or {}
        values = {}
        for attr, wire in WIRE_NAMES.items():
            value = raw.get(wire)
            if value is None:
                value = raw.get(attr)
            values[attr] = value
        return cls(**values)

    @property
    def full_name(self) -> str:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return ""

    def is_empty(self) -> bool:
        return not any(getattr(self, attr) for attr in WIRE_NAMES)

    def to_wire(self) -> dict[str, str]:
        return {wire: getattr(self, attr) for attr, wire in WIRE_NAMES.items()}


@dataclass(slots=True)
class MatchResult:
    """A matching record paired with the file it came from."""

    source: str
    data: Any


@dataclass(slots=True)
class SearchResults:
    results: List[MatchResult] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    failed_files: List[str] = field(default_factory=list)
