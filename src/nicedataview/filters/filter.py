"""Filter value objects applied by data readers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol


class Filter(Protocol):
    def matches(self, row: Mapping[str, Any]) -> bool:
        ...


@dataclass(frozen=True)
class Equals:
    """``row[field] == value``.

    A string ``value`` also matches a non-string row value with the same
    text, so raw query values compare naturally against typed rows.
    """

    field: str
    value: Any

    def matches(self, row: Mapping[str, Any]) -> bool:
        actual = row.get(self.field)
        if actual == self.value:
            return True
        if isinstance(self.value, str) and actual is not None and not isinstance(actual, str):
            return str(actual) == self.value
        return False


@dataclass(frozen=True)
class Like:
    """Substring match; case-insensitive unless ``case_sensitive`` is True."""

    field: str
    value: str
    case_sensitive: Optional[bool] = None

    def matches(self, row: Mapping[str, Any]) -> bool:
        actual = row.get(self.field)
        if actual is None:
            return False
        if self.case_sensitive:
            return self.value in str(actual)
        return self.value.casefold() in str(actual).casefold()


class All:
    """Conjunction of filters. An empty ``All`` matches every row."""

    __slots__ = ("filters",)

    def __init__(self, *filters: Filter) -> None:
        self.filters: tuple[Filter, ...] = tuple(filters)

    def matches(self, row: Mapping[str, Any]) -> bool:
        return all(f.matches(row) for f in self.filters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, All):
            return NotImplemented
        return self.filters == other.filters

    def __hash__(self) -> int:
        return hash(self.filters)

    def __repr__(self) -> str:
        return f"All{self.filters!r}"
