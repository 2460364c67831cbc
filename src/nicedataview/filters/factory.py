"""Filter factories: raw query value -> filter object."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from nicedataview.exceptions import IncorrectValueError
from nicedataview.filters.filter import Equals, Filter, Like


class FilterFactory(Protocol):
    def create(self, field: str, value: str) -> Optional[Filter]:
        ...


@dataclass(frozen=True)
class EqualsFilterFactory:
    """Build ``Equals`` filters, optionally converting the raw value first.

    Attributes:
        converter: Callable applied to the raw value (e.g. ``int``). A
            ``ValueError`` or ``TypeError`` from it becomes
            ``IncorrectValueError``.
    """

    converter: Optional[Callable[[str], Any]] = None

    def create(self, field: str, value: str) -> Optional[Filter]:
        if not value:
            return None
        if self.converter is None:
            return Equals(field, value)
        try:
            converted = self.converter(value)
        except (TypeError, ValueError) as exc:
            raise IncorrectValueError(f"Invalid value {value!r} for {field!r}.") from exc
        return Equals(field, converted)


@dataclass(frozen=True)
class LikeFilterFactory:
    case_sensitive: Optional[bool] = None

    def create(self, field: str, value: str) -> Optional[Filter]:
        return Like(field, value, self.case_sensitive)
