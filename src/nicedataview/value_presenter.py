"""Turn cell values into display text."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Protocol

from nicedataview.exceptions import UnsupportedValueTypeError


class ValuePresenter(Protocol):
    def present(self, value: Any) -> str:
        ...


def _has_own_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


@dataclass(frozen=True)
class SimpleValuePresenter:
    """Present scalars, enums, dates and objects that define ``__str__``.

    Containers and arbitrary objects without their own ``__str__`` raise
    ``UnsupportedValueTypeError`` instead of leaking a ``repr`` into the page.

    Attributes:
        null: Text for ``None``.
        true: Text for ``True``.
        false: Text for ``False``.
        date_time_format: ``strftime`` format for ``datetime`` values.
        date_format: ``strftime`` format for ``date`` values.
    """

    null: str = ""
    true: str = "True"
    false: str = "False"
    date_time_format: str = "%Y-%m-%d %H:%M:%S"
    date_format: str = "%Y-%m-%d"

    def present(self, value: Any) -> str:
        match value:
            case None:
                return self.null
            case bool():
                return self.true if value else self.false
            case Enum():
                return value.name
            case str():
                return value
            case int() | float():
                return str(value)
            case datetime():
                return value.strftime(self.date_time_format)
            case date():
                return value.strftime(self.date_format)
            case list() | tuple() | dict() | set() | frozenset():
                raise UnsupportedValueTypeError(value)
            case _ if _has_own_str(value):
                return str(value)
            case _:
                raise UnsupportedValueTypeError(value)
