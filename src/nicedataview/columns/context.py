"""Contexts handed to column renderers for each part of the table."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Optional

from nicedataview.i18n import Translator, format_message
from nicedataview.url import NullUrlParameterProvider, UrlParameterProvider, UrlParameterType

if TYPE_CHECKING:
    from nicedataview.data import OffsetPaginator


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class GlobalContext:
    """Table-wide state used for column, header and footer cells."""

    paginator: Optional["OffsetPaginator"] = None
    path_arguments: Mapping[str, Any] = field(default_factory=_empty)
    query_parameters: Mapping[str, Any] = field(default_factory=_empty)
    translator: Translator = format_message

    def translate(self, message: str) -> str:
        return self.translator(message, {})


@dataclass(frozen=True)
class DataContext:
    """One body cell: the row, its key and its index on the current page."""

    column: Any
    row: Mapping[str, Any]
    key: Any
    index: int
    paginator: Optional["OffsetPaginator"] = None


@dataclass(frozen=True)
class FilterContext:
    """Filter row state.

    Attributes:
        url_parameter_provider: Source of current filter values.
        filter_url_for: ``(property, value) -> url`` for a changed filter.
        validation_errors: Messages per property from rejected filter values.
        cell_invalid_class: Class added to a filter cell with errors.
        error_class: Class of each error message.
    """

    url_parameter_provider: UrlParameterProvider = field(default_factory=NullUrlParameterProvider)
    filter_url_for: Callable[[str, Optional[str]], str] = lambda _prop, _value: "#"
    validation_errors: Mapping[str, tuple[str, ...]] = field(default_factory=_empty)
    cell_invalid_class: Optional[str] = "ndv-filter-invalid"
    error_class: str = "ndv-filter-error"

    def get_query_value(self, name: str) -> Optional[str]:
        return self.url_parameter_provider.get(name, UrlParameterType.QUERY)

    def errors_for(self, prop: str) -> tuple[str, ...]:
        return tuple(self.validation_errors.get(prop, ()))


@dataclass(frozen=True)
class MakeFilterContext:
    url_parameter_provider: UrlParameterProvider = field(default_factory=NullUrlParameterProvider)

    def get_query_value(self, name: str) -> Optional[str]:
        return self.url_parameter_provider.get(name, UrlParameterType.QUERY)
