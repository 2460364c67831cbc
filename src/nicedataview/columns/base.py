"""Column and renderer interfaces.

Columns are plain configuration. Each names a renderer kind; the
``RendererRegistry`` turns that kind into a (cached) renderer instance that
produces the cells.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional, Protocol, runtime_checkable

from nicedataview.columns.cell import Cell
from nicedataview.columns.context import DataContext, FilterContext, GlobalContext, MakeFilterContext
from nicedataview.columns.header import HeaderContext
from nicedataview.exceptions import ConfigurationError
from nicedataview.filters.filter import Filter


class Column(Protocol):
    renderer: ClassVar[str]
    visible: bool


class ColumnRenderer(Protocol):
    def render_column(self, column: Any, cell: Cell, context: GlobalContext) -> Cell:
        ...

    def render_header(self, column: Any, cell: Cell, context: HeaderContext) -> Optional[Cell]:
        ...

    def render_body(self, column: Any, cell: Cell, context: DataContext) -> Cell:
        ...

    def render_footer(self, column: Any, cell: Cell, context: GlobalContext) -> Cell:
        ...


@runtime_checkable
class FilterableColumnRenderer(Protocol):
    def render_filter(self, column: Any, cell: Cell, context: FilterContext) -> Optional[Cell]:
        ...

    def make_filter(self, column: Any, context: MakeFilterContext) -> Optional[Filter]:
        ...


@runtime_checkable
class OverrideOrderFieldsRenderer(Protocol):
    def get_override_order_fields(self, column: Any) -> dict[str, str]:
        ...


def check_column(column: Any, expected: type) -> None:
    """Raise ``ConfigurationError`` when a renderer receives a foreign column."""
    if not isinstance(column, expected):
        raise ConfigurationError(f'Expected "{expected.__name__}", but "{type(column).__name__}" given.')


def capitalize(text: str) -> str:
    """Upper-case the first character only (``"created_at"`` -> ``"Created_at"``)."""
    return text[:1].upper() + text[1:]
