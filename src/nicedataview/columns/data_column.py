"""Data column: shows one row property, optionally sortable and filterable."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import dataclasses
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, ClassVar, Optional, Union

from nicedataview.columns.base import capitalize, check_column
from nicedataview.columns.cell import Cell, Content, Text
from nicedataview.columns.context import DataContext, FilterContext, GlobalContext, MakeFilterContext
from nicedataview.columns.header import HeaderContext
from nicedataview.data.reader import get_value
from nicedataview.filters.factory import EqualsFilterFactory, FilterFactory, LikeFilterFactory
from nicedataview.filters.filter import Filter
from nicedataview.filters.widgets import DropdownFilter, FilterWidget, FilterWidgetContext, TextInputFilter
from nicedataview.utils.logging import get_logger
from nicedataview.value_presenter import SimpleValuePresenter, ValuePresenter

logger = get_logger(__name__)

FilterEmpty = Union[bool, Callable[[Any], bool]]
FilterSpec = Union[bool, Mapping[str, str], list, tuple, FilterWidget]
BodyAttributes = Union[Mapping[str, Any], Callable[[Mapping[str, Any], DataContext], Mapping[str, Any]]]


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class DataColumn:
    """Column bound to a row property.

    Attributes:
        property: Row key (dotted paths allowed). Also the name used for the
            sort and filter query parameters.
        header: Header label; defaults to the capitalised property.
        field: Real sort/filter field when it differs from ``property``.
        footer: Footer text.
        with_sorting: Render a sort link when the property is sortable.
        content: Body text, or ``callable(row, context)`` returning it.
        filter: ``True`` for a text input, a mapping/list of options for a
            dropdown, a filter widget instance, or ``False`` for none.
        filter_factory: Builds the filter from the raw query value; defaults
            to ``Like`` for text inputs and ``Equals`` for dropdowns.
        filter_empty: ``True`` skips empty strings, ``False`` never skips,
            a callable decides per value.
        header_attributes: Extra header cell attributes.
        body_attributes: Body cell attributes or ``callable(row, context)``.
        column_attributes: Attributes of the column itself.
        date_time_format: ``strftime`` format overriding the presenter's.
        visible: Whether the column is shown at all.
    """

    renderer: ClassVar[str] = "data"

    property: Optional[str] = None
    header: Optional[str] = None
    field: Optional[str] = None
    footer: Optional[str] = None
    with_sorting: bool = True
    content: Union[str, Callable[[Mapping[str, Any], DataContext], Any], None] = None
    filter: FilterSpec = False
    filter_factory: Optional[FilterFactory] = None
    filter_empty: Optional[FilterEmpty] = None
    header_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    body_attributes: BodyAttributes = dataclasses.field(default_factory=_empty)
    column_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    date_time_format: Optional[str] = None
    visible: bool = True


def _when_empty(value: Any) -> bool:
    return value is None or value == "" or value == []


def _never_empty(value: Any) -> bool:
    return False


@dataclass(frozen=True)
class DataColumnRenderer:
    """Renderer for ``DataColumn``.

    Attributes:
        value_presenter: Turns body values into text.
        default_filter_factory: Factory for text-input filters.
        default_dropdown_filter_factory: Factory for dropdown filters.
        default_filter_empty: ``filter_empty`` for columns that leave it unset.
    """

    value_presenter: ValuePresenter = SimpleValuePresenter()
    default_filter_factory: FilterFactory = LikeFilterFactory()
    default_dropdown_filter_factory: FilterFactory = EqualsFilterFactory()
    default_filter_empty: FilterEmpty = True

    def render_column(self, column: DataColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, DataColumn)
        return cell.add_attributes(column.column_attributes)

    def render_header(self, column: DataColumn, cell: Cell, context: HeaderContext) -> Cell:
        check_column(column, DataColumn)
        if column.header is None:
            label = "" if column.property is None else capitalize(column.property)
        else:
            label = column.header
        cell = cell.add_attributes(column.header_attributes).with_content(label)

        if not column.with_sorting or column.property is None:
            return cell

        cell, link, prepend, append = context.prepare_sortable(cell, column.property)
        parts: list[Content] = [prepend, label if link is None else link.with_label(label), append]
        return cell.with_content(*(part for part in parts if part != ""))

    def _filter_widget(self, column: DataColumn) -> Optional[FilterWidget]:
        option = column.filter
        if option is True:
            return TextInputFilter()
        if option is False or option is None:
            return None
        if isinstance(option, (TextInputFilter, DropdownFilter)):
            return option
        return DropdownFilter().with_options(option)

    def render_filter(self, column: DataColumn, cell: Cell, context: FilterContext) -> Optional[Cell]:
        check_column(column, DataColumn)
        if column.property is None:
            return None
        widget = self._filter_widget(column)
        if widget is None:
            return None

        prop = column.property
        bound = widget.with_context(
            FilterWidgetContext(
                property=prop,
                value=context.get_query_value(prop),
                url_for=lambda value: context.filter_url_for(prop, value),
            )
        )
        content: list[Content] = [bound]
        errors = context.errors_for(prop)
        if errors:
            cell = cell.add_class(context.cell_invalid_class)
            content.extend(Text(message, context.error_class) for message in errors)
        return cell.with_content(*content)

    def _filter_empty(self, column: DataColumn) -> Callable[[Any], bool]:
        value = self.default_filter_empty if column.filter_empty is None else column.filter_empty
        if value is True:
            return _when_empty
        if value is False:
            return _never_empty
        return value

    def make_filter(self, column: DataColumn, context: MakeFilterContext) -> Optional[Filter]:
        """Build the column's filter from the request.

        Raises:
            IncorrectValueError: The factory rejected the raw value.
        """
        check_column(column, DataColumn)
        if column.property is None:
            return None
        widget = self._filter_widget(column)
        if widget is None:
            return None

        value = context.get_query_value(column.property)
        if value is None or self._filter_empty(column)(value):
            return None

        if column.filter_factory is not None:
            factory = column.filter_factory
        elif isinstance(widget, DropdownFilter):
            factory = self.default_dropdown_filter_factory
        else:
            factory = self.default_filter_factory
        return factory.create(column.field or column.property, value)

    def render_body(self, column: DataColumn, cell: Cell, context: DataContext) -> Cell:
        check_column(column, DataColumn)
        if column.content is not None:
            source = column.content
            text = str(source(context.row, context) if callable(source) else source)
        elif column.property is not None:
            presenter = self.value_presenter
            if column.date_time_format is not None and isinstance(presenter, SimpleValuePresenter):
                presenter = replace(presenter, date_time_format=column.date_time_format)
            text = presenter.present(get_value(context.row, column.property))
        else:
            text = ""

        attributes = column.body_attributes
        if callable(attributes):
            attributes = attributes(context.row, context)
        return cell.add_attributes(attributes).with_content(text)

    def render_footer(self, column: DataColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, DataColumn)
        if column.footer is not None:
            cell = cell.with_content(column.footer)
        return cell

    def get_override_order_fields(self, column: DataColumn) -> dict[str, str]:
        check_column(column, DataColumn)
        if column.property is None or column.field is None or column.property == column.field:
            return {}
        return {column.property: column.field}
