"""GridView: a paginated, sortable, filterable table driven by URL parameters.

``GridView`` is plain configuration. ``prepare()`` reads the request through
the URL parameter provider and computes everything the table shows as
framework-neutral values (``PreparedGrid``); ``build()`` mounts that with
NiceGUI.

Example:
    ```python
    from nicegui import ui
    from starlette.requests import Request

    from nicedataview import DataColumn, GridView, MappingUrlParameterProvider, Sort, query_url_creator

    @ui.page("/users")
    def users(request: Request) -> None:
        GridView(
            data=rows,
            columns=(DataColumn("id"), DataColumn("name", filter=True)),
            sort=Sort.only(["id", "name"], {"id": "asc"}),
            url_creator=query_url_creator("/users"),
            url_parameter_provider=MappingUrlParameterProvider(request.query_params),
        ).build()
    ```
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Optional, Union

from nicegui import ui

from nicedataview.base_list_view import BaseListView
from nicedataview.columns.base import FilterableColumnRenderer, OverrideOrderFieldsRenderer
from nicedataview.columns.cell import Cell
from nicedataview.columns.context import DataContext, FilterContext, GlobalContext, MakeFilterContext
from nicedataview.columns.header import HeaderContext, SortableHeaderStyle
from nicedataview.columns.registry import RendererRegistry
from nicedataview.data.paginator import OffsetPaginator
from nicedataview.data.reader import Row
from nicedataview.exceptions import IncorrectValueError
from nicedataview.filters.filter import Filter
from nicedataview.page_size import PageSizeWidget
from nicedataview.pagination import OffsetPagination, PaginationItem
from nicedataview.rendering import mount_cell, mount_element
from nicedataview.sorting import SortOrder, SortState, serialize
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)

RowAttributes = Union[Mapping[str, Any], Callable[[Mapping[str, Any], Any, int], Mapping[str, Any]]]


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class PreparedRow:
    attributes: Mapping[str, Any]
    cells: tuple[Cell, ...]


@dataclass(frozen=True)
class PreparedGrid:
    """Everything ``GridView.build()`` mounts, as plain values.

    Attributes:
        paginator: Paginator after filters, sort, page size and page.
        rows: Rows of the current page.
        column_cells: One cell per visible column (``col`` attributes).
        header_cells: Header row, or ``None`` when the header is hidden.
        filter_cells: Filter row, or ``None`` when no column filters.
        body_rows: Body rows.
        footer_cells: Footer row, or ``None`` when the footer is hidden.
        empty_text: Shown instead of body rows when there are none.
        summary: Summary text, or ``None``.
        pagination: Bound pagination widget, or ``None`` for a single page.
        page_size_widget: Bound page size widget, or ``None``.
        page_size_label: Text before and after the page size widget.
        validation_errors: Rejected filter values, per property.
    """

    paginator: OffsetPaginator
    rows: tuple[Row, ...]
    column_cells: tuple[Cell, ...]
    header_cells: Optional[tuple[Cell, ...]]
    filter_cells: Optional[tuple[Cell, ...]]
    body_rows: tuple[PreparedRow, ...]
    footer_cells: Optional[tuple[Cell, ...]]
    empty_text: Optional[str]
    summary: Optional[str]
    pagination: Optional[OffsetPagination]
    page_size_widget: Optional[PageSizeWidget]
    page_size_label: tuple[str, str]
    validation_errors: Mapping[str, tuple[str, ...]]

    @property
    def pagination_items(self) -> list[PaginationItem]:
        return [] if self.pagination is None else self.pagination.items()


@dataclass(frozen=True)
class GridView(BaseListView):
    """Table widget configuration.

    Paging, sorting, page size, summary and URL settings are documented on
    ``BaseListView``.

    Attributes:
        columns: Column definitions, in display order.
        header_style: Sortable header classes and decorations.
        renderers: Column renderer registry.
        show_header: Render the header row.
        show_footer: Render the footer row.
        table_attributes: Attributes of the ``table`` element.
        header_row_attributes: Attributes of the header ``tr``.
        filter_row_attributes: Attributes of the filter ``tr``.
        footer_row_attributes: Attributes of the footer ``tr``.
        body_row_attributes: Body ``tr`` attributes or
            ``callable(row, key, index)``.
        empty_text_attributes: Attributes of the empty message cell.
    """

    container_classes: str = "ndv-grid-view"
    columns: Sequence[Any] = ()
    header_style: SortableHeaderStyle = SortableHeaderStyle()
    renderers: RendererRegistry = dataclasses.field(default_factory=RendererRegistry)
    show_header: bool = True
    show_footer: bool = False
    table_attributes: Mapping[str, Any] = dataclasses.field(default_factory=lambda: MappingProxyType({"class": "ndv-grid"}))
    header_row_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    filter_row_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    footer_row_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    body_row_attributes: RowAttributes = dataclasses.field(default_factory=_empty)
    empty_text_attributes: Mapping[str, Any] = dataclasses.field(default_factory=lambda: MappingProxyType({"class": "ndv-empty"}))

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def with_columns(self, *columns: Any) -> GridView:
        return replace(self, columns=tuple(columns))

    def with_renderer_configs(self, configs: Mapping[str, Mapping[str, Any]]) -> GridView:
        return replace(self, renderers=self.renderers.add_configs(configs))

    # ------------------------------------------------------------------
    # Preparation
    # ------------------------------------------------------------------

    def _visible_columns(self) -> list[Any]:
        return [column for column in self.columns if getattr(column, "visible", True)]

    def _override_order_fields(self, columns: Sequence[Any]) -> dict[str, str]:
        fields: dict[str, str] = {}
        for column in columns:
            renderer = self.renderers.get(column.renderer)
            if isinstance(renderer, OverrideOrderFieldsRenderer):
                fields.update(renderer.get_override_order_fields(column))
        return fields

    def _make_filters(self, columns: Sequence[Any]) -> tuple[list[Filter], dict[str, tuple[str, ...]], dict[str, str]]:
        """Build filters from the request; rejected values become validation errors."""
        context = MakeFilterContext(self.url_parameter_provider)
        filters: list[Filter] = []
        errors: dict[str, tuple[str, ...]] = {}
        values: dict[str, str] = {}
        for column in columns:
            renderer = self.renderers.get(column.renderer)
            if not isinstance(renderer, FilterableColumnRenderer):
                continue
            prop = getattr(column, "property", None)
            try:
                filter_ = renderer.make_filter(column, context)
            except IncorrectValueError as exc:
                logger.warning("dropping filter %s: %s", prop, exc)
                if prop is not None:
                    errors[prop] = errors.get(prop, ()) + (str(exc),)
                continue
            if filter_ is not None:
                filters.append(filter_)
            if prop is not None:
                raw = context.get_query_value(prop)
                if raw:
                    values[prop] = raw
        return filters, errors, values

    def prepare(self) -> PreparedGrid:
        """Compute the table for the current request.

        Raises:
            DataReaderNotSetError: ``data`` is not set.
            InvalidPageError: The requested page does not exist and
                ``ignore_missing_page`` is off.
            UrlCreatorNotSetError: Links are needed but ``url_creator`` is
                not set.
        """
        columns = self._visible_columns()
        override_fields = self._override_order_fields(columns)
        filters, errors, filter_values = self._make_filters(columns)

        state = self._prepare_page(filters, override_fields, filter_values)
        paginator, rows, config = state.paginator, state.rows, state.url_config

        original_sort, current_sort = state.base.sort, paginator.sort
        sort_state = SortState(
            original_order=None if original_sort is None else original_sort.current_order,
            current_order=None if current_sort is None else current_sort.current_order,
            allowed_properties=frozenset() if current_sort is None else current_sort.allowed,
            multi_sort=self.multi_sort,
            override_fields=MappingProxyType(override_fields),
        )
        logger.debug(
            "prepared page %s/%s size=%s sort=%s filters=%d",
            paginator.current_page,
            paginator.total_pages,
            paginator.page_size,
            serialize(sort_state.current_order or SortOrder()),
            len(filters),
        )

        global_context = GlobalContext(
            paginator=paginator,
            path_arguments=MappingProxyType(dict(config.arguments)),
            query_parameters=MappingProxyType(dict(config.query_parameters)),
            translator=self.translator,
        )
        header_context = HeaderContext(
            sort_state=sort_state,
            style=self.header_style,
            url_config=config,
            url_creator=self.url_creator,
            page_size=state.page_size_value,
            translator=self.translator,
        )

        def filter_url_for(prop: str, value: Optional[str]) -> str:
            query = dict(config.query_parameters)
            query[prop] = value
            return self._url(config.with_query_parameters(query), None, state.page_size_value, state.sort_value)

        filter_context = FilterContext(
            url_parameter_provider=self.url_parameter_provider,
            filter_url_for=filter_url_for,
            validation_errors=MappingProxyType(errors),
        )

        renderers = [self.renderers.get(column.renderer) for column in columns]
        column_cells = tuple(r.render_column(c, Cell(), global_context) for r, c in zip(renderers, columns))

        header_cells = None
        if self.show_header:
            header_cells = tuple(
                r.render_header(c, Cell(), header_context) or Cell() for r, c in zip(renderers, columns)
            )

        filter_cells = None
        if any(isinstance(r, FilterableColumnRenderer) for r in renderers):
            cells = []
            for renderer, column in zip(renderers, columns):
                cell = None
                if isinstance(renderer, FilterableColumnRenderer):
                    cell = renderer.render_filter(column, Cell(), filter_context)
                cells.append(cell)
            if any(cell is not None for cell in cells):
                filter_cells = tuple(cell or Cell() for cell in cells)

        body_rows = tuple(self._body_row(paginator, renderers, columns, row, index) for index, row in enumerate(rows))

        footer_cells = None
        if self.show_footer:
            footer_cells = tuple(r.render_footer(c, Cell(), global_context) for r, c in zip(renderers, columns))

        page_size_widget, page_size_label = self._page_size_widget(state)

        return PreparedGrid(
            paginator=paginator,
            rows=tuple(rows),
            column_cells=column_cells,
            header_cells=header_cells,
            filter_cells=filter_cells,
            body_rows=body_rows,
            footer_cells=footer_cells,
            empty_text=self._empty_text(rows),
            summary=self._summary(paginator),
            pagination=self._pagination(state),
            page_size_widget=page_size_widget,
            page_size_label=page_size_label,
            validation_errors=MappingProxyType(errors),
        )

    def _body_row(
        self,
        paginator: OffsetPaginator,
        renderers: Sequence[Any],
        columns: Sequence[Any],
        row: Row,
        index: int,
    ) -> PreparedRow:
        key = self._row_key(paginator, row, index)
        attributes = self.body_row_attributes
        if callable(attributes):
            attributes = attributes(row, key, index)
        cells = tuple(
            renderer.render_body(column, Cell(), DataContext(column, row, key, index, paginator))
            for renderer, column in zip(renderers, columns)
        )
        return PreparedRow(MappingProxyType(dict(attributes)), cells)

    # ------------------------------------------------------------------
    # NiceGUI
    # ------------------------------------------------------------------

    def build(self, *, container: Optional[ui.element] = None) -> PreparedGrid:
        """Prepare and mount the grid.

        Args:
            container: Optional element to build into. If None, the grid is
                created in the current NiceGUI context.

        Returns:
            The prepared grid that was mounted.
        """
        return super().build(container=container)

    def _mount_row(self, attributes: Mapping[str, Any], cells: Sequence[Cell], tag: str) -> None:
        with mount_element("tr", attributes):
            for cell in cells:
                mount_cell(tag, cell)

    def _mount(self, prepared: PreparedGrid) -> None:
        with ui.element("div").classes(self.container_classes):
            if self.header:
                ui.label(self.header).classes("ndv-grid-header")
            with mount_element("table", self.table_attributes):
                if any(cell.attributes for cell in prepared.column_cells):
                    with ui.element("colgroup"):
                        for cell in prepared.column_cells:
                            mount_element("col", cell.attributes)
                if prepared.header_cells is not None or prepared.filter_cells is not None:
                    with ui.element("thead"):
                        if prepared.header_cells is not None:
                            self._mount_row(self.header_row_attributes, prepared.header_cells, "th")
                        if prepared.filter_cells is not None:
                            self._mount_row(self.filter_row_attributes, prepared.filter_cells, "td")
                with ui.element("tbody"):
                    for row in prepared.body_rows:
                        self._mount_row(row.attributes, row.cells, "td")
                    if prepared.empty_text is not None:
                        empty = Cell(
                            MappingProxyType({**self.empty_text_attributes, "colspan": max(1, len(prepared.column_cells))}),
                            (prepared.empty_text,),
                        )
                        self._mount_row({}, (empty,), "td")
                if prepared.footer_cells is not None:
                    with ui.element("tfoot"):
                        self._mount_row(self.footer_row_attributes, prepared.footer_cells, "td")
            self._mount_page_controls(
                prepared.summary, prepared.pagination, prepared.page_size_widget, prepared.page_size_label
            )
