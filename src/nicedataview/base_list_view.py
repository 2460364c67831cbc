"""Shared request handling for the paginated list widgets.

``BaseListView`` owns everything ``GridView`` and ``ListView`` have in common:
reading page, page size and sort from the request, falling back when a page
is missing, the summary line, the pagination widget and the page size
widget. Subclasses add their own item preparation and mounting.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Optional, TypeVar

from nicegui import ui

from nicedataview.data.paginator import DEFAULT_PAGE_SIZE, OffsetPaginator
from nicedataview.data.reader import InMemoryDataReader, Row, get_value
from nicedataview.data.sort import Sort
from nicedataview.exceptions import DataReaderNotSetError, InvalidPageError, UrlCreatorNotSetError
from nicedataview.filters.filter import All, Filter
from nicedataview.i18n import Translator, format_message
from nicedataview.page_size import (
    URL_PLACEHOLDER as PAGE_SIZE_PLACEHOLDER,
    PageSizeConstraint,
    PageSizeContext,
    PageSizeWidget,
    SelectPageSize,
    default_page_size,
    prepare_page_size,
    widget_for,
)
from nicedataview.pagination import URL_PLACEHOLDER as PAGE_PLACEHOLDER
from nicedataview.pagination import OffsetPagination, PaginationContext
from nicedataview.sorting import parse, serialize
from nicedataview.theme import ensure_dataview_theme
from nicedataview.url import (
    NullUrlParameterProvider,
    PageToken,
    UrlConfig,
    UrlCreator,
    UrlParameterProvider,
    create_url_parameters,
)
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)

_V = TypeVar("_V", bound="BaseListView")


@dataclass(frozen=True)
class RequestState:
    page: Optional[str]
    previous_page: Optional[str]
    page_size: Optional[str]
    sort: Optional[str]


@dataclass(frozen=True)
class PageState:
    """The page being shown and the state every link of the render carries.

    Attributes:
        base: Paginator before the request was applied.
        paginator: Paginator after filters, sort, page size and page.
        rows: Rows of the current page.
        default_size: Page size used when the request names none.
        url_config: URL config with the current filter values merged in.
        page_size_value: Page size for links, ``None`` for the default.
        sort_value: Sort token for links, ``None`` for the default order.
    """

    base: OffsetPaginator
    paginator: OffsetPaginator
    rows: list[Row]
    default_size: int
    url_config: UrlConfig
    page_size_value: Optional[str]
    sort_value: Optional[str]


@dataclass(frozen=True)
class BaseListView:
    """Configuration shared by the list widgets.

    Attributes:
        data: ``list[dict]``, pandas/polars frame, ``InMemoryDataReader`` or
            ``OffsetPaginator``.
        sort: Sortable properties and default order; ``None`` disables
            sorting (a reader's or paginator's own sort takes precedence).
        multi_sort: Allow several sorted properties at once.
        page_size: Default page size when ``data`` is not a paginator.
        page_size_constraint: ``True`` default only, ``False`` any size,
            ``int`` maximum, list of allowed sizes.
        page_size_widget: Widget replacing the constraint's default one.
        pagination: Pagination widget configuration.
        url_config: URL parameter naming.
        url_creator: Builds URLs from ``(arguments, query_parameters)``.
        url_parameter_provider: Reads the current request parameters.
        key_property: Row property used as the row key (defaults to the
            absolute row index).
        header: Title text above the items.
        container_classes: Classes of the outer container.
        empty_text: Message when there are no rows.
        summary_template: Summary message; placeholders ``{begin}``,
            ``{end}``, ``{count}``, ``{total_count}``, ``{current_page}``,
            ``{total_pages}``. Empty disables the summary.
        page_size_template: Message around the page size widget,
            ``{widget}`` marks its position. Empty disables the widget.
        ignore_missing_page: Show the first page when the requested one
            does not exist instead of raising ``InvalidPageError``.
        page_not_found_callback: Called with the ``InvalidPageError``
            before it propagates.
        translator: Translates user-visible messages.
    """

    data: Any = None
    sort: Optional[Sort] = None
    multi_sort: bool = False
    page_size: int = DEFAULT_PAGE_SIZE
    page_size_constraint: PageSizeConstraint = True
    page_size_widget: Optional[PageSizeWidget] = None
    pagination: OffsetPagination = OffsetPagination()
    url_config: UrlConfig = UrlConfig()
    url_creator: Optional[UrlCreator] = None
    url_parameter_provider: UrlParameterProvider = dataclasses.field(default_factory=NullUrlParameterProvider)
    key_property: Optional[str] = None
    header: str = ""
    container_classes: str = "ndv-list-view"
    empty_text: Optional[str] = "No results found."
    summary_template: Optional[str] = "Page {current_page} of {total_pages}"
    page_size_template: Optional[str] = "Results per page {widget}"
    ignore_missing_page: bool = True
    page_not_found_callback: Optional[Callable[[InvalidPageError], None]] = None
    translator: Translator = format_message

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def with_data(self: _V, data: Any) -> _V:
        return replace(self, data=data)

    def with_url_creator(self: _V, url_creator: Optional[UrlCreator]) -> _V:
        return replace(self, url_creator=url_creator)

    def with_url_parameter_provider(self: _V, provider: UrlParameterProvider) -> _V:
        return replace(self, url_parameter_provider=provider)

    # ------------------------------------------------------------------
    # Request -> page
    # ------------------------------------------------------------------

    def _base_paginator(self) -> tuple[OffsetPaginator, int]:
        if self.data is None:
            raise DataReaderNotSetError()
        if isinstance(self.data, OffsetPaginator):
            paginator = self.data
            if paginator.sort is None and self.sort is not None:
                paginator = paginator.with_sort(self.sort)
            return paginator, paginator.page_size
        reader = self.data if isinstance(self.data, InMemoryDataReader) else InMemoryDataReader(self.data)
        if reader.sort is None and self.sort is not None:
            reader = reader.with_sort(self.sort)
        return OffsetPaginator(reader, self.page_size), self.page_size

    def _read_request(self) -> RequestState:
        provider, config = self.url_parameter_provider, self.url_config
        return RequestState(
            page=provider.get(config.page_parameter_name, config.page_parameter_type),
            previous_page=provider.get(config.previous_page_parameter_name, config.previous_page_parameter_type),
            page_size=provider.get(config.page_size_parameter_name, config.page_size_parameter_type),
            sort=provider.get(config.sort_parameter_name, config.sort_parameter_type),
        )

    def _apply_request(
        self,
        paginator: OffsetPaginator,
        default_size: int,
        request: RequestState,
        filters: Sequence[Filter],
        override_fields: Mapping[str, str],
        *,
        with_page: bool,
    ) -> OffsetPaginator:
        if filters:
            paginator = paginator.with_filter(All(*filters))

        if request.sort and paginator.sort is not None:
            order = parse(request.sort)
            if not self.multi_sort:
                order = order.first()
            sort = paginator.sort.with_order(order.renamed(override_fields))
            # nothing allowed left: keep the default order
            if sort.order:
                paginator = paginator.with_sort(sort)

        paginator = paginator.with_page_size(
            prepare_page_size(request.page_size, self.page_size_constraint) or default_size
        )

        if with_page and paginator.is_pagination_required:
            if request.page is not None:
                paginator = paginator.with_token(PageToken.next(request.page))
            elif request.previous_page is not None:
                paginator = paginator.with_token(PageToken.previous(request.previous_page))
        return paginator

    def _read_page(self, build: Callable[[bool], OffsetPaginator]) -> tuple[OffsetPaginator, list[Row]]:
        try:
            paginator = build(True)
            return paginator, paginator.read()
        except InvalidPageError as exc:
            error = exc

        if self.ignore_missing_page:
            logger.debug("page not found (%s); falling back to the first page", error)
            try:
                paginator = build(False)
                return paginator, paginator.read()
            except InvalidPageError as exc:
                error = exc

        if self.page_not_found_callback is not None:
            self.page_not_found_callback(error)
        raise error

    def _prepare_page(
        self,
        filters: Sequence[Filter] = (),
        override_fields: Mapping[str, str] = MappingProxyType({}),
        filter_values: Mapping[str, str] = MappingProxyType({}),
    ) -> PageState:
        """Apply the request to the data and collect the link state."""
        base, configured_size = self._base_paginator()
        default_size = default_page_size(configured_size, self.page_size_constraint)
        request = self._read_request()

        paginator, rows = self._read_page(
            lambda with_page: self._apply_request(
                base, default_size, request, filters, override_fields, with_page=with_page
            )
        )
        return PageState(
            base=base,
            paginator=paginator,
            rows=rows,
            default_size=default_size,
            url_config=self.url_config.with_query_parameters({**self.url_config.query_parameters, **filter_values}),
            page_size_value=None if paginator.page_size == default_size else str(paginator.page_size),
            sort_value=self._sort_value_for_url(base, paginator, override_fields),
        )

    def _sort_value_for_url(
        self,
        base: OffsetPaginator,
        paginator: OffsetPaginator,
        override_fields: Mapping[str, str],
    ) -> Optional[str]:
        """Sort token to keep in links, ``None`` when it is the default order."""
        if paginator.sort is None:
            return None
        order = paginator.sort.current_order
        if base.sort is not None and serialize(base.sort.current_order) == serialize(order):
            return None
        back = {field: prop for prop, field in override_fields.items()}
        return serialize(order.renamed(back)) or None

    def _row_key(self, paginator: OffsetPaginator, row: Row, index: int) -> Any:
        return get_value(row, self.key_property) if self.key_property else paginator.offset + index

    # ------------------------------------------------------------------
    # Links and page controls
    # ------------------------------------------------------------------

    def _require_url_creator(self) -> UrlCreator:
        if self.url_creator is None:
            raise UrlCreatorNotSetError()
        return self.url_creator

    def _url(self, config: UrlConfig, token: Optional[PageToken], page_size: Any, sort: Optional[str]) -> str:
        return self._require_url_creator()(*create_url_parameters(token, page_size, sort, config))

    def _empty_text(self, rows: Sequence[Row]) -> Optional[str]:
        return None if rows or self.empty_text is None else self.translator(self.empty_text, {})

    def _summary(self, paginator: OffsetPaginator) -> Optional[str]:
        if not self.summary_template:
            return None
        total_count = paginator.total_items
        if total_count == 0:
            return None
        begin = (paginator.current_page - 1) * paginator.page_size + 1
        count = paginator.current_page_size
        return self.translator(
            self.summary_template,
            {
                "begin": begin,
                "end": begin + count - 1,
                "count": count,
                "total_count": total_count,
                "current_page": paginator.current_page,
                "total_pages": paginator.total_pages,
            },
        )

    def _pagination(self, state: PageState) -> Optional[OffsetPagination]:
        paginator = state.paginator
        if not paginator.is_pagination_required:
            return None
        config, size, sort = state.url_config, state.page_size_value, state.sort_value
        return self.pagination.with_paginator(paginator).with_context(
            PaginationContext(
                next_url_pattern=self._url(config, PageToken.next(PAGE_PLACEHOLDER), size, sort),
                previous_url_pattern=self._url(config, PageToken.previous(PAGE_PLACEHOLDER), size, sort),
                default_url=self._url(config, None, size, sort),
            )
        )

    def _page_size_widget(self, state: PageState) -> tuple[Optional[PageSizeWidget], tuple[str, str]]:
        if not self.page_size_template:
            return None, ("", "")
        widget = self.page_size_widget or widget_for(self.page_size_constraint)
        if widget is None:
            return None, ("", "")
        context = PageSizeContext(
            current_value=state.paginator.page_size,
            default_value=state.default_size,
            constraint=self.page_size_constraint,
            url_pattern=self._url(state.url_config, None, PAGE_SIZE_PLACEHOLDER, state.sort_value),
            default_url=self._url(state.url_config, None, None, state.sort_value),
        )
        widget = widget.with_context(context)
        if isinstance(widget, SelectPageSize) and not widget.options():
            return None, ("", "")
        text = self.translator(self.page_size_template, {})
        before, _, after = text.partition("{widget}")
        return widget, (before, after)

    # ------------------------------------------------------------------
    # NiceGUI
    # ------------------------------------------------------------------

    def prepare(self) -> Any:
        raise NotImplementedError

    def _mount(self, prepared: Any) -> None:
        raise NotImplementedError

    def build(self, *, container: Optional[ui.element] = None) -> Any:
        """Prepare and mount the widget.

        Args:
            container: Optional element to build into. If None, the widget is
                created in the current NiceGUI context.

        Returns:
            The prepared value that was mounted.
        """
        prepared = self.prepare()
        ensure_dataview_theme()
        if container is not None:
            with container:
                self._mount(prepared)
        else:
            self._mount(prepared)
        return prepared

    def _mount_page_controls(
        self,
        summary: Optional[str],
        pagination: Optional[OffsetPagination],
        page_size_widget: Optional[PageSizeWidget],
        page_size_label: tuple[str, str],
    ) -> None:
        if summary is not None:
            ui.label(summary).classes("ndv-summary")
        if pagination is not None:
            pagination.build()
        if page_size_widget is not None:
            before, after = page_size_label
            with ui.row().classes("ndv-page-size-row items-center gap-2"):
                if before.strip():
                    ui.label(before.strip())
                page_size_widget.build()
                if after.strip():
                    ui.label(after.strip())
