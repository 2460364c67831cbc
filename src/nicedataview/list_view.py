"""ListView: paginated items rendered by a callable instead of table columns.

Paging, sorting, page size, summary and the missing-page fallback are shared
with ``GridView`` through ``BaseListView``; each row of the current page is
turned into content by ``item_view``.

Example:
    ```python
    from nicedataview import Link, ListView, MappingUrlParameterProvider, Sort, query_url_creator

    @ui.page("/articles")
    def articles(request: Request) -> None:
        ListView(
            data=rows,
            item_view=lambda item: (Link(item.data["title"], f"/articles/{item.key}"), item.data["summary"]),
            sort=Sort.only(["published"], {"published": "desc"}),
            key_property="id",
            url_creator=query_url_creator("/articles"),
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
from nicedataview.columns.cell import Cell, Content, Control, Link, Text
from nicedataview.columns.checkbox_column import key_to_value
from nicedataview.data.paginator import OffsetPaginator
from nicedataview.data.reader import Row
from nicedataview.page_size import PageSizeWidget
from nicedataview.pagination import OffsetPagination, PaginationItem
from nicedataview.rendering import mount_cell, mount_content, mount_element
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)

ItemContent = Union[None, Content, Sequence[Content]]


@dataclass(frozen=True)
class ListItemContext:
    """The row being rendered and where it sits.

    Attributes:
        data: The row.
        key: Row key (``key_property`` value or absolute row index).
        index: Zero-based position on the current page.
        widget: The ``ListView`` rendering the row.
    """

    data: Row
    key: Any
    index: int
    widget: ListView


ItemView = Callable[[ListItemContext], ItemContent]
ItemAttributes = Union[Mapping[str, Any], Callable[[ListItemContext], Mapping[str, Any]]]


def as_content(value: ItemContent) -> tuple[Content, ...]:
    """Normalize an item callback result to a content tuple."""
    if value is None:
        return ()
    if isinstance(value, (str, Link, Text, Control)):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class PreparedItem:
    cell: Cell
    before: tuple[Content, ...] = ()
    after: tuple[Content, ...] = ()


@dataclass(frozen=True)
class PreparedList:
    """Everything ``ListView.build()`` mounts, as plain values."""

    paginator: OffsetPaginator
    rows: tuple[Row, ...]
    items: tuple[PreparedItem, ...]
    empty_text: Optional[str]
    summary: Optional[str]
    pagination: Optional[OffsetPagination]
    page_size_widget: Optional[PageSizeWidget]
    page_size_label: tuple[str, str]

    @property
    def pagination_items(self) -> list[PaginationItem]:
        return [] if self.pagination is None else self.pagination.items()


@dataclass(frozen=True)
class ListView(BaseListView):
    """List widget configuration.

    Paging, sorting, page size, summary and URL settings are documented on
    ``BaseListView``.

    Attributes:
        item_view: ``callable(ListItemContext)`` returning the item content.
            ``None`` shows the row key.
        item_tag: Tag of each item element.
        item_attributes: Item attributes, or ``callable(ListItemContext)``.
            ``data-key`` is always set.
        before_item: ``callable(ListItemContext)`` whose content is mounted
            before the item; ``None`` results are skipped.
        after_item: Same as ``before_item``, mounted after the item.
        separator: Text mounted between consecutive items.
        encode: ``False`` mounts string item content as trusted markup.
        list_attributes: Attributes of the element holding the items.
    """

    item_view: Optional[ItemView] = None
    item_tag: str = "div"
    item_attributes: ItemAttributes = dataclasses.field(
        default_factory=lambda: MappingProxyType({"class": "ndv-list-item"})
    )
    before_item: Optional[ItemView] = None
    after_item: Optional[ItemView] = None
    separator: Optional[str] = None
    encode: bool = True
    list_attributes: Mapping[str, Any] = dataclasses.field(default_factory=lambda: MappingProxyType({"class": "ndv-list"}))

    def with_item_view(self, item_view: Optional[ItemView]) -> ListView:
        return replace(self, item_view=item_view)

    def with_item_attributes(self, attributes: ItemAttributes) -> ListView:
        """Merge mapping attributes into the current ones; a callable replaces them."""
        if callable(attributes) or callable(self.item_attributes):
            return replace(self, item_attributes=attributes)
        return replace(self, item_attributes=MappingProxyType({**self.item_attributes, **attributes}))

    def _item(self, context: ListItemContext) -> PreparedItem:
        if self.item_view is None:
            content: tuple[Content, ...] = (str(context.key),)
        else:
            content = as_content(self.item_view(context))
        attributes = self.item_attributes
        if callable(attributes):
            attributes = attributes(context)
        cell = Cell(
            MappingProxyType({**attributes, "data-key": key_to_value(context.key)}),
            content,
            None if self.encode else False,
        )
        return PreparedItem(
            cell=cell,
            before=as_content(self.before_item(context)) if self.before_item is not None else (),
            after=as_content(self.after_item(context)) if self.after_item is not None else (),
        )

    def prepare(self) -> PreparedList:
        """Compute the items for the current request.

        Raises:
            DataReaderNotSetError: ``data`` is not set.
            InvalidPageError: The requested page does not exist and
                ``ignore_missing_page`` is off.
            UrlCreatorNotSetError: Links are needed but ``url_creator`` is
                not set.
        """
        state = self._prepare_page()
        paginator, rows = state.paginator, state.rows
        items = tuple(
            self._item(ListItemContext(row, self._row_key(paginator, row, index), index, self))
            for index, row in enumerate(rows)
        )
        logger.debug("prepared %d list items on page %s/%s", len(items), paginator.current_page, paginator.total_pages)
        page_size_widget, page_size_label = self._page_size_widget(state)
        return PreparedList(
            paginator=paginator,
            rows=tuple(rows),
            items=items,
            empty_text=self._empty_text(rows),
            summary=self._summary(paginator),
            pagination=self._pagination(state),
            page_size_widget=page_size_widget,
            page_size_label=page_size_label,
        )

    def build(self, *, container: Optional[ui.element] = None) -> PreparedList:
        return super().build(container=container)

    def _mount(self, prepared: PreparedList) -> None:
        with ui.element("div").classes(self.container_classes):
            if self.header:
                ui.label(self.header).classes("ndv-list-header")
            with mount_element("div", self.list_attributes):
                for position, item in enumerate(prepared.items):
                    if position and self.separator:
                        ui.label(self.separator).classes("ndv-list-separator")
                    for content in item.before:
                        mount_content(content)
                    mount_cell(self.item_tag, item.cell)
                    for content in item.after:
                        mount_content(content)
                if prepared.empty_text is not None:
                    ui.label(prepared.empty_text).classes("ndv-empty")
            self._mount_page_controls(
                prepared.summary, prepared.pagination, prepared.page_size_widget, prepared.page_size_label
            )
