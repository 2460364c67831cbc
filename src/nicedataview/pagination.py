"""Offset pagination widget: first / previous / numbered / next / last links."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Final, Optional

from nicegui import ui

from nicedataview.columns.cell import Link, add_css_class
from nicedataview.data.paginator import OffsetPaginator
from nicedataview.exceptions import InvalidPageError, PaginatorNotSetError, PaginatorNotSupportedError
from nicedataview.rendering import mount_element, mount_link
from nicedataview.url import PageToken
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)

URL_PLACEHOLDER: Final = "NICEDATAVIEW-PAGE-PLACEHOLDER"


@dataclass(frozen=True)
class PaginationContext:
    """URL patterns for page links.

    Attributes:
        next_url_pattern: URL with ``URL_PLACEHOLDER`` where a "next" token goes.
        previous_url_pattern: Same for "previous" tokens.
        default_url: URL of the first page (no page parameter at all).
    """

    next_url_pattern: str
    previous_url_pattern: str
    default_url: str

    def create_url(self, token: PageToken) -> str:
        pattern = self.previous_url_pattern if token.is_previous else self.next_url_pattern
        return pattern.replace(URL_PLACEHOLDER, token.value)


@dataclass(frozen=True)
class PaginationItem:
    label: str
    url: str
    is_current: bool = False
    is_disabled: bool = False


@dataclass(frozen=True)
class OffsetPagination:
    """Numbered page links for an ``OffsetPaginator``.

    Labels set to ``None`` hide the corresponding link.

    Attributes:
        paginator: Paginator to render; set with ``with_paginator()``.
        context: URL patterns; set with ``with_context()``.
        label_first: First page link text.
        label_previous: Previous page link text.
        label_next: Next page link text.
        label_last: Last page link text.
        max_nav_link_count: Numbered links shown around the current page.
        container_classes: Classes of the ``nav`` container.
        link_classes: Classes of every link.
        current_link_class: Extra class of the current page link.
        disabled_link_class: Extra class of disabled links.
    """

    paginator: Optional[OffsetPaginator] = None
    context: Optional[PaginationContext] = None
    label_first: Optional[str] = "⟪"
    label_previous: Optional[str] = "⟨"
    label_next: Optional[str] = "⟩"
    label_last: Optional[str] = "⟫"
    max_nav_link_count: int = 10
    container_classes: str = "ndv-pagination"
    link_classes: str = "ndv-page-link"
    current_link_class: Optional[str] = "ndv-page-current"
    disabled_link_class: Optional[str] = "ndv-page-disabled"

    @classmethod
    def create(cls, paginator: OffsetPaginator, url_pattern: str, first_page_url: str) -> OffsetPagination:
        return cls().with_paginator(paginator).with_context(PaginationContext(url_pattern, url_pattern, first_page_url))

    def with_paginator(self, paginator: Any) -> OffsetPagination:
        """Return a copy rendering ``paginator``.

        Raises:
            PaginatorNotSupportedError: ``paginator`` is not an ``OffsetPaginator``.
        """
        if not isinstance(paginator, OffsetPaginator):
            raise PaginatorNotSupportedError(paginator)
        return replace(self, paginator=paginator)

    def with_context(self, context: PaginationContext) -> OffsetPagination:
        return replace(self, context=context)

    def page_range(self, current_page: int, total_pages: int) -> tuple[int, int]:
        """First and last numbered page to show."""
        if current_page > total_pages:
            raise InvalidPageError(current_page, total_pages)
        begin = max(1, current_page - self.max_nav_link_count // 2)
        end = begin + self.max_nav_link_count - 1
        if end >= total_pages:
            end = total_pages
            begin = max(1, end - self.max_nav_link_count + 1)
        return begin, end

    def _url(self, page: int) -> str:
        if self.context is None:
            raise ValueError("Pagination context is not set. Call `with_context()` first.")
        if page == 1:
            return self.context.default_url
        return self.context.create_url(PageToken.next(page))

    def items(self) -> list[PaginationItem]:
        if self.paginator is None:
            raise PaginatorNotSetError()
        current = self.paginator.current_page
        total = self.paginator.total_pages
        begin, end = self.page_range(current, total)

        items: list[PaginationItem] = []
        if self.label_first is not None:
            items.append(PaginationItem(self.label_first, self._url(1), is_disabled=current == 1))
        if self.label_previous is not None:
            items.append(PaginationItem(self.label_previous, self._url(max(current - 1, 1)), is_disabled=current == 1))
        for page in range(begin, end + 1):
            items.append(PaginationItem(str(page), self._url(page), is_current=page == current))
        if self.label_next is not None:
            items.append(PaginationItem(self.label_next, self._url(min(current + 1, total)), is_disabled=current == total))
        if self.label_last is not None:
            items.append(PaginationItem(self.label_last, self._url(total), is_disabled=current == total))
        return items

    def item_link(self, item: PaginationItem) -> Link:
        attributes = add_css_class(
            {"class": self.link_classes},
            self.current_link_class if item.is_current else None,
            self.disabled_link_class if item.is_disabled else None,
        )
        if item.is_current:
            attributes["aria-current"] = "page"
        if item.is_disabled:
            attributes["aria-disabled"] = "true"
        return Link(item.label, item.url, attributes)

    def build(self) -> Any:
        """Mount the pagination as a ``nav`` of links."""
        items = self.items()
        logger.debug("pagination page %s/%s", self.paginator.current_page, self.paginator.total_pages)
        nav = mount_element("nav", {"class": self.container_classes})
        with nav:
            with ui.row().classes("items-center gap-1"):
                for item in items:
                    mount_link(self.item_link(item))
        return nav
