"""Offset (page number) pagination over an in-memory reader."""

from __future__ import annotations

import copy
import math
from typing import Any, Optional

from nicedataview.data.reader import InMemoryDataReader, Row
from nicedataview.data.sort import Sort
from nicedataview.exceptions import InvalidPageError
from nicedataview.filters.filter import Filter
from nicedataview.url import PageToken

DEFAULT_PAGE_SIZE = 10


class OffsetPaginator:
    """Split a reader into numbered pages.

    Args:
        reader: Source data.
        page_size: Rows per page (positive).
        token: Page to show; ``None`` means the first page.

    Raises:
        ValueError: ``page_size`` is not positive.
        InvalidPageError: ``token`` is not a page number of at least 1.
    """

    def __init__(self, reader: InMemoryDataReader, page_size: int = DEFAULT_PAGE_SIZE, token: Optional[PageToken] = None) -> None:
        if page_size < 1:
            raise ValueError("Page size must be at least 1.")
        self._reader = reader
        self._page_size = page_size
        self._current_page = 1 if token is None else self._parse_token(token)
        self._total_items: Optional[int] = None

    @staticmethod
    def _parse_token(token: PageToken) -> int:
        try:
            page = int(token.value)
        except ValueError:
            raise InvalidPageError(token.value) from None
        if page < 1:
            raise InvalidPageError(page)
        return page

    def _copy(self, **changes: Any) -> OffsetPaginator:
        new = copy.copy(self)
        for name, value in changes.items():
            setattr(new, f"_{name}", value)
        new._total_items = None
        return new

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def with_page_size(self, page_size: int) -> OffsetPaginator:
        if page_size < 1:
            raise ValueError("Page size must be at least 1.")
        return self._copy(page_size=page_size)

    def with_token(self, token: Optional[PageToken]) -> OffsetPaginator:
        return self._copy(current_page=1 if token is None else self._parse_token(token))

    def with_sort(self, sort: Optional[Sort]) -> OffsetPaginator:
        return self._copy(reader=self._reader.with_sort(sort))

    def with_filter(self, filter_: Optional[Filter]) -> OffsetPaginator:
        return self._copy(reader=self._reader.with_filter(filter_))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def reader(self) -> InMemoryDataReader:
        return self._reader

    @property
    def sort(self) -> Optional[Sort]:
        return self._reader.sort

    @property
    def is_sortable(self) -> bool:
        return self._reader.sort is not None

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def token(self) -> PageToken:
        return PageToken.next(self._current_page)

    @property
    def total_items(self) -> int:
        if self._total_items is None:
            self._total_items = self._reader.count()
        return self._total_items

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_items / self._page_size))

    @property
    def offset(self) -> int:
        return (self._current_page - 1) * self._page_size

    @property
    def current_page_size(self) -> int:
        """Rows on the current page (the last page may be short)."""
        return max(0, min(self._page_size, self.total_items - self.offset))

    @property
    def is_on_first_page(self) -> bool:
        return self._current_page == 1

    @property
    def is_on_last_page(self) -> bool:
        return self._current_page >= self.total_pages

    @property
    def is_pagination_required(self) -> bool:
        return self.total_pages > 1

    def read(self) -> list[Row]:
        """Rows of the current page.

        Raises:
            InvalidPageError: The current page is beyond the last page.
        """
        if self._current_page > self.total_pages:
            raise InvalidPageError(self._current_page, self.total_pages)
        return self._reader.with_offset(self.offset).with_limit(self._page_size).read()
