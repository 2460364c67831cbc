"""Tests for OffsetPaginator."""

from __future__ import annotations

import pytest

from nicedataview.data import InMemoryDataReader, OffsetPaginator
from nicedataview.exceptions import InvalidPageError
from nicedataview.url import PageToken


def _paginator(count: int = 25, page_size: int = 10) -> OffsetPaginator:
    return OffsetPaginator(InMemoryDataReader([{"id": i} for i in range(1, count + 1)]), page_size)


def test_first_page_by_default() -> None:
    paginator = _paginator()
    assert paginator.current_page == 1
    assert paginator.total_items == 25
    assert paginator.total_pages == 3
    assert paginator.is_on_first_page
    assert paginator.is_pagination_required
    assert [r["id"] for r in paginator.read()] == list(range(1, 11))


def test_last_page_is_short() -> None:
    paginator = _paginator().with_token(PageToken.next(3))
    assert paginator.offset == 20
    assert paginator.current_page_size == 5
    assert paginator.is_on_last_page
    assert [r["id"] for r in paginator.read()] == [21, 22, 23, 24, 25]


def test_empty_data_has_one_page() -> None:
    paginator = _paginator(count=0)
    assert paginator.total_pages == 1
    assert not paginator.is_pagination_required
    assert paginator.read() == []


def test_page_beyond_last_raises_on_read() -> None:
    paginator = _paginator().with_token(PageToken.next(4))
    with pytest.raises(InvalidPageError, match="total pages: 3"):
        paginator.read()


@pytest.mark.parametrize("value", ["0", "-1", "abc"])
def test_invalid_token_raises(value: str) -> None:
    with pytest.raises(InvalidPageError):
        _paginator().with_token(PageToken.next(value))


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        _paginator(page_size=0)
    with pytest.raises(ValueError):
        _paginator().with_page_size(0)


def test_with_page_size_recomputes_total_pages() -> None:
    paginator = _paginator()
    assert paginator.total_pages == 3
    assert paginator.with_page_size(5).total_pages == 5
    assert paginator.page_size == 10
