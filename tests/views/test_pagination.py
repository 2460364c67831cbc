"""Tests for the OffsetPagination widget."""

from __future__ import annotations

import pytest

from nicedataview.data import InMemoryDataReader, OffsetPaginator
from nicedataview.exceptions import InvalidPageError, PaginatorNotSetError, PaginatorNotSupportedError
from nicedataview.pagination import URL_PLACEHOLDER, OffsetPagination, PaginationContext
from nicedataview.url import PageToken

CONTEXT = PaginationContext(
    next_url_pattern=f"/items?page={URL_PLACEHOLDER}",
    previous_url_pattern=f"/items?prev-page={URL_PLACEHOLDER}",
    default_url="/items",
)


def _paginator(count: int, page: int = 1) -> OffsetPaginator:
    return OffsetPaginator(InMemoryDataReader([{"id": i} for i in range(count)]), 10).with_token(PageToken.next(page))


@pytest.mark.parametrize(
    ("current", "total", "max_links", "expected"),
    [
        (1, 3, 10, (1, 3)),
        (1, 30, 10, (1, 10)),
        (8, 30, 10, (3, 12)),
        (29, 30, 10, (21, 30)),
        (30, 30, 5, (26, 30)),
        (4, 30, 5, (2, 6)),
        (1, 1, 10, (1, 1)),
    ],
)
def test_page_range_window(current: int, total: int, max_links: int, expected: tuple[int, int]) -> None:
    assert OffsetPagination(max_nav_link_count=max_links).page_range(current, total) == expected


def test_page_range_beyond_total_raises() -> None:
    with pytest.raises(InvalidPageError):
        OffsetPagination().page_range(5, 4)


def test_items_on_middle_page() -> None:
    pagination = OffsetPagination().with_paginator(_paginator(35, page=2)).with_context(CONTEXT)
    items = pagination.items()
    assert [item.label for item in items] == ["⟪", "⟨", "1", "2", "3", "4", "⟩", "⟫"]
    assert [item.url for item in items] == [
        "/items",
        "/items",
        "/items",
        "/items?page=2",
        "/items?page=3",
        "/items?page=4",
        "/items?page=3",
        "/items?page=4",
    ]
    assert [item.label for item in items if item.is_current] == ["2"]
    assert not any(item.is_disabled for item in items)


def test_first_and_last_page_disable_edges() -> None:
    first = OffsetPagination().with_paginator(_paginator(25, page=1)).with_context(CONTEXT).items()
    assert [item.is_disabled for item in first[:2]] == [True, True]
    last = OffsetPagination().with_paginator(_paginator(25, page=3)).with_context(CONTEXT).items()
    assert [item.is_disabled for item in last[-2:]] == [True, True]


def test_hidden_labels() -> None:
    pagination = OffsetPagination(label_first=None, label_last=None).with_paginator(_paginator(25)).with_context(CONTEXT)
    assert [item.label for item in pagination.items()] == ["⟨", "1", "2", "3", "⟩"]


def test_previous_token_uses_previous_pattern() -> None:
    assert CONTEXT.create_url(PageToken.previous(3)) == "/items?prev-page=3"


def test_item_link_attributes() -> None:
    pagination = OffsetPagination().with_paginator(_paginator(25, page=2)).with_context(CONTEXT)
    current = next(item for item in pagination.items() if item.is_current)
    link = pagination.item_link(current)
    assert link.attributes["class"] == "ndv-page-link ndv-page-current"
    assert link.attributes["aria-current"] == "page"


def test_missing_paginator_raises() -> None:
    with pytest.raises(PaginatorNotSetError):
        OffsetPagination().with_context(CONTEXT).items()


def test_unsupported_paginator_raises() -> None:
    with pytest.raises(PaginatorNotSupportedError):
        OffsetPagination().with_paginator(object())


def test_missing_context_raises() -> None:
    with pytest.raises(ValueError, match="context"):
        OffsetPagination().with_paginator(_paginator(25)).items()


def test_build_mounts_links(fake_ui) -> None:
    nav = OffsetPagination().with_paginator(_paginator(25, page=2)).with_context(CONTEXT).build()
    links = nav.find("a")
    assert [link.text for link in links] == ["⟪", "⟨", "1", "2", "3", "⟩", "⟫"]
    assert links[3]._props["aria-current"] == "page"
    assert "ndv-pagination" in nav._classes
