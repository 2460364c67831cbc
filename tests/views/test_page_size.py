"""Tests for page size constraints and widgets."""

from __future__ import annotations

import pytest

from nicedataview.exceptions import ConfigurationError
from nicedataview.page_size import (
    URL_PLACEHOLDER,
    InputPageSize,
    PageSizeContext,
    SelectPageSize,
    default_page_size,
    prepare_page_size,
    widget_for,
)


def _context(constraint, current: int = 10, default: int = 10) -> PageSizeContext:
    return PageSizeContext(
        current_value=current,
        default_value=default,
        constraint=constraint,
        url_pattern=f"/items?pagesize={URL_PLACEHOLDER}",
        default_url="/items",
    )


@pytest.mark.parametrize(
    ("raw", "constraint", "expected"),
    [
        ("20", True, None),
        ("20", False, 20),
        ("0", False, None),
        ("abc", False, None),
        (None, False, None),
        ("50", 50, 50),
        ("51", 50, None),
        ("20", [10, 20, 50], 20),
        ("30", [10, 20, 50], None),
    ],
)
def test_prepare_page_size(raw, constraint, expected) -> None:
    assert prepare_page_size(raw, constraint) == expected


@pytest.mark.parametrize(
    ("size", "constraint", "expected"),
    [
        (10, True, 10),
        (10, False, 10),
        (100, 50, 50),
        (20, [10, 20], 20),
        (15, [10, 20], 10),
    ],
)
def test_default_page_size(size, constraint, expected) -> None:
    assert default_page_size(size, constraint) == expected


def test_url_for_default_size_uses_default_url() -> None:
    context = _context(False)
    assert context.url_for(10) == "/items"
    assert context.url_for(25) == "/items?pagesize=25"


def test_widget_for_constraint() -> None:
    assert widget_for(True) is None
    assert isinstance(widget_for(False), InputPageSize)
    assert isinstance(widget_for(100), InputPageSize)
    assert isinstance(widget_for([10, 20]), SelectPageSize)


def test_select_options_need_two_sizes() -> None:
    assert SelectPageSize().with_context(_context([10, 20, 50])).options() == [10, 20, 50]
    assert SelectPageSize().with_context(_context([10])).options() == []
    assert SelectPageSize().with_context(_context(False)).options() == []


def test_widget_without_context_raises() -> None:
    with pytest.raises(ConfigurationError):
        InputPageSize().build()


def test_select_build_navigates(fake_ui) -> None:
    element = SelectPageSize().with_context(_context([10, 20, 50], current=20)).build()
    assert element.kwargs["options"] == [10, 20, 50]
    assert element.value == 20

    class _Event:
        value = 50

    element.on_change(_Event())
    _Event.value = 10
    element.on_change(_Event())
    assert fake_ui.navigate.urls == ["/items?pagesize=50", "/items"]


def test_select_build_skipped_for_single_size(fake_ui) -> None:
    assert SelectPageSize().with_context(_context([10])).build() is None
    assert fake_ui.roots == []


def test_input_build_navigates_on_enter(fake_ui) -> None:
    element = InputPageSize().with_context(_context(False, current=15)).build()
    assert element.value == "15"
    element.value = " 30 "
    element.handlers["keydown.enter"](None)
    element.value = ""
    element.handlers["keydown.enter"](None)
    assert fake_ui.navigate.urls == ["/items?pagesize=30"]
