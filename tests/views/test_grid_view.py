"""Tests for GridView.prepare(): request handling, cells, pagination and summary."""

from __future__ import annotations

import logging

import pytest

from nicedataview import (
    ActionColumn,
    DataColumn,
    GridView,
    InMemoryDataReader,
    MappingUrlParameterProvider,
    OffsetPaginator,
    SerialColumn,
    Sort,
    query_url_creator,
)
from nicedataview.exceptions import DataReaderNotSetError, InvalidPageError, UrlCreatorNotSetError
from nicedataview.filters import EqualsFilterFactory, TextInputFilter

USERS = [{"id": i, "name": f"user{i:02d}", "group": "odd" if i % 2 else "even"} for i in range(1, 26)]


def _grid(query=None, **kwargs) -> GridView:
    options = dict(
        data=USERS,
        columns=(DataColumn("id"), DataColumn("name", filter=True)),
        sort=Sort.only(["id", "name"], {"id": "asc"}),
        url_creator=query_url_creator("/users"),
        url_parameter_provider=MappingUrlParameterProvider(query or {}),
    )
    options.update(kwargs)
    return GridView(**options)


def _ids(prepared) -> list[int]:
    return [row["id"] for row in prepared.rows]


def test_first_page_defaults() -> None:
    prepared = _grid().prepare()
    assert _ids(prepared) == list(range(1, 11))
    assert prepared.summary == "Page 1 of 3"
    assert prepared.empty_text is None
    assert [cell.text() for cell in prepared.header_cells] == ["Id ↑", "Name"]
    assert [cell.text() for cell in prepared.body_rows[0].cells] == ["1", "user01"]
    assert prepared.footer_cells is None


def test_page_parameter_selects_page() -> None:
    prepared = _grid({"page": "3"}).prepare()
    assert _ids(prepared) == list(range(21, 26))
    assert prepared.summary == "Page 3 of 3"
    current = [item for item in prepared.pagination_items if item.is_current]
    assert [item.label for item in current] == ["3"]


def test_previous_page_parameter() -> None:
    assert _ids(_grid({"prev-page": "2"}).prepare()) == list(range(11, 21))


@pytest.mark.parametrize("page", ["9", "0", "abc"])
def test_missing_page_falls_back_to_first(page: str) -> None:
    assert _ids(_grid({"page": page}).prepare()) == list(range(1, 11))


def test_missing_page_raises_when_not_ignored() -> None:
    seen = []
    grid = _grid({"page": "9"}, ignore_missing_page=False, page_not_found_callback=seen.append)
    with pytest.raises(InvalidPageError):
        grid.prepare()
    assert len(seen) == 1


def test_sort_parameter_is_applied() -> None:
    prepared = _grid({"sort": "-id"}).prepare()
    assert _ids(prepared)[:3] == [25, 24, 23]
    # header links keep the current sort state in mind
    id_link = prepared.header_cells[0].content[0]
    assert id_link.url == "/users"
    assert prepared.header_cells[0].attributes["class"] == "ndv-sorted-desc"


def test_single_sort_keeps_first_requested_field() -> None:
    prepared = _grid({"sort": "name,-id"}).prepare()
    assert prepared.paginator.sort.current_order == {"name": "asc"}


def test_multi_sort_keeps_all_fields() -> None:
    prepared = _grid({"sort": "-name,id"}, multi_sort=True).prepare()
    assert list(prepared.paginator.sort.current_order.items()) == [("name", "desc"), ("id", "asc")]


def test_unknown_sort_field_keeps_default_order() -> None:
    prepared = _grid({"sort": "password"}).prepare()
    assert prepared.paginator.sort.current_order == {"id": "asc"}
    assert _ids(prepared)[:2] == [1, 2]


def test_pagination_links_keep_sort_and_filter() -> None:
    prepared = _grid({"sort": "-id", "name": "1"}).prepare()
    # user01, user10..user19, user21 -> 12 rows, 2 pages
    assert prepared.paginator.total_items == 12
    urls = {item.label: item.url for item in prepared.pagination_items}
    assert urls["1"] == "/users?name=1&sort=-id"
    assert urls["2"] == "/users?name=1&page=2&sort=-id"


def test_filter_cell_and_filter_urls() -> None:
    prepared = _grid({"name": "user2", "pagesize": "5"}, page_size_constraint=False).prepare()
    assert prepared.filter_cells[0].content == ()
    (widget,) = prepared.filter_cells[1].content
    assert isinstance(widget, TextInputFilter)
    assert widget.context.value == "user2"
    assert widget.context.url_for("x") == "/users?name=x&pagesize=5"
    assert widget.context.url_for(None) == "/users?pagesize=5"


def test_incorrect_filter_value_becomes_validation_error(caplog) -> None:
    grid = _grid(
        {"id": "abc"},
        columns=(DataColumn("id", filter=True, filter_factory=EqualsFilterFactory(int)), DataColumn("name")),
    )
    with caplog.at_level(logging.WARNING, logger="nicedataview"):
        prepared = grid.prepare()
    assert prepared.validation_errors == {"id": ("Invalid value 'abc' for 'id'.",)}
    assert prepared.paginator.total_items == 25
    assert "ndv-filter-invalid" in prepared.filter_cells[0].attributes["class"]
    assert "dropping filter id" in caplog.text


def test_dropdown_filter_uses_equals() -> None:
    grid = _grid({"group": "odd"}, columns=(DataColumn("id"), DataColumn("group", filter={"odd": "Odd", "even": "Even"})))
    assert grid.prepare().paginator.total_items == 13


def test_no_filter_row_without_filters() -> None:
    assert _grid(columns=(DataColumn("id"),)).prepare().filter_cells is None


def test_page_size_constraint_list() -> None:
    prepared = _grid({"pagesize": "20"}, page_size_constraint=[10, 20]).prepare()
    assert len(prepared.rows) == 20
    assert prepared.page_size_widget is not None
    assert prepared.page_size_widget.context.url_for(20) == "/users?pagesize=20"
    assert prepared.page_size_widget.context.url_for(10) == "/users"
    assert prepared.page_size_label == ("Results per page ", "")


def test_page_size_not_allowed_uses_default() -> None:
    prepared = _grid({"pagesize": "30"}, page_size_constraint=[10, 20]).prepare()
    assert len(prepared.rows) == 10


def test_default_constraint_has_no_page_size_widget() -> None:
    prepared = _grid({"pagesize": "20"}).prepare()
    assert len(prepared.rows) == 10
    assert prepared.page_size_widget is None


def test_page_size_in_sort_links() -> None:
    prepared = _grid({"pagesize": "5"}, page_size_constraint=False).prepare()
    name_link = prepared.header_cells[1].content[0]
    assert name_link.url == "/users?pagesize=5&sort=name"


def test_single_page_has_no_pagination() -> None:
    prepared = _grid(data=USERS[:3]).prepare()
    assert prepared.pagination is None
    assert prepared.pagination_items == []
    assert prepared.summary == "Page 1 of 1"


def test_empty_data() -> None:
    prepared = _grid(data=[]).prepare()
    assert prepared.rows == ()
    assert prepared.empty_text == "No results found."
    assert prepared.summary is None


def test_summary_template_parameters() -> None:
    grid = _grid({"page": "3"}, summary_template="{begin}-{end} of {total_count} ({count} shown)")
    assert grid.prepare().summary == "21-25 of 25 (5 shown)"


def test_translator_is_applied() -> None:
    grid = _grid(data=[], translator=lambda message, params: message.upper())
    assert grid.prepare().empty_text == "NO RESULTS FOUND."


def test_serial_column_and_row_keys() -> None:
    seen = []
    grid = _grid(
        {"page": "2"},
        columns=(SerialColumn(), DataColumn("name")),
        key_property="id",
        body_row_attributes=lambda row, key, index: seen.append((key, index)) or {"data-key": key},
    )
    prepared = grid.prepare()
    assert prepared.body_rows[0].cells[0].content == ("11",)
    assert prepared.body_rows[0].attributes == {"data-key": 11}
    assert seen[0] == (11, 0)


def test_action_column_receives_row_key() -> None:
    grid = _grid(
        columns=(ActionColumn(url_creator=lambda action, row, key: f"/users/{key}/{action}"),),
        key_property="id",
    )
    first_row = grid.prepare().body_rows[0]
    assert first_row.cells[0].content[0].url == "/users/1/view"


def test_invisible_columns_are_skipped() -> None:
    prepared = _grid(columns=(DataColumn("id"), DataColumn("name", visible=False))).prepare()
    assert len(prepared.header_cells) == 1


def test_override_field_in_url() -> None:
    rows = [{"user_name": name} for name in ("b", "a", "c")]
    grid = _grid(
        {"sort": "-user"},
        data=rows,
        columns=(DataColumn("user", field="user_name", content=lambda row, context: row["user_name"]),),
        sort=Sort.only(["user_name"], {"user_name": "asc"}),
    )
    prepared = grid.prepare()
    assert [row["user_name"] for row in prepared.rows] == ["c", "b", "a"]
    assert prepared.header_cells[0].content[0].url == "/users"


def test_reader_and_paginator_inputs() -> None:
    reader = InMemoryDataReader(USERS, sort=Sort.only(["id"], {"id": "desc"}))
    assert _ids(_grid(data=reader, sort=None).prepare())[0] == 25

    paginator = OffsetPaginator(InMemoryDataReader(USERS), page_size=5)
    prepared = _grid(data=paginator).prepare()
    assert len(prepared.rows) == 5
    assert prepared.paginator.total_pages == 5


def test_missing_data_raises() -> None:
    with pytest.raises(DataReaderNotSetError):
        GridView(columns=(DataColumn("id"),)).prepare()


def test_links_without_url_creator_raise() -> None:
    with pytest.raises(UrlCreatorNotSetError):
        _grid(url_creator=None).prepare()


def test_unsortable_grid_without_links_needs_no_url_creator() -> None:
    prepared = _grid(data=USERS[:3], sort=None, url_creator=None, columns=(DataColumn("id"),)).prepare()
    assert [cell.text() for cell in prepared.header_cells] == ["Id"]


def test_with_methods() -> None:
    grid = GridView().with_data(USERS[:2]).with_columns(DataColumn("id")).with_url_creator(query_url_creator("/"))
    assert len(grid.prepare().rows) == 2
    configured = grid.with_renderer_configs({"data": {"default_filter_empty": False}})
    assert configured.renderers.get("data").default_filter_empty is False


def test_radio_column_values_are_row_keys() -> None:
    from nicedataview import RadioColumn
    from nicedataview.columns import RadioInput

    prepared = _grid(columns=(RadioColumn(name="pick"), DataColumn("id")), key_property="id").prepare()
    (radio,) = prepared.body_rows[0].cells[0].content
    assert radio == RadioInput("pick", "1")
    assert prepared.header_cells[0].content == ()
