"""Tests for row conversion and the in-memory data reader."""

from __future__ import annotations

import pytest

from nicedataview.data import HAS_PANDAS, HAS_POLARS, InMemoryDataReader, Sort, convert_input_to_rows, get_value, sort_rows
from nicedataview.filters import Equals, Like

ROWS = [
    {"id": 1, "name": "Alice", "city": "Berlin"},
    {"id": 2, "name": "bob", "city": None},
    {"id": 3, "name": "Carol", "city": "Amsterdam"},
    {"id": 4, "name": "Bert", "city": "Berlin"},
]


def test_convert_list_of_dicts_copies_rows() -> None:
    rows = convert_input_to_rows(ROWS)
    assert rows == ROWS
    rows[0]["name"] = "changed"
    assert ROWS[0]["name"] == "Alice"


def test_convert_rejects_non_mapping_rows() -> None:
    with pytest.raises(TypeError, match="mapping"):
        convert_input_to_rows([1, 2, 3])


def test_convert_rejects_unknown_type() -> None:
    with pytest.raises(TypeError, match="Unsupported data type"):
        convert_input_to_rows("not rows")


@pytest.mark.skipif(not HAS_PANDAS, reason="pandas not installed")
def test_convert_from_pandas_maps_nan_to_none() -> None:
    import pandas as pd

    df = pd.DataFrame({"id": [1, 2], "score": [1.5, float("nan")]})
    rows = convert_input_to_rows(df)
    assert rows[0] == {"id": 1, "score": 1.5}
    assert rows[1]["score"] is None


@pytest.mark.skipif(not HAS_PANDAS, reason="pandas not installed")
def test_convert_from_pandas_maps_nat_and_na_to_none() -> None:
    import pandas as pd

    from nicedataview.value_presenter import SimpleValuePresenter

    df = pd.DataFrame(
        {
            "when": [pd.Timestamp("2024-01-01 08:30"), pd.NaT],
            "count": pd.array([3, pd.NA], dtype="Int64"),
        }
    )
    rows = convert_input_to_rows(df)
    assert rows[1]["when"] is None
    assert rows[1]["count"] is None

    presenter = SimpleValuePresenter()
    assert presenter.present(rows[0]["when"]) == "2024-01-01 08:30:00"
    assert presenter.present(rows[1]["when"]) == ""


@pytest.mark.skipif(not HAS_POLARS, reason="polars not installed")
def test_convert_from_polars() -> None:
    import polars as pl

    df = pl.DataFrame({"id": [1, 2], "name": ["Alice", "Bob"]})
    assert convert_input_to_rows(df) == df.to_dicts()


def test_get_value_follows_dotted_paths() -> None:
    row = {"user": {"profile": {"name": "Alice"}}, "a.b": 1}
    assert get_value(row, "user.profile.name") == "Alice"
    assert get_value(row, "a.b") == 1
    assert get_value(row, "user.missing", "n/a") == "n/a"


def test_sort_rows_multi_key_with_none_last() -> None:
    result = sort_rows(ROWS, {"city": "desc", "id": "asc"})
    assert [r["id"] for r in result] == [1, 4, 3, 2]


def test_read_applies_filter_sort_and_slice() -> None:
    reader = InMemoryDataReader(ROWS, sort=Sort.only(["id", "name"], {"id": "desc"}))
    reader = reader.with_filter(Like("name", "b")).with_offset(1).with_limit(1)
    assert reader.count() == 2
    assert reader.read() == [ROWS[1]]


def test_with_methods_return_new_readers() -> None:
    reader = InMemoryDataReader(ROWS)
    limited = reader.with_limit(2)
    assert reader.limit is None
    assert limited.limit == 2
    assert len(reader.read()) == 4
    assert len(limited.read()) == 2


def test_negative_limit_or_offset_raises() -> None:
    reader = InMemoryDataReader(ROWS)
    with pytest.raises(ValueError):
        reader.with_limit(-1)
    with pytest.raises(ValueError):
        reader.with_offset(-1)


def test_read_one() -> None:
    reader = InMemoryDataReader(ROWS).with_filter(Equals("city", "Amsterdam"))
    assert reader.read_one() == ROWS[2]
    assert InMemoryDataReader([]).read_one() is None


def test_sort_with_order_drops_unknown_properties() -> None:
    sort = Sort.only(["id"], {"id": "asc", "name": "desc"})
    assert sort.default_order == {"id": "asc"}
    assert sort.with_order({"name": "asc", "id": "desc"}).current_order == {"id": "desc"}
    assert sort.has_field("id")
    assert not sort.has_field("name")
