"""In-memory data access: reader, sort configuration and paginator."""

from nicedataview.data.paginator import DEFAULT_PAGE_SIZE, OffsetPaginator
from nicedataview.data.reader import (
    HAS_PANDAS,
    HAS_POLARS,
    InMemoryDataReader,
    convert_input_to_rows,
    get_value,
    sort_rows,
)
from nicedataview.data.sort import Sort

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "HAS_PANDAS",
    "HAS_POLARS",
    "InMemoryDataReader",
    "OffsetPaginator",
    "Sort",
    "convert_input_to_rows",
    "get_value",
    "sort_rows",
]
