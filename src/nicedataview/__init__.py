"""
nicedataview: URL-driven data grids and detail views for NiceGUI.

This package provides:
- GridView: paginated, sortable, filterable table whose state lives in the URL
- ListView: the same paging and sorting with items rendered by a callable
- DetailView: label/value list for a single record
- Column types (data, serial, checkbox, radio, action) with pluggable renderers
- In-memory data reader over rows, pandas or polars frames
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from nicedataview.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library (imported by other applications), logging is
automatically handled by the parent application's configuration.
"""

import logging

from nicedataview.utils.logging import configure_logging, get_logger

from nicedataview.columns import (
    ActionButton,
    ActionColumn,
    Cell,
    CheckboxColumn,
    DataColumn,
    Link,
    RadioColumn,
    RendererRegistry,
    SerialColumn,
    SortableHeaderStyle,
)
from nicedataview.data import InMemoryDataReader, OffsetPaginator, Sort
from nicedataview.detail_view import DataField, DetailView
from nicedataview.exceptions import (
    ConfigurationError,
    DataReaderNotSetError,
    DataViewError,
    IncorrectValueError,
    InvalidPageError,
    PaginatorNotSetError,
    PaginatorNotSupportedError,
    UnsupportedValueTypeError,
    UrlCreatorNotSetError,
)
from nicedataview.filters import DropdownFilter, TextInputFilter
from nicedataview.grid_view import GridView, PreparedGrid
from nicedataview.list_view import ListItemContext, ListView, PreparedList
from nicedataview.page_size import InputPageSize, SelectPageSize
from nicedataview.pagination import OffsetPagination
from nicedataview.sorting import SortOrder, SortState, ToggleKind, compute_next_order
from nicedataview.url import (
    MappingUrlParameterProvider,
    PageToken,
    UrlConfig,
    UrlParameterType,
    query_url_creator,
)
from nicedataview.value_presenter import SimpleValuePresenter

# Silences the "no handlers" fallback; records still propagate to the
# application's handlers.
_logger = logging.getLogger("nicedataview")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ActionButton",
    "ActionColumn",
    "Cell",
    "CheckboxColumn",
    "ConfigurationError",
    "DataColumn",
    "DataField",
    "DataReaderNotSetError",
    "DataViewError",
    "DetailView",
    "DropdownFilter",
    "GridView",
    "InMemoryDataReader",
    "IncorrectValueError",
    "InputPageSize",
    "InvalidPageError",
    "Link",
    "ListItemContext",
    "ListView",
    "MappingUrlParameterProvider",
    "OffsetPagination",
    "OffsetPaginator",
    "PageToken",
    "PaginatorNotSetError",
    "PaginatorNotSupportedError",
    "PreparedGrid",
    "PreparedList",
    "RadioColumn",
    "RendererRegistry",
    "SelectPageSize",
    "SerialColumn",
    "SimpleValuePresenter",
    "Sort",
    "SortOrder",
    "SortState",
    "SortableHeaderStyle",
    "TextInputFilter",
    "ToggleKind",
    "UnsupportedValueTypeError",
    "UrlConfig",
    "UrlCreatorNotSetError",
    "UrlParameterType",
    "compute_next_order",
    "configure_logging",
    "get_logger",
    "query_url_creator",
]

__version__ = "0.1.0"
