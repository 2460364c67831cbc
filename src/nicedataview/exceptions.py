"""Exception hierarchy for nicedataview.

Configuration errors are fatal to a render call. ``IncorrectValueError`` is
the one error a view recovers from: it becomes a validation message on the
offending filter cell.
"""

from __future__ import annotations

from typing import Any, Optional


class DataViewError(Exception):
    """Base class for all nicedataview errors."""


class ConfigurationError(DataViewError):
    """A view was rendered with missing or inconsistent configuration."""


class UrlCreatorNotSetError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "URL creator is not set. Pass `url_creator` to the view before rendering "
            "sortable headers, pagination or page size controls."
        )


class DataReaderNotSetError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Data is not set. Pass `data` to the view before rendering.")


class PaginatorNotSetError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Paginator is not set. Call `with_paginator()` before rendering.")


class PaginatorNotSupportedError(ConfigurationError):
    def __init__(self, paginator: Any) -> None:
        self.paginator = paginator
        super().__init__(f"Paginator {type(paginator).__name__!r} is not supported by this widget.")


class IncorrectValueError(DataViewError):
    """A filter value from the request cannot be turned into a filter."""


class UnsupportedValueTypeError(DataViewError, TypeError):
    def __init__(self, value: Any) -> None:
        self.value_type = type(value)
        super().__init__(f"Unsupported value type: {type(value).__module__}.{type(value).__qualname__}")


class InvalidPageError(DataViewError):
    def __init__(self, page: Any, total_pages: Optional[int] = None) -> None:
        self.page = page
        self.total_pages = total_pages
        if total_pages is None:
            super().__init__(f"Invalid page {page!r}; pages start at 1.")
        else:
            super().__init__(f"Page {page} not found (total pages: {total_pages}).")
