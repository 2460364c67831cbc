"""In-memory data reader over rows, pandas or polars frames."""

from __future__ import annotations

import copy
import math
from collections.abc import Mapping
from typing import Any, Optional, TYPE_CHECKING, Union

from nicedataview.data.sort import Sort
from nicedataview.filters.filter import Filter
from nicedataview.sorting import DESC
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)

# Optional dependencies: pandas / polars
try:  # pragma: no cover - optional import
    import pandas as _pd  # type: ignore[import]
    HAS_PANDAS = True
except Exception:  # pragma: no cover - optional import
    _pd = None
    HAS_PANDAS = False

try:  # pragma: no cover - optional import
    import polars as _pl  # type: ignore[import]
    HAS_POLARS = True
except Exception:  # pragma: no cover - optional import
    _pl = None
    HAS_POLARS = False

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl

    DataLike = Union[list[Mapping[str, Any]], pd.DataFrame, pl.DataFrame]
else:
    pd = _pd
    pl = _pl
    DataLike = Any

Row = dict[str, Any]


def _is_missing(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if pd is not None and pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def convert_input_to_rows(data: DataLike) -> list[Row]:
    """Normalize supported inputs into a list of row dictionaries.

    Raises:
        TypeError: ``data`` is not a list of mappings or a pandas/polars frame.
    """
    if isinstance(data, (list, tuple)):
        if all(isinstance(row, Mapping) for row in data):
            return [dict(row) for row in data]
        raise TypeError("List input must contain mapping/dict-like rows.")

    if HAS_PANDAS and pd is not None and isinstance(data, pd.DataFrame):
        rows = data.to_dict(orient="records")
        # NaN, NaT and pd.NA all present as None
        return [{k: (None if _is_missing(v) else v) for k, v in row.items()} for row in rows]

    if HAS_POLARS and pl is not None and isinstance(data, pl.DataFrame):
        return data.to_dicts()

    raise TypeError("Unsupported data type: expected list[dict], pandas.DataFrame, or polars.DataFrame.")


def get_value(row: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Return ``row[key]``, following dotted paths into nested mappings."""
    if key in row:
        return row[key]
    current: Any = row
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


def sort_rows(rows: list[Row], order: Mapping[str, str]) -> list[Row]:
    """Stable multi-key sort; ``None`` values go last in both directions."""
    result = list(rows)
    for prop, direction in reversed(list(order.items())):
        present = [r for r in result if r.get(prop) is not None]
        missing = [r for r in result if r.get(prop) is None]
        present.sort(key=lambda r: r[prop], reverse=direction == DESC)
        result = present + missing
    return result


class InMemoryDataReader:
    """Readable, countable, sortable, filterable, limitable data.

    Each ``with_*`` call returns a new reader; the source rows are shared.

    Args:
        data: Rows as ``list[dict]``, a ``pandas.DataFrame`` or a
            ``polars.DataFrame``.
        sort: Sort configuration, or ``None`` when the data is not sortable.
    """

    def __init__(self, data: DataLike, *, sort: Optional[Sort] = None) -> None:
        self._rows: list[Row] = convert_input_to_rows(data)
        self._sort = sort
        self._filter: Optional[Filter] = None
        self._limit: Optional[int] = None
        self._offset: int = 0

    def _copy(self, **changes: Any) -> InMemoryDataReader:
        new = copy.copy(self)
        for name, value in changes.items():
            setattr(new, f"_{name}", value)
        return new

    @property
    def sort(self) -> Optional[Sort]:
        return self._sort

    @property
    def filter(self) -> Optional[Filter]:
        return self._filter

    @property
    def limit(self) -> Optional[int]:
        return self._limit

    @property
    def offset(self) -> int:
        return self._offset

    def with_sort(self, sort: Optional[Sort]) -> InMemoryDataReader:
        return self._copy(sort=sort)

    def with_filter(self, filter_: Optional[Filter]) -> InMemoryDataReader:
        return self._copy(filter=filter_)

    def with_limit(self, limit: Optional[int]) -> InMemoryDataReader:
        if limit is not None and limit < 0:
            raise ValueError("Limit must not be negative.")
        return self._copy(limit=limit)

    def with_offset(self, offset: int) -> InMemoryDataReader:
        if offset < 0:
            raise ValueError("Offset must not be negative.")
        return self._copy(offset=offset)

    def _filtered(self) -> list[Row]:
        if self._filter is None:
            return list(self._rows)
        return [row for row in self._rows if self._filter.matches(row)]

    def count(self) -> int:
        """Number of rows after filtering, ignoring limit and offset."""
        return len(self._filtered())

    def read(self) -> list[Row]:
        rows = self._filtered()
        if self._sort is not None:
            rows = sort_rows(rows, self._sort.current_order)
        end = None if self._limit is None else self._offset + self._limit
        page = rows[self._offset:end]
        logger.debug("read %d of %d rows (offset=%d, limit=%s)", len(page), len(rows), self._offset, self._limit)
        return page

    def read_one(self) -> Optional[Row]:
        rows = self.with_limit(1).read()
        return rows[0] if rows else None
