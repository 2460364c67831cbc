"""Sort order model and header toggle engine."""

from nicedataview.sorting.order import ASC, DESC, Direction, SortOrder, equals, is_valid_property, opposite, parse, serialize
from nicedataview.sorting.toggle import NO_LINK, SortState, SortToggle, ToggleKind, compute_next_order

__all__ = [
    "ASC",
    "DESC",
    "Direction",
    "NO_LINK",
    "SortOrder",
    "SortState",
    "SortToggle",
    "ToggleKind",
    "compute_next_order",
    "equals",
    "is_valid_property",
    "opposite",
    "parse",
    "serialize",
]
