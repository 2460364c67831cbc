"""Filters: value objects, factories and input widgets."""

from nicedataview.filters.factory import EqualsFilterFactory, FilterFactory, LikeFilterFactory
from nicedataview.filters.filter import All, Equals, Filter, Like
from nicedataview.filters.widgets import DropdownFilter, FilterWidget, FilterWidgetContext, TextInputFilter

__all__ = [
    "All",
    "DropdownFilter",
    "Equals",
    "EqualsFilterFactory",
    "Filter",
    "FilterFactory",
    "FilterWidget",
    "FilterWidgetContext",
    "Like",
    "LikeFilterFactory",
    "TextInputFilter",
]
