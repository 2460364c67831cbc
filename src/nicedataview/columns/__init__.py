"""Table columns, their renderers and the cell model."""

from nicedataview.columns.action_column import ActionButton, ActionColumn, ActionColumnRenderer
from nicedataview.columns.base import ColumnRenderer, FilterableColumnRenderer, OverrideOrderFieldsRenderer
from nicedataview.columns.cell import Cell, Link, Text, add_css_class
from nicedataview.columns.checkbox_column import CheckboxColumn, CheckboxColumnRenderer, CheckboxInput
from nicedataview.columns.context import DataContext, FilterContext, GlobalContext, MakeFilterContext
from nicedataview.columns.data_column import DataColumn, DataColumnRenderer
from nicedataview.columns.header import HeaderContext, SortableHeader, SortableHeaderStyle
from nicedataview.columns.radio_column import RadioColumn, RadioColumnRenderer, RadioInput
from nicedataview.columns.registry import RendererRegistry
from nicedataview.columns.serial_column import SerialColumn, SerialColumnRenderer

__all__ = [
    "ActionButton",
    "ActionColumn",
    "ActionColumnRenderer",
    "Cell",
    "CheckboxColumn",
    "CheckboxColumnRenderer",
    "CheckboxInput",
    "ColumnRenderer",
    "DataColumn",
    "DataColumnRenderer",
    "DataContext",
    "FilterContext",
    "FilterableColumnRenderer",
    "GlobalContext",
    "HeaderContext",
    "Link",
    "MakeFilterContext",
    "OverrideOrderFieldsRenderer",
    "RadioColumn",
    "RadioColumnRenderer",
    "RadioInput",
    "RendererRegistry",
    "SerialColumn",
    "SerialColumnRenderer",
    "SortableHeader",
    "SortableHeaderStyle",
    "Text",
    "add_css_class",
]
