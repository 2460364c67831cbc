"""Radio column for single-row selection."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Optional

from nicegui import ElementFilter, ui

from nicedataview.columns.base import check_column
from nicedataview.columns.cell import Cell, Content
from nicedataview.columns.checkbox_column import key_to_value
from nicedataview.columns.context import DataContext, GlobalContext
from nicedataview.columns.header import HeaderContext


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class RadioInput:
    """One radio button mounted as a single-option ``ui.radio``.

    Buttons sharing ``name`` are marked with it; selecting one clears the
    others so at most one row is selected.
    """

    name: str
    value: str
    on_change: Optional[Callable[[str], None]] = None

    def _select(self, element: ui.radio) -> None:
        for other in ElementFilter(kind=ui.radio, marker=self.name):
            if other is not element:
                other.value = None
        if self.on_change is not None:
            self.on_change(self.value)

    def build(self) -> ui.radio:
        element = ui.radio({self.value: ""})
        element.props(f'name="{self.name}"')
        element.mark(self.name)
        element.on_value_change(lambda e: self._select(element) if e.value is not None else None)
        return element


@dataclass(frozen=True)
class RadioColumn:
    """Radio buttons whose value is the row key.

    Attributes:
        name: Marker/name shared by the row radio buttons.
        content: ``callable(input, context)`` wrapping the radio button.
        on_change: ``callable(key)`` called when a row is selected.
    """

    renderer: ClassVar[str] = "radio"

    header: Optional[str] = None
    footer: Optional[str] = None
    name: str = "radio-selection"
    content: Optional[Callable[[RadioInput, DataContext], Content]] = None
    on_change: Optional[Callable[[str], None]] = None
    column_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    header_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    body_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    visible: bool = True


class RadioColumnRenderer:
    def render_column(self, column: RadioColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, RadioColumn)
        return cell.add_attributes(column.column_attributes)

    def render_header(self, column: RadioColumn, cell: Cell, context: HeaderContext) -> Optional[Cell]:
        check_column(column, RadioColumn)
        if column.header is None:
            return None
        return cell.add_attributes(column.header_attributes).with_content(column.header)

    def render_body(self, column: RadioColumn, cell: Cell, context: DataContext) -> Cell:
        check_column(column, RadioColumn)
        radio = RadioInput(column.name, key_to_value(context.key), on_change=column.on_change)
        content: Content = radio if column.content is None else column.content(radio, context)
        return cell.add_attributes(column.body_attributes).with_content(content)

    def render_footer(self, column: RadioColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, RadioColumn)
        if column.footer is not None:
            cell = cell.with_content(column.footer)
        return cell
