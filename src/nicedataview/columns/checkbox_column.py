"""Checkbox column for row selection."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Optional

from nicegui import ElementFilter, ui

from nicedataview.columns.base import check_column
from nicedataview.columns.cell import Cell, Content
from nicedataview.columns.context import DataContext, GlobalContext
from nicedataview.columns.header import HeaderContext

SELECT_ALL_NAME = "checkbox-selection-all"


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class CheckboxInput:
    """A checkbox mounted as ``ui.checkbox``.

    Row checkboxes are marked with their ``name`` so a select-all checkbox
    (``select_all=True``) can find and toggle them.
    """

    name: str
    value: str = "1"
    select_all: bool = False
    on_change: Optional[Callable[[str, bool], None]] = None

    def _toggle_all(self, checked: bool) -> None:
        for checkbox in ElementFilter(kind=ui.checkbox, marker=self.name):
            checkbox.value = checked

    def build(self) -> ui.checkbox:
        element = ui.checkbox()
        element.props(f'name="{self.name}" val="{self.value}"')
        if self.select_all:
            element.on_value_change(lambda e: self._toggle_all(bool(e.value)))
        else:
            element.mark(self.name)
            if self.on_change is not None:
                callback = self.on_change
                element.on_value_change(lambda e: callback(self.value, bool(e.value)))
        return element


@dataclass(frozen=True)
class CheckboxColumn:
    """Selection checkboxes whose value is the row key.

    Attributes:
        name: Marker/name shared by the row checkboxes.
        multiple: Show a select-all checkbox in the header.
        content: ``callable(input, context)`` wrapping the checkbox.
        on_change: ``callable(key, checked)`` called when a row checkbox changes.
    """

    renderer: ClassVar[str] = "checkbox"

    header: Optional[str] = None
    footer: Optional[str] = None
    name: str = "checkbox-selection"
    multiple: bool = True
    content: Optional[Callable[[CheckboxInput, DataContext], Content]] = None
    on_change: Optional[Callable[[str, bool], None]] = None
    column_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    header_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    body_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    visible: bool = True


def key_to_value(key: Any) -> str:
    if isinstance(key, (dict, list, tuple)):
        return json.dumps(key, ensure_ascii=False, separators=(",", ":"))
    return str(key)


class CheckboxColumnRenderer:
    def render_column(self, column: CheckboxColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, CheckboxColumn)
        return cell.add_attributes(column.column_attributes)

    def render_header(self, column: CheckboxColumn, cell: Cell, context: HeaderContext) -> Optional[Cell]:
        check_column(column, CheckboxColumn)
        cell = cell.add_attributes(column.header_attributes)
        if column.header is not None:
            return cell.with_content(column.header)
        if not column.multiple:
            return None
        return cell.with_content(CheckboxInput(column.name, select_all=True))

    def render_body(self, column: CheckboxColumn, cell: Cell, context: DataContext) -> Cell:
        check_column(column, CheckboxColumn)
        checkbox = CheckboxInput(column.name, key_to_value(context.key), on_change=column.on_change)
        content: Content = checkbox if column.content is None else column.content(checkbox, context)
        return cell.add_attributes(column.body_attributes).with_content(content)

    def render_footer(self, column: CheckboxColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, CheckboxColumn)
        if column.footer is not None:
            cell = cell.with_content(column.footer)
        return cell
