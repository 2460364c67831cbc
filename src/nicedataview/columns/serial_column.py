"""Serial column: 1-based row number across pages."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional

from nicedataview.columns.base import check_column
from nicedataview.columns.cell import Cell
from nicedataview.columns.context import DataContext, GlobalContext
from nicedataview.columns.header import HeaderContext


@dataclass(frozen=True)
class SerialColumn:
    renderer: ClassVar[str] = "serial"

    header: Optional[str] = None
    footer: Optional[str] = None
    column_attributes: Mapping[str, Any] = dataclasses.field(default_factory=lambda: MappingProxyType({}))
    body_attributes: Mapping[str, Any] = dataclasses.field(default_factory=lambda: MappingProxyType({}))
    visible: bool = True


class SerialColumnRenderer:
    def render_column(self, column: SerialColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, SerialColumn)
        return cell.add_attributes(column.column_attributes)

    def render_header(self, column: SerialColumn, cell: Cell, context: HeaderContext) -> Cell:
        check_column(column, SerialColumn)
        return cell.with_content(column.header if column.header is not None else "#")

    def render_body(self, column: SerialColumn, cell: Cell, context: DataContext) -> Cell:
        check_column(column, SerialColumn)
        offset = context.paginator.offset if context.paginator is not None else 0
        return cell.add_attributes(column.body_attributes).with_content(str(offset + context.index + 1))

    def render_footer(self, column: SerialColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, SerialColumn)
        return cell.with_content(column.footer or "")
