"""Action column: per-row view / update / delete links."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Optional, Union

from nicedataview.columns.base import check_column
from nicedataview.columns.cell import Cell, Link, add_css_class
from nicedataview.columns.context import DataContext, GlobalContext
from nicedataview.columns.header import HeaderContext
from nicedataview.exceptions import UrlCreatorNotSetError

ActionUrlCreator = Callable[[str, Mapping[str, Any], Any], str]
ButtonVisibility = Union[bool, Callable[[Mapping[str, Any], Any, int], bool]]


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ActionButton:
    """One action link.

    Attributes:
        content: Link text (often an icon glyph).
        title: Tooltip / accessible title.
        url: Fixed URL or ``callable(row, key)``; defaults to the column's
            URL creator.
        attributes: Extra link attributes.
        classes: Extra link classes.
    """

    content: str = ""
    title: Optional[str] = None
    url: Union[str, Callable[[Mapping[str, Any], Any], str], None] = None
    attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    classes: Optional[str] = None


DEFAULT_BUTTONS: Mapping[str, ActionButton] = MappingProxyType(
    {
        "view": ActionButton("🔎", title="View"),
        "update": ActionButton("✎", title="Update"),
        "delete": ActionButton("❌", title="Delete"),
    }
)


@dataclass(frozen=True)
class ActionColumn:
    """Row actions.

    Attributes:
        buttons: Action name -> button, in display order. Empty means
            view / update / delete.
        url_creator: ``callable(action, row, key) -> url``.
        visible_buttons: Action name -> bool or ``callable(row, key, index)``.
            When set, unlisted actions are hidden.
        content: Replaces the buttons with ``callable(context)`` text.
    """

    renderer: ClassVar[str] = "action"

    header: Optional[str] = None
    footer: Optional[str] = None
    buttons: Mapping[str, ActionButton] = dataclasses.field(default_factory=_empty)
    url_creator: Optional[ActionUrlCreator] = None
    visible_buttons: Mapping[str, ButtonVisibility] = dataclasses.field(default_factory=_empty)
    content: Optional[Callable[[DataContext], str]] = None
    column_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    header_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    body_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    footer_attributes: Mapping[str, Any] = dataclasses.field(default_factory=_empty)
    visible: bool = True


@dataclass(frozen=True)
class ActionColumnRenderer:
    link_class: Optional[str] = "ndv-action"

    def render_column(self, column: ActionColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, ActionColumn)
        return cell.add_attributes(column.column_attributes)

    def render_header(self, column: ActionColumn, cell: Cell, context: HeaderContext) -> Cell:
        check_column(column, ActionColumn)
        header = column.header if column.header is not None else context.translate("Actions")
        return cell.with_content(header).add_attributes(column.header_attributes)

    def _is_visible(self, column: ActionColumn, name: str, context: DataContext) -> bool:
        if not column.visible_buttons:
            return True
        visible = column.visible_buttons.get(name, False)
        if isinstance(visible, bool):
            return visible
        return bool(visible(context.row, context.key, context.index))

    def _url(self, column: ActionColumn, name: str, button: ActionButton, context: DataContext) -> str:
        if isinstance(button.url, str):
            return button.url
        if button.url is not None:
            return button.url(context.row, context.key)
        if column.url_creator is None:
            raise UrlCreatorNotSetError()
        return column.url_creator(name, context.row, context.key)

    def render_body(self, column: ActionColumn, cell: Cell, context: DataContext) -> Cell:
        check_column(column, ActionColumn)
        cell = cell.add_attributes(column.body_attributes)
        if column.content is not None:
            return cell.with_content(str(column.content(context)))

        links = []
        for name, button in (column.buttons or DEFAULT_BUTTONS).items():
            if not self._is_visible(column, name, context):
                continue
            attributes = {"name": name, "role": "button", **button.attributes}
            if button.title is not None:
                attributes["title"] = button.title
            attributes = add_css_class(attributes, self.link_class, button.classes)
            links.append(Link(button.content, self._url(column, name, button, context), MappingProxyType(attributes)))
        return cell.with_content(*links)

    def render_footer(self, column: ActionColumn, cell: Cell, context: GlobalContext) -> Cell:
        check_column(column, ActionColumn)
        if column.footer is not None:
            cell = cell.with_content(column.footer)
        return cell.add_attributes(column.footer_attributes)
