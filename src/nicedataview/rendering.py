"""Mount prepared cells and content as NiceGUI elements.

Everything above this module works on plain values; this is the only place
(together with the interactive controls) that creates NiceGUI elements.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from nicegui import ui

from nicedataview.columns.cell import Cell, Content, Control, Link, Text


def apply_attributes(element: Any, attributes: Mapping[str, Any]) -> Any:
    """Apply HTML ``attributes`` to a NiceGUI element.

    ``class`` and ``style`` go through ``classes()`` / ``style()``; ``None``
    and ``False`` values are skipped and ``True`` becomes an empty attribute.
    """
    for key, value in attributes.items():
        if value is None or value is False:
            continue
        if key == "class":
            element.classes(str(value))
        elif key == "style":
            element.style(str(value))
        else:
            element._props[key] = "" if value is True else value
    return element


def mount_element(tag: str, attributes: Optional[Mapping[str, Any]] = None) -> Any:
    element = ui.element(tag)
    if attributes:
        apply_attributes(element, attributes)
    return element


def mount_link(link: Link) -> Any:
    element = ui.link(link.label, link.url)
    apply_attributes(element, link.attributes)
    return element


def mount_content(item: Content, *, encode: Optional[bool] = None) -> Any:
    """Mount one content item in the current NiceGUI context."""
    if isinstance(item, Link):
        return mount_link(item)
    if isinstance(item, Text):
        element = ui.label(item.text)
        if item.classes:
            element.classes(item.classes)
        return element
    if isinstance(item, str):
        if encode is False:
            return ui.html(item, sanitize=False)
        return ui.label(item)
    if isinstance(item, Control):
        return item.build()
    raise TypeError(f"Unsupported cell content: {type(item).__name__}")


def mount_cell(tag: str, cell: Cell) -> Any:
    """Create ``<tag>`` with the cell's attributes and mount its content inside."""
    element = mount_element(tag, cell.attributes)
    with element:
        for item in cell.content:
            mount_content(item, encode=cell.encode)
    return element
