"""Cell model shared by all column renderers.

A ``Cell`` is the framework-neutral description of one table cell: its
attributes and its content. NiceGUI elements are only created later, when a
view is built (see ``nicedataview.rendering``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class Control(Protocol):
    """Interactive content (filter inputs, checkboxes) mounted as NiceGUI elements."""

    def build(self) -> Any:
        ...


@dataclass(frozen=True)
class Link:
    """Anchor content: ``label`` pointing at ``url``."""

    label: str
    url: str
    attributes: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def with_label(self, label: str) -> Link:
        return replace(self, label=label)


@dataclass(frozen=True)
class Text:
    """Text shown as its own block, e.g. a validation message."""

    text: str
    classes: str = ""


Content = Union[str, Link, Text, Control]


def add_css_class(attributes: Mapping[str, Any], *classes: Optional[str]) -> dict[str, Any]:
    """Return a copy of ``attributes`` with ``classes`` appended to ``class``.

    ``None`` and empty entries are ignored; a class already present is not
    added twice.
    """
    result = dict(attributes)
    existing = str(result.get("class") or "").split()
    for css in classes:
        if not css:
            continue
        for name in css.split():
            if name not in existing:
                existing.append(name)
    if existing:
        result["class"] = " ".join(existing)
    return result


@dataclass(frozen=True)
class Cell:
    """Immutable table cell.

    Attributes:
        attributes: HTML attributes of the cell element.
        content: Text, links or controls, mounted in order.
        encode: Whether text content is plain text (``True``/``None``) or
            trusted markup (``False``).
    """

    attributes: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    content: tuple[Content, ...] = ()
    encode: Optional[bool] = None

    def with_content(self, *content: Content) -> Cell:
        return replace(self, content=tuple(content))

    def with_encode(self, encode: Optional[bool]) -> Cell:
        return replace(self, encode=encode)

    def with_attributes(self, attributes: Mapping[str, Any]) -> Cell:
        return replace(self, attributes=MappingProxyType(dict(attributes)))

    def add_attributes(self, attributes: Mapping[str, Any]) -> Cell:
        merged = dict(self.attributes)
        merged.update(attributes)
        return replace(self, attributes=MappingProxyType(merged))

    def with_attribute(self, name: str, value: Any) -> Cell:
        return self.add_attributes({name: value})

    def add_class(self, *classes: Optional[str]) -> Cell:
        return replace(self, attributes=MappingProxyType(add_css_class(self.attributes, *classes)))

    def is_empty_content(self) -> bool:
        for item in self.content:
            if isinstance(item, str):
                if item:
                    return False
            else:
                return False
        return True

    def text(self) -> str:
        """Concatenated text of string and link content."""
        parts = []
        for item in self.content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Link):
                parts.append(item.label)
            elif isinstance(item, Text):
                parts.append(item.text)
        return "".join(parts)
