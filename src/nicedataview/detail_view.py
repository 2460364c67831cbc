"""DetailView: label/value list for a single record."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Optional, Union

from nicegui import ui

from nicedataview.columns.cell import Cell
from nicedataview.data.reader import get_value
from nicedataview.rendering import mount_cell, mount_element
from nicedataview.theme import ensure_dataview_theme
from nicedataview.utils.logging import get_logger
from nicedataview.value_presenter import SimpleValuePresenter, ValuePresenter

logger = get_logger(__name__)

Attributes = Union[Mapping[str, Any], Callable[[Mapping[str, Any]], Mapping[str, Any]]]

_MISSING = object()


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class DataField:
    """One row of a ``DetailView``.

    Attributes:
        property: Key in the record (dotted paths allowed). Optional when
            ``value`` is set.
        label: Label text; defaults to ``property``.
        value: ``callable(data)``, a literal, or ``None`` to read ``property``.
        label_attributes: ``dt`` attributes, or ``callable(data)``.
        value_attributes: ``dd`` attributes, or ``callable(data)``.
        visible: Whether the field is shown.

    Raises:
        ValueError: Neither ``property`` nor ``value`` is set.
    """

    property: Optional[str] = None
    label: Optional[str] = None
    value: Any = None
    label_attributes: Attributes = dataclasses.field(default_factory=_empty)
    value_attributes: Attributes = dataclasses.field(default_factory=_empty)
    visible: bool = True

    def __post_init__(self) -> None:
        if self.property is None and self.value is None:
            raise ValueError('Either "property" or "value" must be set.')


@dataclass(frozen=True)
class DetailView:
    """Show one record as a ``dl`` of labels and values.

    Attributes:
        data: The record.
        fields: Fields to show, in order.
        header: Title text above the list.
        value_true: Text for ``True`` values read from the record.
        value_false: Text for ``False`` values read from the record.
        presenter: Presents record values; defaults to a
            ``SimpleValuePresenter`` using ``value_true``/``value_false``.
        container_classes: Classes of the outer container.
        list_attributes: Attributes of the ``dl`` element.
    """

    data: Optional[Mapping[str, Any]] = None
    fields: Sequence[DataField] = ()
    header: str = ""
    value_true: str = "True"
    value_false: str = "False"
    presenter: Optional[ValuePresenter] = None
    container_classes: str = "ndv-detail-view"
    list_attributes: Mapping[str, Any] = dataclasses.field(
        default_factory=lambda: MappingProxyType({"class": "ndv-detail"})
    )

    def with_data(self, data: Mapping[str, Any]) -> DetailView:
        return replace(self, data=data)

    def with_fields(self, *fields: DataField) -> DetailView:
        return replace(self, fields=tuple(fields))

    def _presenter(self) -> ValuePresenter:
        if self.presenter is not None:
            return self.presenter
        return SimpleValuePresenter(true=self.value_true, false=self.value_false)

    def _value(self, field: DataField, data: Mapping[str, Any]) -> str:
        if field.value is None:
            value = get_value(data, field.property, _MISSING)
            if value is _MISSING:
                return ""
            return self._presenter().present(value)
        if callable(field.value):
            return str(field.value(data))
        return str(field.value)

    def _attributes(self, attributes: Attributes, data: Mapping[str, Any]) -> Mapping[str, Any]:
        return attributes(data) if callable(attributes) else attributes

    def prepare(self) -> list[tuple[Cell, Cell]]:
        """Return ``(label, value)`` cells of the visible fields.

        Raises:
            ValueError: Fields are configured but ``data`` is empty.
        """
        fields = [f for f in self.fields if f.visible]
        if not fields:
            return []
        if not self.data:
            raise ValueError('The "data" must be set.')
        data = self.data
        pairs = []
        for field in fields:
            label = field.label if field.label is not None else (field.property or "")
            pairs.append(
                (
                    Cell(MappingProxyType(dict(self._attributes(field.label_attributes, data))), (label,)),
                    Cell(MappingProxyType(dict(self._attributes(field.value_attributes, data))), (self._value(field, data),)),
                )
            )
        logger.debug("prepared %d detail fields", len(pairs))
        return pairs

    def build(self, *, container: Optional[ui.element] = None) -> Optional[ui.element]:
        """Mount the view; nothing is created when there are no visible fields.

        Args:
            container: Optional element to build into. If None, the view is
                created in the current NiceGUI context.
        """
        pairs = self.prepare()
        if not pairs:
            return None
        ensure_dataview_theme()
        if container is not None:
            with container:
                return self._mount(pairs)
        return self._mount(pairs)

    def _mount(self, pairs: list[tuple[Cell, Cell]]) -> ui.element:
        root = ui.element("div").classes(self.container_classes)
        with root:
            if self.header:
                ui.label(self.header).classes("ndv-detail-header")
            with mount_element("dl", self.list_attributes):
                for label, value in pairs:
                    mount_cell("dt", label)
                    mount_cell("dd", value)
        return root
