"""Filter input widgets shown in the grid's filter row.

A widget is configured once per column and bound to a
``FilterWidgetContext`` for each build. Changing the value navigates to the
URL the grid computed for the new filter value.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterable, Optional, Union

from nicegui import ui

from nicedataview.exceptions import ConfigurationError
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FilterWidgetContext:
    """Per-build state of a filter widget.

    Attributes:
        property: Query parameter (and column property) the filter writes.
        value: Current raw value from the request, if any.
        url_for: Maps a new value (``None`` to clear) to the URL to open.
    """

    property: str
    value: Optional[str]
    url_for: Callable[[Optional[str]], str]


class _BoundWidget:
    context: Optional[FilterWidgetContext]

    def _require_context(self) -> FilterWidgetContext:
        if self.context is None:
            raise ConfigurationError(f"{type(self).__name__} has no context. Call `with_context()` first.")
        return self.context

    def _navigate(self, value: Any) -> None:
        context = self._require_context()
        text = None if value is None or value == "" else str(value)
        url = context.url_for(text)
        logger.debug("filter %s=%r -> %s", context.property, text, url)
        ui.navigate.to(url)


@dataclass(frozen=True)
class TextInputFilter(_BoundWidget):
    """Free text filter; applied when the user presses Enter."""

    placeholder: str = ""
    classes: str = "ndv-filter-input"
    context: Optional[FilterWidgetContext] = None

    def with_context(self, context: FilterWidgetContext) -> TextInputFilter:
        return replace(self, context=context)

    def build(self) -> ui.input:
        context = self._require_context()
        element = ui.input(value=context.value or "", placeholder=self.placeholder or None)
        element.classes(self.classes).props("dense clearable")
        element.on("keydown.enter", lambda _e: self._navigate(element.value))
        element.on("clear", lambda _e: self._navigate(None))
        return element


OptionsData = Union[Mapping[str, str], Iterable[str]]


def _normalize_options(options: OptionsData) -> Mapping[str, str]:
    if isinstance(options, Mapping):
        return MappingProxyType({str(k): str(v) for k, v in options.items()})
    return MappingProxyType({str(v): str(v) for v in options})


@dataclass(frozen=True)
class DropdownFilter(_BoundWidget):
    """Choice filter with an empty "any" option first.

    Attributes:
        options: Value -> label mapping, or an iterable of values used as
            their own labels.
        prompt: Label of the empty option.
    """

    options: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    prompt: str = ""
    classes: str = "ndv-filter-select"
    context: Optional[FilterWidgetContext] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _normalize_options(self.options))

    def with_options(self, options: OptionsData) -> DropdownFilter:
        return replace(self, options=_normalize_options(options))

    def with_context(self, context: FilterWidgetContext) -> DropdownFilter:
        return replace(self, context=context)

    def build(self) -> ui.select:
        context = self._require_context()
        choices = {"": self.prompt, **self.options}
        value = context.value if context.value in choices else ""
        element = ui.select(choices, value=value, on_change=lambda e: self._navigate(e.value))
        element.classes(self.classes).props("dense")
        return element


FilterWidget = Union[TextInputFilter, DropdownFilter]
