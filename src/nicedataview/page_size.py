"""Page size constraint handling and the page size widgets.

Constraint values:

- ``True``: only the default page size is allowed (no widget).
- ``False``: any positive page size.
- ``int``: any positive page size up to this maximum.
- ``list[int]``: one of these sizes (the first one is the fallback).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Final, Optional, Sequence, Union

from nicegui import ui

from nicedataview.exceptions import ConfigurationError
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)

URL_PLACEHOLDER: Final = "NICEDATAVIEW-PAGE-SIZE-PLACEHOLDER"

PageSizeConstraint = Union[bool, int, Sequence[int]]


def _is_size_list(constraint: PageSizeConstraint) -> bool:
    return not isinstance(constraint, (bool, int))


def default_page_size(page_size: int, constraint: PageSizeConstraint) -> int:
    """Clamp the configured default page size to ``constraint``."""
    if isinstance(constraint, bool):
        return page_size
    if isinstance(constraint, int):
        return min(page_size, constraint)
    if not constraint:
        return page_size
    return page_size if page_size in constraint else constraint[0]


def prepare_page_size(raw: Optional[str], constraint: PageSizeConstraint) -> Optional[int]:
    """Validate a page size from the request.

    Returns:
        The page size, or ``None`` when it is missing, malformed or not
        allowed (the caller then uses the default).
    """
    if constraint is True or raw is None:
        return None
    try:
        size = int(raw)
    except ValueError:
        logger.debug("ignoring non-numeric page size %r", raw)
        return None
    if size < 1:
        return None
    if constraint is False:
        return size
    if isinstance(constraint, int):
        return size if size <= constraint else None
    return size if size in constraint else None


@dataclass(frozen=True)
class PageSizeContext:
    """State handed to a page size widget.

    Attributes:
        current_value: Page size in effect.
        default_value: Page size used when the URL carries none.
        constraint: Allowed page sizes (see module docstring).
        url_pattern: URL with ``URL_PLACEHOLDER`` where the size goes.
        default_url: URL without a page size parameter.
    """

    current_value: int
    default_value: int
    constraint: PageSizeConstraint
    url_pattern: str
    default_url: str

    def url_for(self, size: Any) -> str:
        if str(size) == str(self.default_value):
            return self.default_url
        return self.url_pattern.replace(URL_PLACEHOLDER, str(size))


class _PageSizeWidget:
    context: Optional[PageSizeContext]

    def _require_context(self) -> PageSizeContext:
        if self.context is None:
            raise ConfigurationError(f"{type(self).__name__} has no context. Call `with_context()` first.")
        return self.context

    def _navigate(self, size: Any) -> None:
        if size is None or str(size).strip() == "":
            return
        url = self._require_context().url_for(str(size).strip())
        logger.debug("page size %s -> %s", size, url)
        ui.navigate.to(url)


@dataclass(frozen=True)
class SelectPageSize(_PageSizeWidget):
    """Choice of the sizes in a list constraint; shown only for two or more sizes."""

    classes: str = "ndv-page-size"
    context: Optional[PageSizeContext] = None

    def with_context(self, context: PageSizeContext) -> SelectPageSize:
        return replace(self, context=context)

    def options(self) -> list[int]:
        constraint = self._require_context().constraint
        if not _is_size_list(constraint) or len(constraint) < 2:
            return []
        return list(constraint)

    def build(self) -> Optional[ui.select]:
        options = self.options()
        if not options:
            return None
        context = self._require_context()
        element = ui.select(options, value=context.current_value, on_change=lambda e: self._navigate(e.value))
        element.classes(self.classes).props("dense")
        return element


@dataclass(frozen=True)
class InputPageSize(_PageSizeWidget):
    """Free page size input, applied on Enter."""

    classes: str = "ndv-page-size"
    context: Optional[PageSizeContext] = None

    def with_context(self, context: PageSizeContext) -> InputPageSize:
        return replace(self, context=context)

    def build(self) -> ui.input:
        context = self._require_context()
        element = ui.input(value=str(context.current_value))
        element.classes(self.classes).props("dense")
        element.on("keydown.enter", lambda _e: self._navigate(element.value))
        return element


PageSizeWidget = Union[SelectPageSize, InputPageSize]


def widget_for(constraint: PageSizeConstraint) -> Optional[PageSizeWidget]:
    """Default widget for a constraint: input for ``False``/int, select for lists."""
    if constraint is True:
        return None
    if constraint is False or isinstance(constraint, int):
        return InputPageSize()
    return SelectPageSize()
