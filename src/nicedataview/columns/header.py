"""Sortable header presentation.

``HeaderContext.prepare_sortable`` turns a toggle decision into what the
header cell shows: which CSS state it is in, which decorations surround
the label and where the header link points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple, Optional, Union

from nicedataview.columns.cell import Cell, Link, add_css_class
from nicedataview.exceptions import UrlCreatorNotSetError
from nicedataview.i18n import Translator, format_message
from nicedataview.sorting import ASC, SortState, compute_next_order
from nicedataview.url import PageToken, UrlConfig, UrlCreator, create_url_parameters
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SortableHeaderStyle:
    """Classes and decorations for the three header states.

    Attributes:
        header_class: Cell class when the column is sortable but unsorted.
        header_prepend: Text before the label when unsorted.
        header_append: Text after the label when unsorted.
        header_asc_class: Cell class when sorted ascending.
        header_asc_prepend: Text before the label when sorted ascending.
        header_asc_append: Text after the label when sorted ascending.
        header_desc_class: Cell class when sorted descending.
        header_desc_prepend: Text before the label when sorted descending.
        header_desc_append: Text after the label when sorted descending.
        link_attributes: Base attributes of every header link.
        link_asc_class: Extra link class when sorted ascending.
        link_desc_class: Extra link class when sorted descending.
    """

    header_class: Optional[str] = "ndv-sortable"
    header_prepend: str = ""
    header_append: str = ""
    header_asc_class: Optional[str] = "ndv-sorted-asc"
    header_asc_prepend: str = ""
    header_asc_append: str = " ↑"
    header_desc_class: Optional[str] = "ndv-sorted-desc"
    header_desc_prepend: str = ""
    header_desc_append: str = " ↓"
    link_attributes: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    link_asc_class: Optional[str] = None
    link_desc_class: Optional[str] = None


class SortableHeader(NamedTuple):
    cell: Cell
    link: Optional[Link]
    prepend: str
    append: str


@dataclass(frozen=True)
class HeaderContext:
    """Everything a renderer needs to build a header cell.

    Attributes:
        sort_state: Sort inputs of the current render pass.
        style: Sortable header styling.
        url_config: URL parameter naming.
        url_creator: Builds header link URLs; required once a link is shown.
        page_token: Page token kept in header links.
        page_size: Page size kept in header links (``None`` for the default).
        translator: Message translator for header labels.
    """

    sort_state: SortState
    style: SortableHeaderStyle = SortableHeaderStyle()
    url_config: UrlConfig = UrlConfig()
    url_creator: Optional[UrlCreator] = None
    page_token: Optional[PageToken] = None
    page_size: Union[int, str, None] = None
    translator: Translator = format_message

    def translate(self, message: str) -> str:
        return self.translator(message, {})

    def prepare_sortable(self, cell: Cell, prop: str) -> SortableHeader:
        """Decide the sort decorations and link for ``prop``'s header.

        Raises:
            UrlCreatorNotSetError: The header needs a link and no URL creator
                is configured.
        """
        toggle = compute_next_order(self.sort_state, prop)
        if not toggle.has_link:
            return SortableHeader(cell, None, "", "")

        style = self.style
        link_attributes = dict(style.link_attributes)
        direction = self.sort_state.direction_of(prop)
        if direction is None:
            cell = cell.add_class(style.header_class)
            prepend, append = style.header_prepend, style.header_append
        elif direction == ASC:
            cell = cell.add_class(style.header_asc_class)
            prepend, append = style.header_asc_prepend, style.header_asc_append
            link_attributes = add_css_class(link_attributes, style.link_asc_class)
        else:
            cell = cell.add_class(style.header_desc_class)
            prepend, append = style.header_desc_prepend, style.header_desc_append
            link_attributes = add_css_class(link_attributes, style.link_desc_class)

        if self.url_creator is None:
            raise UrlCreatorNotSetError()

        arguments, query_parameters = create_url_parameters(
            self.page_token,
            self.page_size,
            toggle.token,
            self.url_config,
        )
        url = self.url_creator(arguments, query_parameters)
        logger.debug("header %s -> %s (%s)", prop, url, toggle.kind.value)

        return SortableHeader(cell, Link("", url, MappingProxyType(link_attributes)), prepend, append)
