"""Sort-toggle engine.

Decides what order a click on a sortable column header should produce.
Pure functions over immutable values; no URL building happens here.

Rules, for ``field`` present in the current order:

- multi-sort: ``asc`` -> ``desc``; a sole ``desc`` entry goes back to ``asc``
  when there is a non-empty default order; otherwise the field is removed.
- single-sort, field has a default direction: matching the default flips
  to the opposite (and becomes the only entry); otherwise it is removed.
- single-sort, no default direction: ``asc`` -> only ``{field: desc}``,
  otherwise removed.

A field missing from the current order is appended as ``asc`` (multi-sort)
or replaces the whole order (single-sort).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional

from nicedataview.sorting.order import ASC, DESC, SortOrder, opposite, serialize
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)


class ToggleKind(Enum):
    """Outcome of a header click."""
    NO_LINK = "no_link"          # not sortable: render static text
    USE_DEFAULT = "use_default"  # link clears the sort parameter
    ORDER = "order"              # link carries a concrete order


@dataclass(frozen=True)
class SortState:
    """Sort inputs for one render pass.

    Attributes:
        original_order: Default order, or ``None`` when sorting has no default.
        current_order: Applied order, or ``None`` when sorting is disabled.
        allowed_properties: Fields eligible for sorting.
        multi_sort: Toggle one field while keeping others (True) or replace
            the whole order (False).
        override_fields: Column property (URL name) -> real sort field.
    """

    original_order: Optional[SortOrder]
    current_order: Optional[SortOrder]
    allowed_properties: frozenset[str] = frozenset()
    multi_sort: bool = False
    override_fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def resolve_field(self, prop: str) -> str:
        return self.override_fields.get(prop, prop)

    def is_sortable(self, prop: str) -> bool:
        return (
            self.current_order is not None
            and self.original_order is not None
            and self.resolve_field(prop) in self.allowed_properties
        )

    def direction_of(self, prop: str) -> Optional[str]:
        """Current direction of ``prop``'s field, if any."""
        if self.current_order is None:
            return None
        return self.current_order.get(self.resolve_field(prop))


@dataclass(frozen=True)
class SortToggle:
    """Result of ``compute_next_order``.

    ``order`` is the computed candidate; it is set for USE_DEFAULT too so
    callers can inspect what the click would have produced.
    """

    kind: ToggleKind
    order: Optional[SortOrder] = None
    prop: str = ""
    sort_field: str = ""

    @property
    def has_link(self) -> bool:
        return self.kind is not ToggleKind.NO_LINK

    @property
    def token(self) -> Optional[str]:
        """Sort parameter value for the link, ``None`` when nothing is encoded."""
        if self.kind is not ToggleKind.ORDER or not self.order:
            return None
        renamed = self.order.renamed({self.sort_field: self.prop}) if self.sort_field != self.prop else self.order
        return serialize(renamed)


NO_LINK = SortToggle(ToggleKind.NO_LINK)


def _next_candidate(current: SortOrder, original: SortOrder, field_name: str, multi_sort: bool) -> SortOrder:
    if field_name in current:
        direction = current[field_name]
        if multi_sort:
            if direction == ASC:
                return current.with_direction(field_name, DESC)
            if original and len(current) == 1:
                return current.with_direction(field_name, ASC)
            return current.without(field_name)
        if field_name in original:
            if direction == original[field_name]:
                return current.only(field_name, opposite(original[field_name]))
            return current.without(field_name)
        if direction == ASC:
            return current.only(field_name, DESC)
        return current.without(field_name)

    if multi_sort:
        return current.with_direction(field_name, ASC)
    return current.only(field_name, ASC)


def compute_next_order(state: SortState, prop: str) -> SortToggle:
    """Compute the order a click on ``prop``'s header produces.

    Unknown or disallowed properties never raise; they yield ``NO_LINK``.
    """
    current, original = state.current_order, state.original_order
    if current is None or original is None or not state.is_sortable(prop):
        return NO_LINK

    field_name = state.resolve_field(prop)
    candidate = _next_candidate(current, original, field_name, state.multi_sort)

    if candidate == original:
        kind = ToggleKind.USE_DEFAULT
    else:
        kind = ToggleKind.ORDER
        candidate = candidate.filtered(state.allowed_properties)

    logger.debug(
        "toggle prop=%s field=%s multi=%s current=%s -> %s %s",
        prop,
        field_name,
        state.multi_sort,
        serialize(current),
        kind.value,
        serialize(candidate),
    )
    return SortToggle(kind=kind, order=candidate, prop=prop, sort_field=field_name)
