"""Sort configuration carried by data readers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Optional

from nicedataview.sorting import SortOrder


@dataclass(frozen=True)
class Sort:
    """Which properties may be sorted, the default order and the applied order.

    Attributes:
        allowed: Properties eligible for sorting.
        default_order: Order used when the request does not specify one.
        order: Applied order. ``None`` means "use ``default_order``".
    """

    allowed: frozenset[str] = frozenset()
    default_order: SortOrder = field(default_factory=SortOrder)
    order: Optional[SortOrder] = None

    @classmethod
    def only(cls, allowed: Iterable[str], default_order: Optional[Mapping[str, str]] = None) -> Sort:
        """Create a sort config restricted to ``allowed``.

        Entries of ``default_order`` outside ``allowed`` are dropped.
        """
        allowed_set = frozenset(allowed)
        default = SortOrder(default_order or {}).filtered(allowed_set)
        return cls(allowed=allowed_set, default_order=default)

    @property
    def current_order(self) -> SortOrder:
        return self.default_order if self.order is None else self.order

    def has_field(self, prop: str) -> bool:
        return prop in self.allowed

    def with_order(self, order: Mapping[str, str]) -> Sort:
        """Apply ``order``, silently dropping properties that are not allowed."""
        return replace(self, order=SortOrder(order).filtered(self.allowed))
