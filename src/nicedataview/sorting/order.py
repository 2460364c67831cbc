"""Sort order value type and its URL token format.

A ``SortOrder`` is an ordered, immutable mapping of property name to
direction. Insertion order is what gets displayed and serialized; equality
ignores it.

Token format
------------
Comma separated property names, ``-`` prefix for descending::

    "id,-username"   ->  {"id": "asc", "username": "desc"}
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Final, Literal, Optional, Union

Direction = Literal["asc", "desc"]

ASC: Final = "asc"
DESC: Final = "desc"
DIRECTIONS: Final = (ASC, DESC)

TOKEN_SEPARATOR: Final = ","
DESC_MARKER: Final = "-"

OrderLike = Union[Mapping[str, str], Iterable[tuple[str, str]]]


def is_valid_property(name: str) -> bool:
    """Whether ``name`` survives the token format unchanged."""
    return bool(name) and name == name.strip() and not name.startswith(DESC_MARKER) and TOKEN_SEPARATOR not in name


def opposite(direction: str) -> Direction:
    """Return the other direction."""
    return DESC if direction == ASC else ASC


class SortOrder(Mapping[str, str]):
    """Ordered property -> direction mapping with order-independent equality."""

    __slots__ = ("_map",)

    def __init__(self, order: OrderLike = ()) -> None:
        pairs = order.items() if isinstance(order, Mapping) else order
        normalized: dict[str, str] = {}
        for prop, direction in pairs:
            if direction not in DIRECTIONS:
                raise ValueError(f"Invalid sort direction {direction!r} for {prop!r}; expected 'asc' or 'desc'.")
            name = str(prop)
            if not is_valid_property(name):
                raise ValueError(f"Invalid sort property {name!r}; it cannot be encoded in a sort token.")
            normalized[name] = direction
        self._map = normalized

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, prop: str) -> str:
        return self._map[prop]

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return sorted(self._map.items()) == sorted(dict(other).items())

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._map.items())))

    def __repr__(self) -> str:
        return f"SortOrder({self._map!r})"

    # ------------------------------------------------------------------
    # Derivations (always return new instances)
    # ------------------------------------------------------------------

    def with_direction(self, prop: str, direction: str) -> SortOrder:
        """Set ``prop`` to ``direction``, keeping its position or appending it."""
        updated = dict(self._map)
        updated[prop] = direction
        return SortOrder(updated)

    def only(self, prop: str, direction: str) -> SortOrder:
        """Replace the whole order with a single entry."""
        return SortOrder({prop: direction})

    def without(self, prop: str) -> SortOrder:
        return SortOrder((k, v) for k, v in self._map.items() if k != prop)

    def filtered(self, allowed: Iterable[str]) -> SortOrder:
        """Drop properties that are not in ``allowed``."""
        allowed_set = set(allowed)
        return SortOrder((k, v) for k, v in self._map.items() if k in allowed_set)

    def renamed(self, names: Mapping[str, str]) -> SortOrder:
        """Rename keys via ``names`` (old -> new), keeping positions."""
        return SortOrder((names.get(k, k), v) for k, v in self._map.items())

    def first(self) -> SortOrder:
        """Keep only the first entry (single-sort mode)."""
        return SortOrder(list(self._map.items())[:1])

    # ------------------------------------------------------------------
    # Token format
    # ------------------------------------------------------------------

    def to_token(self) -> str:
        return serialize(self)

    @classmethod
    def from_token(cls, token: Optional[str]) -> SortOrder:
        return parse(token)


def equals(a: Mapping[str, Any], b: Mapping[str, Any]) -> bool:
    """Compare two orders ignoring insertion order."""
    return sorted(dict(a).items()) == sorted(dict(b).items())


def serialize(order: Mapping[str, str]) -> str:
    """Encode an order as ``"id,-username"`` keeping insertion order."""
    return TOKEN_SEPARATOR.join(
        f"{DESC_MARKER}{prop}" if direction == DESC else prop for prop, direction in order.items()
    )


def parse(token: Optional[str]) -> SortOrder:
    """Decode a sort token. Blank or malformed items are skipped; a repeated property keeps its first position."""
    if not token:
        return SortOrder()
    pairs: list[tuple[str, str]] = []
    for raw in token.split(TOKEN_SEPARATOR):
        item = raw.strip()
        if item.startswith(DESC_MARKER):
            prop, direction = item[len(DESC_MARKER):].strip(), DESC
        else:
            prop, direction = item, ASC
        if is_valid_property(prop):
            pairs.append((prop, direction))
    return SortOrder(pairs)
