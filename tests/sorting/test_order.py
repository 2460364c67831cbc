"""Tests for SortOrder equality, derivations and the sort token format."""

from __future__ import annotations

import pytest

from nicedataview.sorting import ASC, DESC, SortOrder, equals, is_valid_property, opposite, parse, serialize


def test_equality_ignores_insertion_order() -> None:
    a = SortOrder({"id": ASC, "name": DESC})
    b = SortOrder({"name": DESC, "id": ASC})
    assert a == b
    assert equals(a, b)
    assert hash(a) == hash(b)


def test_equality_with_plain_dict() -> None:
    assert SortOrder({"id": ASC}) == {"id": "asc"}
    assert SortOrder({"id": ASC}) != {"id": "desc"}


def test_invalid_direction_raises() -> None:
    with pytest.raises(ValueError, match="Invalid sort direction"):
        SortOrder({"id": "up"})


@pytest.mark.parametrize("name", ["", " id", "id ", "-id", "a,b"])
def test_property_that_cannot_be_encoded_raises(name: str) -> None:
    assert not is_valid_property(name)
    with pytest.raises(ValueError, match="Invalid sort property"):
        SortOrder({name: ASC})


def test_parse_skips_items_that_would_not_round_trip() -> None:
    order = parse("--x,id,-")
    assert list(order.items()) == [("id", ASC)]
    assert parse(serialize(order)) == order


def test_serialize_keeps_insertion_order() -> None:
    assert serialize(SortOrder({"id": ASC, "username": DESC})) == "id,-username"
    assert serialize(SortOrder({"username": DESC, "id": ASC})) == "-username,id"
    assert serialize(SortOrder()) == ""


def test_parse_token() -> None:
    order = parse("id,-username")
    assert list(order.items()) == [("id", ASC), ("username", DESC)]


def test_parse_skips_blanks_and_strips_whitespace() -> None:
    order = parse(" id , ,- name,")
    assert list(order.items()) == [("id", ASC), ("name", DESC)]


def test_parse_duplicate_keeps_first_position_last_direction() -> None:
    order = parse("id,name,-id")
    assert list(order.items()) == [("id", DESC), ("name", ASC)]


@pytest.mark.parametrize("token", [None, ""])
def test_parse_empty(token) -> None:
    assert parse(token) == SortOrder()


def test_parse_serialize_inverse() -> None:
    order = SortOrder({"b": DESC, "a": ASC, "c": DESC})
    assert parse(serialize(order)) == order
    assert SortOrder.from_token(order.to_token()) == order


def test_derivations_return_new_instances() -> None:
    order = SortOrder({"id": ASC, "name": ASC})
    assert order.with_direction("name", DESC) == {"id": ASC, "name": DESC}
    assert list(order.with_direction("age", ASC)) == ["id", "name", "age"]
    assert order.without("id") == {"name": ASC}
    assert order.only("age", DESC) == {"age": DESC}
    assert order.filtered(["name"]) == {"name": ASC}
    assert order.first() == {"id": ASC}
    assert order == {"id": ASC, "name": ASC}


def test_renamed_keeps_positions() -> None:
    order = SortOrder({"id": ASC, "user": DESC}).renamed({"user": "user_name"})
    assert list(order.items()) == [("id", ASC), ("user_name", DESC)]


def test_opposite() -> None:
    assert opposite(ASC) == DESC
    assert opposite(DESC) == ASC
