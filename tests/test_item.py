"""
Tests for `domain/item.py`.

Covers contract rules:
- buyer is unset iff state is ForSale.
- seller is always set.
- Transitions only move one step forward and return new instances.
- Item is immutable (frozen).
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from uuid import UUID

import pytest

from domain.item import Item, ItemState

SELLER = UUID("00000000-0000-0000-0000-000000000001")
BUYER = UUID("00000000-0000-0000-0000-000000000002")


def _listed() -> Item:
    return Item(item_id=0, name="Widget", price=100, state=ItemState.FOR_SALE, seller=SELLER)


def test_state_ordinals_match_lifecycle_order() -> None:
    assert [int(s) for s in ItemState] == [0, 1, 2, 3]
    assert ItemState.FOR_SALE.label == "ForSale"
    assert ItemState.RECEIVED.label == "Received"


def test_buyer_must_be_unset_iff_for_sale() -> None:
    with pytest.raises(ValueError):
        Item(item_id=0, name="Widget", price=100, state=ItemState.FOR_SALE, seller=SELLER, buyer=BUYER)

    with pytest.raises(ValueError):
        Item(item_id=0, name="Widget", price=100, state=ItemState.SOLD, seller=SELLER, buyer=None)


def test_seller_is_required() -> None:
    with pytest.raises(ValueError):
        Item(item_id=0, name="Widget", price=100, state=ItemState.FOR_SALE, seller=None)  # type: ignore[arg-type]


def test_transitions_return_new_instances_and_keep_original_unchanged() -> None:
    listed = _listed()

    sold = listed.sold_to(BUYER)
    shipped = sold.shipped()
    received = shipped.received()

    assert listed.state == ItemState.FOR_SALE
    assert listed.buyer is None
    assert sold.state == ItemState.SOLD and sold.buyer == BUYER
    assert shipped.state == ItemState.SHIPPED
    assert received.state == ItemState.RECEIVED
    assert received.is_terminal is True
    assert (received.item_id, received.name, received.price, received.seller) == (0, "Widget", 100, SELLER)


def test_transitions_cannot_skip_or_reverse() -> None:
    listed = _listed()

    with pytest.raises(ValueError):
        listed.shipped()
    with pytest.raises(ValueError):
        listed.received()
    with pytest.raises(ValueError):
        listed.sold_to(BUYER).sold_to(BUYER)
    with pytest.raises(ValueError):
        listed.sold_to(BUYER).shipped().shipped()


def test_as_tuple_reports_state_ordinal() -> None:
    item = _listed().sold_to(BUYER).shipped().received()

    assert item.as_tuple() == ("Widget", 0, 100, 3, SELLER, BUYER)


def test_item_is_immutable() -> None:
    item = _listed()

    with pytest.raises(FrozenInstanceError):
        item.state = ItemState.SOLD  # type: ignore[misc]
