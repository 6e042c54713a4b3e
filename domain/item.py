"""
Domain: Item entity and lifecycle state.

Contract excerpts implemented here:
- An Item moves through ForSale -> Sold -> Shipped -> Received, one step at a time.
- item_id, name, price and seller are fixed at creation.
- buyer is unset (None) if and only if the item is ForSale.
- Items are never deleted; the record is the historical trail.

This module contains only pure domain entities: no I/O, no database, no frameworks.
Transitions return new instances; an Item is never mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional, Tuple
from uuid import UUID


class ItemState(IntEnum):
    """Lifecycle cursor. The integer value is the externally visible ordinal."""

    FOR_SALE = 0
    SOLD = 1
    SHIPPED = 2
    RECEIVED = 3

    @property
    def label(self) -> str:
        return _STATE_LABELS[self]


_STATE_LABELS = {
    ItemState.FOR_SALE: "ForSale",
    ItemState.SOLD: "Sold",
    ItemState.SHIPPED: "Shipped",
    ItemState.RECEIVED: "Received",
}


@dataclass(frozen=True, slots=True)
class Item:
    """
    Immutable snapshot of a single sale record.

    Notes:
    - `buyer` uses None as the "no identity" sentinel, so it can never collide
      with a real participant's identity.
    - name/price validity is enforced by the ledger when listing; this entity
      only guards the structural invariants.
    """

    item_id: int
    name: str
    price: int
    state: ItemState
    seller: UUID
    buyer: Optional[UUID] = None

    def __post_init__(self) -> None:
        if self.item_id < 0:
            raise ValueError("item_id must be non-negative")
        if self.seller is None:
            raise ValueError("seller must be set")
        if (self.buyer is None) != (self.state == ItemState.FOR_SALE):
            raise ValueError("buyer must be unset if and only if the item is ForSale")

    @property
    def is_terminal(self) -> bool:
        return self.state == ItemState.RECEIVED

    def sold_to(self, buyer: UUID) -> "Item":
        """Return a new Item in state Sold with buyer recorded."""

        if self.state != ItemState.FOR_SALE:
            raise ValueError(f"cannot sell an item in state {self.state.label}")
        return replace(self, state=ItemState.SOLD, buyer=buyer)

    def shipped(self) -> "Item":
        if self.state != ItemState.SOLD:
            raise ValueError(f"cannot ship an item in state {self.state.label}")
        return replace(self, state=ItemState.SHIPPED)

    def received(self) -> "Item":
        if self.state != ItemState.SHIPPED:
            raise ValueError(f"cannot receive an item in state {self.state.label}")
        return replace(self, state=ItemState.RECEIVED)

    def as_tuple(self) -> Tuple[str, int, int, int, UUID, Optional[UUID]]:
        """(name, id, price, state ordinal, seller, buyer), the read accessor layout."""

        return (self.name, self.item_id, self.price, int(self.state), self.seller, self.buyer)


__all__ = ["Item", "ItemState"]
