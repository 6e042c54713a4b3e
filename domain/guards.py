"""
Domain: Transition guards.

Each guard is a pure check over an Item's current fields plus the caller's
identity. Guards never mutate; they either return None or raise the specific
LedgerError for the violated precondition.

Operations compose guards in a fixed order (see GUARDS_BY_OPERATION) and the
ledger runs all of them before touching state.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence
from uuid import UUID

from .errors import (
    InsufficientPayment,
    InvalidInput,
    NotForSale,
    NotShipped,
    NotSold,
    Unauthorized,
)
from .item import Item, ItemState


# ============================================================================
# Predicates
# ============================================================================

def is_for_sale(item: Item) -> bool:
    return item.state == ItemState.FOR_SALE and item.buyer is None and item.seller is not None


def is_sold(item: Item) -> bool:
    return item.state == ItemState.SOLD and item.buyer is not None and item.seller is not None


def is_shipped(item: Item) -> bool:
    return item.state == ItemState.SHIPPED and item.buyer is not None and item.seller is not None


def is_seller(item: Item, caller: UUID) -> bool:
    return item.seller == caller


def is_buyer(item: Item, caller: UUID) -> bool:
    # None never equals a real identity
    return item.buyer is not None and item.buyer == caller


# ============================================================================
# Raising guards
# ============================================================================

def require_listing_input(name: str, price: int) -> None:
    """Validate listing input: non-empty name and a positive integer price."""

    if not isinstance(name, str) or not name.strip():
        raise InvalidInput("name must be a non-empty string")
    if isinstance(price, bool) or not isinstance(price, int):
        raise InvalidInput("price must be an integer amount in the smallest currency unit")
    if price <= 0:
        raise InvalidInput(f"price must be positive, got {price}")


def require_payment_amount(paid_amount: int) -> None:
    if isinstance(paid_amount, bool) or not isinstance(paid_amount, int):
        raise InvalidInput("paid amount must be an integer")
    if paid_amount < 0:
        raise InvalidInput(f"paid amount must be non-negative, got {paid_amount}")


def require_for_sale(item: Item, caller: UUID) -> None:
    if not is_for_sale(item):
        raise NotForSale(
            f"item {item.item_id} is not for sale (state: {item.state.label})",
            item_id=item.item_id,
        )


def require_sold(item: Item, caller: UUID) -> None:
    if not is_sold(item):
        raise NotSold(
            f"item {item.item_id} has not been sold (state: {item.state.label})",
            item_id=item.item_id,
        )


def require_shipped(item: Item, caller: UUID) -> None:
    if not is_shipped(item):
        raise NotShipped(
            f"item {item.item_id} has not been shipped (state: {item.state.label})",
            item_id=item.item_id,
        )


def require_seller(item: Item, caller: UUID) -> None:
    if not is_seller(item, caller):
        raise Unauthorized(f"only the seller may act on item {item.item_id}", item_id=item.item_id)


def require_buyer(item: Item, caller: UUID) -> None:
    if not is_buyer(item, caller):
        raise Unauthorized(f"only the buyer may act on item {item.item_id}", item_id=item.item_id)


def require_sufficient_payment(item: Item, paid_amount: int) -> None:
    if paid_amount < item.price:
        raise InsufficientPayment(
            f"paid {paid_amount} but item {item.item_id} costs {item.price}",
            item_id=item.item_id,
        )


Guard = Callable[[Item, UUID], None]

# Order matters: ship rejects a non-seller before looking at state, while
# confirm_receipt reports the state violation first.
GUARDS_BY_OPERATION: Dict[str, Sequence[Guard]] = {
    "purchase": (require_for_sale,),
    "ship": (require_seller, require_sold),
    "confirm_receipt": (require_shipped, require_buyer),
}


def run_guards(operation: str, item: Item, caller: UUID, *, paid_amount: Optional[int] = None) -> None:
    """Run every guard registered for `operation` against `item`."""

    for guard in GUARDS_BY_OPERATION[operation]:
        guard(item, caller)
    if paid_amount is not None:
        require_sufficient_payment(item, paid_amount)


__all__ = [
    "GUARDS_BY_OPERATION",
    "is_buyer",
    "is_for_sale",
    "is_seller",
    "is_shipped",
    "is_sold",
    "require_buyer",
    "require_for_sale",
    "require_listing_input",
    "require_payment_amount",
    "require_seller",
    "require_shipped",
    "require_sold",
    "require_sufficient_payment",
    "run_guards",
]
