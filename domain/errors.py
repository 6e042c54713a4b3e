"""
Domain: Ledger error taxonomy.

Every rejected ledger operation raises exactly one of these. Each error carries
a stable `kind` string so transports can map it without isinstance chains.

A rejected operation never leaves a partial state change behind.
"""

from __future__ import annotations

from typing import Optional


class LedgerError(Exception):
    """Base class for all ledger rejections."""

    kind: str = "LedgerError"

    def __init__(self, message: str, *, item_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.item_id = item_id


class InvalidInput(LedgerError):
    """Bad name, price, or payment amount."""

    kind = "InvalidInput"


class NotFound(LedgerError):
    """No item exists at the requested id."""

    kind = "NotFound"


class StateGuardError(LedgerError):
    """The item is not in the lifecycle state the operation requires."""

    kind = "StateGuardError"


class NotForSale(StateGuardError):
    kind = "NotForSale"


class NotSold(StateGuardError):
    kind = "NotSold"


class NotShipped(StateGuardError):
    kind = "NotShipped"


class InsufficientPayment(LedgerError):
    """Attached payment is below the listed price."""

    kind = "InsufficientPayment"


class Unauthorized(LedgerError):
    """Caller does not hold the role the operation requires."""

    kind = "Unauthorized"


class TransferFailed(LedgerError):
    """Value transfer to the seller or the refund to the buyer failed."""

    kind = "TransferFailed"


class ConcurrentModification(LedgerError):
    """The store rejected a write because another writer got there first."""

    kind = "ConcurrentModification"


class DirectTransferRejected(LedgerError):
    """Funds sent to the ledger outside of a purchase."""

    kind = "DirectTransferRejected"


__all__ = [
    "LedgerError",
    "InvalidInput",
    "NotFound",
    "StateGuardError",
    "NotForSale",
    "NotSold",
    "NotShipped",
    "InsufficientPayment",
    "Unauthorized",
    "TransferFailed",
    "ConcurrentModification",
    "DirectTransferRejected",
]
