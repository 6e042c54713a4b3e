"""
Value transfer host.

The ledger never moves money itself; it asks a ValueTransfer host to pay out
funds it is holding from a purchase. A host must either complete a transfer
or raise, and must be able to reverse a completed transfer so the ledger can
keep purchase all-or-nothing.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Set
from uuid import UUID, uuid4

logger = logging.getLogger(__name__)


class TransferError(RuntimeError):
    """Raised by a host when a transfer cannot be completed."""


@dataclass(frozen=True, slots=True)
class TransferReceipt:
    """Proof that `amount` was paid to `recipient`."""

    transfer_id: UUID
    recipient: UUID
    amount: int
    memo: str = ""


class ValueTransfer(Protocol):
    def send(self, recipient: UUID, amount: int, *, memo: str = "") -> TransferReceipt:
        ...

    def reverse(self, receipt: TransferReceipt) -> None:
        ...


class InMemoryWallet:
    """
    Process-local ValueTransfer host that tracks balances per identity.

    `blocked_recipients` simulates a recipient that cannot accept funds.
    """

    def __init__(self, blocked_recipients: Optional[Iterable[UUID]] = None) -> None:
        self._balances: Dict[UUID, int] = defaultdict(int)
        self._receipts: List[TransferReceipt] = []
        self.blocked_recipients: Set[UUID] = set(blocked_recipients or ())

    def balance_of(self, identity: UUID) -> int:
        return self._balances.get(identity, 0)

    @property
    def receipts(self) -> List[TransferReceipt]:
        return list(self._receipts)

    def send(self, recipient: UUID, amount: int, *, memo: str = "") -> TransferReceipt:
        if amount <= 0:
            raise TransferError(f"transfer amount must be positive, got {amount}")
        if recipient in self.blocked_recipients:
            raise TransferError(f"recipient {recipient} cannot accept funds")

        receipt = TransferReceipt(transfer_id=uuid4(), recipient=recipient, amount=amount, memo=memo)
        self._balances[recipient] += amount
        self._receipts.append(receipt)
        logger.debug("Transferred %s to %s (%s)", amount, recipient, memo)
        return receipt

    def reverse(self, receipt: TransferReceipt) -> None:
        if receipt not in self._receipts:
            raise TransferError(f"unknown transfer {receipt.transfer_id}")

        self._balances[receipt.recipient] -= receipt.amount
        self._receipts.remove(receipt)
        logger.info(
            "Reversed transfer %s of %s to %s",
            receipt.transfer_id,
            receipt.amount,
            receipt.recipient,
        )


__all__ = ["InMemoryWallet", "TransferError", "TransferReceipt", "ValueTransfer"]
