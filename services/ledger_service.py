"""
Item ledger service.

Owns the lifecycle of every Item: ForSale -> Sold -> Shipped -> Received.

Handles:
- Listing new items with sequential ids
- Purchase with exact overpayment refund (all-or-nothing)
- Seller-only shipping and buyer-only receipt confirmation
- Read-only lookup
- Rejection of funds sent outside of a purchase

Every operation holds the ledger lock end to end: guards run first, then the
state change is committed, then value transfers run, then the event is
published. A failed transfer restores the prior item and reverses any
completed transfer before the error reaches the caller.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Type
from uuid import UUID

from domain.errors import (
    ConcurrentModification,
    DirectTransferRejected,
    LedgerError,
    NotFound,
    NotForSale,
    NotShipped,
    NotSold,
    StateGuardError,
    TransferFailed,
)
from domain.events import LedgerEvent, LedgerEventType
from domain.guards import require_listing_input, require_payment_amount, run_guards
from domain.item import Item, ItemState
from repositories.item_store import InMemoryItemStore, ItemStore
from services.event_publisher import EventPublisher
from services.transfer_service import InMemoryWallet, TransferReceipt, ValueTransfer

logger = logging.getLogger(__name__)


class ItemLedger:
    """
    Lifecycle-scoped ledger service.

    Build one instance per process (or per test) and pass it to callers
    explicitly. All collaborators are injectable; the defaults keep
    everything in memory.

    Example:
        ledger = ItemLedger()
        item_id = ledger.list_item("Widget", 100, caller=seller)
        ledger.purchase(item_id, caller=buyer, paid_amount=120)
        ledger.ship(item_id, caller=seller)
        ledger.confirm_receipt(item_id, caller=buyer)
        ledger.fetch(item_id).as_tuple()
        # ("Widget", 0, 100, 3, seller, buyer)
    """

    def __init__(
        self,
        store: Optional[ItemStore] = None,
        transfers: Optional[ValueTransfer] = None,
        publisher: Optional[EventPublisher] = None,
    ) -> None:
        self.store: ItemStore = store if store is not None else InMemoryItemStore()
        self.transfers: ValueTransfer = transfers if transfers is not None else InMemoryWallet()
        self.publisher = publisher if publisher is not None else EventPublisher()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _operation(self, operation: str, item_id: Optional[int] = None) -> Iterator[None]:
        """Serialize the operation and log any rejection before re-raising it."""

        with self._lock:
            try:
                yield
            except LedgerError as exc:
                logger.warning(
                    f"{operation} rejected: {exc}",
                    extra={"operation": operation, "item_id": item_id, "error_kind": exc.kind},
                )
                raise

    def _load(self, item_id: int) -> Item:
        item = self.store.get(item_id)
        if item is None:
            raise NotFound(f"No item exists with id {item_id}", item_id=item_id)
        return item

    def _commit(self, current: Item, updated: Item, conflict: Type[StateGuardError]) -> None:
        """Persist a transition; a stale `current` means the state guard no longer holds."""

        try:
            self.store.replace(current, updated)
        except ValueError as exc:
            # Only possible if another process shares the store.
            raise conflict(str(exc), item_id=current.item_id) from exc

    def _roll_back_purchase(self, item: Item, sold: Item, receipts: List[TransferReceipt]) -> List[str]:
        """
        Undo a half-finished purchase.

        Reverses completed transfers newest first, then restores the listed
        item even if a reversal failed. Returns a description of every step
        that could not be undone (empty when the rollback was clean).
        """
        problems: List[str] = []
        try:
            for receipt in reversed(receipts):
                try:
                    self.transfers.reverse(receipt)
                except Exception as exc:
                    problems.append(f"reversal of transfer {receipt.transfer_id} failed: {exc}")
                    logger.error(
                        f"Could not reverse transfer {receipt.transfer_id} for item {item.item_id}",
                        exc_info=True,
                        extra={"item_id": item.item_id, "amount": receipt.amount},
                    )
        finally:
            try:
                self.store.replace(sold, item)
            except Exception as exc:
                problems.append(f"restoring item {item.item_id} failed: {exc}")
                logger.error(
                    f"Could not restore item {item.item_id} after failed purchase",
                    exc_info=True,
                    extra={"item_id": item.item_id},
                )
        return problems

    def _emit(self, event_type: LedgerEventType, item_id: int, actor: UUID) -> None:
        self.publisher.publish(
            LedgerEvent(
                event_type=event_type,
                item_id=item_id,
                occurred_at=datetime.now(timezone.utc),
                actor=actor,
            )
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_item(self, name: str, price: int, caller: UUID) -> int:
        """
        List a new item for sale.

        Args:
            name: Non-empty description
            price: Positive integer amount in the smallest currency unit
            caller: Identity of the seller

        Returns:
            The newly allocated item id

        Raises:
            InvalidInput: If name is empty or price is not a positive integer
        """
        with self._operation("list"):
            require_listing_input(name, price)
            item = Item(
                item_id=self.store.next_id(),
                name=name,
                price=price,
                state=ItemState.FOR_SALE,
                seller=caller,
                buyer=None,
            )
            try:
                self.store.add(item)
            except ValueError as exc:
                # Another writer took this id between next_id() and add().
                raise ConcurrentModification(str(exc), item_id=item.item_id) from exc

            logger.info(
                f"Item {item.item_id} listed for sale at {price}",
                extra={"item_id": item.item_id, "seller": str(caller), "price": price},
            )
            self._emit(LedgerEventType.FOR_SALE_LISTED, item.item_id, caller)
            return item.item_id

    def purchase(self, item_id: int, caller: UUID, paid_amount: int) -> Item:
        """
        Purchase an item, paying the seller and refunding any overpayment.

        Process:
        1. Check the item is for sale and the payment covers the price
        2. Record the buyer and move the item to Sold
        3. Pay the listed price to the seller
        4. Refund paid_amount - price to the caller (skipped when zero)
        5. Emit Sold

        If step 3 or 4 fails for any reason, completed transfers are reversed
        and the item is restored, so the ledger looks as if the call never
        happened. The caller always gets TransferFailed, chained to the host
        error.

        Raises:
            NotFound, NotForSale, InsufficientPayment, InvalidInput, TransferFailed
        """
        with self._operation("purchase", item_id):
            require_payment_amount(paid_amount)
            item = self._load(item_id)
            run_guards("purchase", item, caller, paid_amount=paid_amount)

            sold = item.sold_to(caller)
            self._commit(item, sold, NotForSale)

            # Refund is computed from the committed record's price.
            refund = paid_amount - sold.price
            receipts: List[TransferReceipt] = []
            try:
                receipts.append(
                    self.transfers.send(sold.seller, sold.price, memo=f"item {item_id} sale")
                )
                if refund > 0:
                    receipts.append(
                        self.transfers.send(caller, refund, memo=f"item {item_id} refund")
                    )
            except Exception as exc:
                # Any host failure, not only TransferError, voids the purchase.
                problems = self._roll_back_purchase(item, sold, receipts)
                logger.error(
                    f"Transfer failed for item {item_id}; purchase rolled back",
                    exc_info=True,
                    extra={"item_id": item_id, "buyer": str(caller), "rollback_problems": problems},
                )
                message = f"Value transfer failed: {exc}"
                if problems:
                    message += f" (rollback incomplete: {'; '.join(problems)})"
                raise TransferFailed(message, item_id=item_id) from exc

            logger.info(
                f"Item {item_id} sold",
                extra={
                    "item_id": item_id,
                    "buyer": str(caller),
                    "price": sold.price,
                    "refund": refund,
                },
            )
            self._emit(LedgerEventType.SOLD, item_id, caller)
            return sold

    def ship(self, item_id: int, caller: UUID) -> Item:
        """
        Mark a sold item as shipped. Seller only.

        Raises:
            NotFound, Unauthorized, NotSold
        """
        with self._operation("ship", item_id):
            item = self._load(item_id)
            run_guards("ship", item, caller)

            shipped = item.shipped()
            self._commit(item, shipped, NotSold)

            logger.info(f"Item {item_id} shipped", extra={"item_id": item_id})
            self._emit(LedgerEventType.SHIPPED, item_id, caller)
            return shipped

    def confirm_receipt(self, item_id: int, caller: UUID) -> Item:
        """
        Confirm a shipped item arrived. Buyer only.

        Raises:
            NotFound, NotShipped, Unauthorized
        """
        with self._operation("confirm_receipt", item_id):
            item = self._load(item_id)
            run_guards("confirm_receipt", item, caller)

            received = item.received()
            self._commit(item, received, NotShipped)

            logger.info(f"Item {item_id} received", extra={"item_id": item_id})
            self._emit(LedgerEventType.RECEIVED, item_id, caller)
            return received

    def fetch(self, item_id: int) -> Item:
        """
        Return the current snapshot of an item.

        Raises:
            NotFound: If no item exists at item_id
        """
        with self._lock:
            return self._load(item_id)

    def receive_direct_transfer(self, sender: UUID, amount: int) -> None:
        """Funds are only accepted through purchase(); anything else is refused."""

        logger.warning(
            f"Rejected direct transfer of {amount} from {sender}",
            extra={"sender": str(sender), "amount": amount},
        )
        raise DirectTransferRejected("The ledger only accepts funds as payment for a purchase")


__all__ = ["ItemLedger"]
