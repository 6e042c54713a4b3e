#!/usr/bin/env python3
"""
Demo script for the complete item lifecycle.

Demonstrates:
1. Seller lists an item
2. Buyer purchases with overpayment (refund issued)
3. Seller ships
4. Buyer confirms receipt
5. Rejected operations (wrong role, repeat calls, direct transfer)

Runs entirely in memory; no database required.
"""

from __future__ import annotations

import sys
from pathlib import Path
from uuid import uuid4

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.errors import LedgerError
from services.ledger_service import ItemLedger
from services.transfer_service import InMemoryWallet


def print_section(title: str) -> None:
    """Print a section header."""
    print()
    print("=" * 80)
    print(title)
    print("=" * 80)


def attempt(label: str, operation, *args) -> None:
    try:
        operation(*args)
        print(f"   {label}: unexpectedly succeeded")
    except LedgerError as e:
        print(f"   {label}: rejected with {e.kind} ({e})")


def main() -> None:
    seller = uuid4()
    buyer = uuid4()
    stranger = uuid4()

    wallet = InMemoryWallet()
    ledger = ItemLedger(transfers=wallet)
    ledger.publisher.subscribe(
        lambda event: print(f"   [event] {event.event_type.value} item={event.item_id}")
    )

    print_section("SCENARIO 1: Happy Path")

    print("\n1. Seller lists 'Widget' at 100...")
    item_id = ledger.list_item("Widget", 100, seller)
    print(f"   Item ID: {item_id}")

    print("\n2. Buyer purchases with 120...")
    ledger.purchase(item_id, buyer, 120)
    print(f"   Seller balance: {wallet.balance_of(seller)}")
    print(f"   Buyer refund:   {wallet.balance_of(buyer)}")

    print("\n3. Seller ships...")
    ledger.ship(item_id, seller)

    print("\n4. Buyer confirms receipt...")
    ledger.confirm_receipt(item_id, buyer)

    print(f"\n   fetch({item_id}) -> {ledger.fetch(item_id).as_tuple()}")

    print_section("SCENARIO 2: Rejections")

    other_id = ledger.list_item("Gadget", 50, seller)
    attempt("List with empty name", ledger.list_item, "", 10, seller)
    attempt("List with zero price", ledger.list_item, "Thing", 0, seller)
    attempt("Underpay", ledger.purchase, other_id, buyer, 49)
    attempt("Ship by stranger", ledger.ship, other_id, stranger)
    attempt("Confirm before ship", ledger.confirm_receipt, other_id, buyer)
    attempt("Purchase a received item", ledger.purchase, item_id, buyer, 100)
    attempt("Direct transfer", ledger.receive_direct_transfer, stranger, 10)
    attempt("Fetch unknown id", ledger.fetch, 999)


if __name__ == "__main__":
    main()
