"""
Tests for `services/transfer_service.py`.
"""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from services.transfer_service import InMemoryWallet, TransferError, TransferReceipt

ALICE = UUID("00000000-0000-0000-0000-0000000000a1")


def test_send_credits_recipient_and_records_receipt() -> None:
    wallet = InMemoryWallet()

    receipt = wallet.send(ALICE, 30, memo="test")

    assert wallet.balance_of(ALICE) == 30
    assert receipt.recipient == ALICE
    assert receipt.amount == 30
    assert wallet.receipts == [receipt]


def test_send_rejects_non_positive_amounts() -> None:
    wallet = InMemoryWallet()

    with pytest.raises(TransferError):
        wallet.send(ALICE, 0)
    assert wallet.balance_of(ALICE) == 0


def test_blocked_recipient_cannot_receive() -> None:
    wallet = InMemoryWallet(blocked_recipients=[ALICE])

    with pytest.raises(TransferError):
        wallet.send(ALICE, 10)
    assert wallet.receipts == []


def test_reverse_undoes_a_transfer() -> None:
    wallet = InMemoryWallet()
    receipt = wallet.send(ALICE, 10)

    wallet.reverse(receipt)

    assert wallet.balance_of(ALICE) == 0
    assert wallet.receipts == []


def test_reverse_unknown_receipt_raises() -> None:
    wallet = InMemoryWallet()

    with pytest.raises(TransferError):
        wallet.reverse(TransferReceipt(transfer_id=uuid4(), recipient=ALICE, amount=5))
