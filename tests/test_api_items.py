"""
Tests for the HTTP API (`api/main.py`, `api/routers/`).

Each test gets a fresh in-memory ledger through a dependency override.
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_ledger
from api.main import app
from conftest import BUYER, SELLER, STRANGER
from repositories.item_store import InMemoryItemStore
from services.ledger_service import ItemLedger
from services.transfer_service import InMemoryWallet


@pytest.fixture
def wallet() -> InMemoryWallet:
    return InMemoryWallet()


@pytest.fixture
def http(wallet: InMemoryWallet) -> Iterator[TestClient]:
    ledger = ItemLedger(transfers=wallet)
    app.dependency_overrides[get_ledger] = lambda: ledger
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _as(caller, amount=None) -> dict:
    headers = {"X-Caller-Id": str(caller)}
    if amount is not None:
        headers["X-Payment-Amount"] = str(amount)
    return headers


def test_health(http: TestClient) -> None:
    response = http.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_full_lifecycle_over_http(http: TestClient, wallet: InMemoryWallet) -> None:
    response = http.post("/api/v1/items", json={"name": "Widget", "price": 100}, headers=_as(SELLER))
    assert response.status_code == 201
    assert response.json() == {"item_id": 0}

    response = http.post("/api/v1/items/0/purchase", headers=_as(BUYER, 120))
    assert response.status_code == 200
    assert response.json()["state_name"] == "Sold"
    assert wallet.balance_of(SELLER) == 100
    assert wallet.balance_of(BUYER) == 20

    assert http.post("/api/v1/items/0/ship", headers=_as(SELLER)).status_code == 200
    assert http.post("/api/v1/items/0/confirm-receipt", headers=_as(BUYER)).status_code == 200

    body = http.get("/api/v1/items/0").json()
    assert body == {
        "name": "Widget",
        "item_id": 0,
        "price": 100,
        "state": 3,
        "state_name": "Received",
        "seller": str(SELLER),
        "buyer": str(BUYER),
    }


def test_invalid_listing_returns_400(http: TestClient) -> None:
    response = http.post("/api/v1/items", json={"name": "", "price": 10}, headers=_as(SELLER))

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidInput"


def test_missing_caller_header_is_rejected(http: TestClient) -> None:
    response = http.post("/api/v1/items", json={"name": "Widget", "price": 10})

    assert response.status_code == 422


@pytest.mark.parametrize(
    "path,caller,amount,status,error",
    [
        ("/api/v1/items/0/purchase", BUYER, 99, 402, "InsufficientPayment"),
        ("/api/v1/items/0/ship", STRANGER, None, 403, "Unauthorized"),
        ("/api/v1/items/0/ship", SELLER, None, 409, "NotSold"),
        ("/api/v1/items/0/confirm-receipt", BUYER, None, 409, "NotShipped"),
        ("/api/v1/items/9/purchase", BUYER, 100, 404, "NotFound"),
    ],
)
def test_rejections_map_to_status_codes(http: TestClient, path, caller, amount, status, error) -> None:
    http.post("/api/v1/items", json={"name": "Widget", "price": 100}, headers=_as(SELLER))

    response = http.post(path, headers=_as(caller, amount))

    assert response.status_code == status
    assert response.json()["error"] == error
    assert response.json()["status_code"] == status


def test_second_purchase_conflicts(http: TestClient) -> None:
    http.post("/api/v1/items", json={"name": "Widget", "price": 100}, headers=_as(SELLER))
    http.post("/api/v1/items/0/purchase", headers=_as(BUYER, 100))

    response = http.post("/api/v1/items/0/purchase", headers=_as(STRANGER, 100))

    assert response.status_code == 409
    assert response.json()["error"] == "NotForSale"


def test_failed_payout_returns_502_and_rolls_back(http: TestClient, wallet: InMemoryWallet) -> None:
    wallet.blocked_recipients.add(SELLER)
    http.post("/api/v1/items", json={"name": "Widget", "price": 100}, headers=_as(SELLER))

    response = http.post("/api/v1/items/0/purchase", headers=_as(BUYER, 100))

    assert response.status_code == 502
    assert http.get("/api/v1/items/0").json()["state"] == 0


def test_direct_transfer_is_refused(http: TestClient) -> None:
    response = http.post("/api/v1/ledger/transfers", json={"amount": 10}, headers=_as(STRANGER))

    assert response.status_code == 403
    assert response.json()["error"] == "DirectTransferRejected"


def test_lost_listing_race_returns_409() -> None:
    class TakenIdStore(InMemoryItemStore):
        def add(self, item) -> None:
            raise ValueError(f"Item already exists for item_id {item.item_id}")

    ledger = ItemLedger(store=TakenIdStore())
    app.dependency_overrides[get_ledger] = lambda: ledger
    try:
        response = TestClient(app).post(
            "/api/v1/items", json={"name": "Widget", "price": 100}, headers=_as(SELLER)
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 409
    assert response.json()["error"] == "ConcurrentModification"
