"""
Request-scoped dependencies.

The ledger is built once at startup and stored on `app.state`; routes receive
it through `get_ledger` so tests can swap it with `app.dependency_overrides`.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import Header, Request

from repositories.item_store import InMemoryItemStore
from services.ledger_service import ItemLedger
from services.settings import STORE_SUPABASE, Settings


def build_ledger(settings: Settings) -> ItemLedger:
    """Construct the process-wide ledger for the configured store backend."""

    if settings.store == STORE_SUPABASE:
        from repositories.item_repository import SupabaseItemStore

        return ItemLedger(store=SupabaseItemStore())
    return ItemLedger(store=InMemoryItemStore())


def get_ledger(request: Request) -> ItemLedger:
    return request.app.state.ledger


def get_caller(x_caller_id: UUID = Header(..., alias="X-Caller-Id")) -> UUID:
    """Authenticated principal making the call."""
    return x_caller_id


def get_payment(x_payment_amount: int = Header(0, alias="X-Payment-Amount")) -> int:
    """Value attached to the call by the transport."""
    return x_payment_amount
