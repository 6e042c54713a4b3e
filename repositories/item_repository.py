"""
Supabase-backed item store (persistence).

This module provides *only* persistence operations for the Item domain entity.
It enforces simple persistence constraints (unique item_id, conditional
updates keyed on the expected lifecycle state); lifecycle rules live in the
ledger service.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional
from uuid import UUID

from domain.item import Item, ItemState

# Supabase table name for item records.
# Keep this aligned with your database schema.
_ITEMS_TABLE: str = "items"


def _row_to_item(row: Mapping[str, Any]) -> Item:
    """Convert a Supabase row into an Item."""

    buyer_val = row.get("buyer_id")
    return Item(
        item_id=int(row["item_id"]),
        name=str(row["name"]),
        price=int(row["price"]),
        state=ItemState(int(row["state"])),
        seller=UUID(str(row["seller_id"])),
        buyer=UUID(str(buyer_val)) if buyer_val is not None else None,
    )


def _item_to_row(item: Item) -> dict[str, Any]:
    return {
        "item_id": item.item_id,
        "name": item.name,
        "price": item.price,
        "state": int(item.state),
        "seller_id": str(item.seller),
        "buyer_id": str(item.buyer) if item.buyer is not None else None,
    }


class SupabaseItemStore:
    """
    ItemStore backed by a Supabase table.

    Id allocation reads the current maximum item_id; the insert relies on the
    table's primary key to reject a duplicate if another process got there first.
    """

    def __init__(self, client: Any = None) -> None:
        if client is None:
            from repositories.client import supabase

            client = supabase
        self._client = client

    def next_id(self) -> int:
        response = (
            self._client.table(_ITEMS_TABLE)
            .select("item_id")
            .order("item_id", desc=True)
            .limit(1)
            .execute()
        )
        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to allocate item id: {error}")

        rows = getattr(response, "data", None) or []
        if not rows:
            return 0
        return int(rows[0]["item_id"]) + 1

    def add(self, item: Item) -> None:
        now = datetime.now(timezone.utc).isoformat()
        payload = _item_to_row(item)
        payload["created_at_utc"] = now
        payload["updated_at_utc"] = now

        response = self._client.table(_ITEMS_TABLE).insert(payload).execute()
        error = getattr(response, "error", None)
        if error:
            code = getattr(error, "code", None)
            if str(code) == "23505":
                raise ValueError(f"Item already exists for item_id {item.item_id}") from None
            raise RuntimeError(f"Failed to create item: {error}")

    def get(self, item_id: int) -> Optional[Item]:
        response = (
            self._client.table(_ITEMS_TABLE)
            .select("*")
            .eq("item_id", item_id)
            .limit(1)
            .execute()
        )
        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to get item: {error}")

        rows = getattr(response, "data", None) or []
        if not rows:
            return None
        return _row_to_item(rows[0])

    def replace(self, expected: Item, updated: Item) -> None:
        """
        Conditionally update an item.

        Requirements:
        - Must only update if the stored state still equals expected.state.
        """

        if expected.item_id != updated.item_id:
            raise ValueError("Cannot replace an item with a different item_id")

        payload = {
            "state": int(updated.state),
            "buyer_id": str(updated.buyer) if updated.buyer is not None else None,
            "updated_at_utc": datetime.now(timezone.utc).isoformat(),
        }
        response = (
            self._client.table(_ITEMS_TABLE)
            .update(payload)
            .eq("item_id", expected.item_id)
            .eq("state", int(expected.state))
            .execute()
        )
        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to update item: {error}")

        updated_rows = getattr(response, "data", None) or []
        if not updated_rows:
            # Either no record exists, or its state moved on since it was read.
            raise ValueError(f"Item {expected.item_id} not found or changed since it was read")


__all__ = ["SupabaseItemStore"]
