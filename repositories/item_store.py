"""
Item store (persistence contract) and in-memory implementation.

This module provides *only* persistence operations for the Item domain entity.
It does not enforce lifecycle rules; it only allocates ids, stores items, and
performs conditional replacement so a caller can never overwrite an item that
changed underneath it.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol

from domain.item import Item


class ItemStore(Protocol):
    """Durable key-value storage for Items keyed by item_id."""

    def next_id(self) -> int:
        """Allocate the next sequential item id (0, 1, 2, ...)."""
        ...

    def add(self, item: Item) -> None:
        ...

    def get(self, item_id: int) -> Optional[Item]:
        ...

    def replace(self, expected: Item, updated: Item) -> None:
        """
        Replace `expected` with `updated`.

        Must only update if the stored item still equals `expected`;
        raises ValueError otherwise.
        """
        ...


class InMemoryItemStore:
    """
    Process-local ItemStore.

    Not thread-safe on its own; the ledger serializes all access.
    """

    def __init__(self) -> None:
        self._items: Dict[int, Item] = {}
        self._next_id: int = 0

    def __len__(self) -> int:
        return len(self._items)

    def next_id(self) -> int:
        item_id = self._next_id
        self._next_id += 1
        return item_id

    def add(self, item: Item) -> None:
        if item.item_id in self._items:
            raise ValueError(f"Item already exists for item_id {item.item_id}")
        self._items[item.item_id] = item

    def get(self, item_id: int) -> Optional[Item]:
        return self._items.get(item_id)

    def replace(self, expected: Item, updated: Item) -> None:
        if expected.item_id != updated.item_id:
            raise ValueError("Cannot replace an item with a different item_id")
        current = self._items.get(expected.item_id)
        if current != expected:
            raise ValueError(f"Item {expected.item_id} not found or changed since it was read")
        self._items[updated.item_id] = updated


__all__ = ["ItemStore", "InMemoryItemStore"]
