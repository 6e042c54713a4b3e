"""
Domain: Ledger events.

One event is emitted per committed transition, after the state change and
any value transfers have completed. Events are immutable and carry the item
id they refer to.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
from uuid import UUID


class LedgerEventType(str, Enum):
    FOR_SALE_LISTED = "ForSaleListed"
    SOLD = "Sold"
    SHIPPED = "Shipped"
    RECEIVED = "Received"


def require_utc_timestamp(name: str, value: datetime) -> None:
    """Timestamps must be timezone-aware with UTC offset 0."""

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


@dataclass(frozen=True, slots=True)
class LedgerEvent:
    """Immutable notification that an item changed state."""

    event_type: LedgerEventType
    item_id: int
    occurred_at: datetime
    actor: Optional[UUID] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("occurred_at", self.occurred_at)


__all__ = ["LedgerEvent", "LedgerEventType", "require_utc_timestamp"]
