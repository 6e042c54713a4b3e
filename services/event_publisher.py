"""
Ledger event publisher.

Routes committed LedgerEvents to registered subscribers.

Dispatch behavior:
1. Append the event to history
2. Call subscribers for the event type, then catch-all subscribers, in
   registration order
3. Log and report a failing subscriber, then continue with the next one

A subscriber failure never undoes the transition that produced the event.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, List, Optional

from domain.events import LedgerEvent, LedgerEventType

logger = logging.getLogger(__name__)

Subscriber = Callable[[LedgerEvent], None]

# Recent events kept in memory; older ones are dropped first.
DEFAULT_HISTORY_LIMIT = 1000


@dataclass(slots=True)
class DispatchResult:
    event: LedgerEvent
    subscribers_notified: int = 0
    subscribers_failed: int = 0
    failures: List[dict] = field(default_factory=list)


class EventPublisher:
    def __init__(self, history_limit: Optional[int] = DEFAULT_HISTORY_LIMIT) -> None:
        self._subscribers: Dict[Optional[LedgerEventType], List[Subscriber]] = {}
        # history_limit=None keeps every event; 0 keeps none
        self._history: Deque[LedgerEvent] = deque(maxlen=history_limit)

    def subscribe(self, handler: Subscriber, event_type: Optional[LedgerEventType] = None) -> None:
        """Register `handler` for one event type, or for every type when event_type is None."""

        self._subscribers.setdefault(event_type, []).append(handler)

    @property
    def history(self) -> List[LedgerEvent]:
        return list(self._history)

    def events_for(self, item_id: int) -> List[LedgerEvent]:
        return [event for event in self._history if event.item_id == item_id]

    def publish(self, event: LedgerEvent) -> DispatchResult:
        self._history.append(event)
        result = DispatchResult(event=event)

        handlers = self._subscribers.get(event.event_type, []) + self._subscribers.get(None, [])
        for handler in handlers:
            handler_name = getattr(handler, "__qualname__", repr(handler))
            try:
                handler(event)
                result.subscribers_notified += 1
            except Exception as exc:
                result.subscribers_failed += 1
                result.failures.append(
                    {"handler": handler_name, "error": str(exc), "error_type": type(exc).__name__}
                )
                logger.error(
                    f"Subscriber failed: {handler_name} for {event.event_type.value} "
                    f"(item_id: {event.item_id}): {exc}",
                    exc_info=True,
                )

        logger.debug(
            f"Dispatched {event.event_type.value} for item {event.item_id}: "
            f"{result.subscribers_notified} notified, {result.subscribers_failed} failed"
        )
        return result


__all__ = ["DispatchResult", "EventPublisher", "Subscriber"]
