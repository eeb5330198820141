"""Synchronous in-process event bus.

Handlers run on the publishing thread, in subscription order.  Every list
screen lives on the UI thread, so there is no executor behind the bus.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Type


@dataclass(kw_only=True)
class Event:
    """Base event class."""
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Subscription:
    """Handle returned by subscribe(); can be used to unsubscribe."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: Type = Event
    handler: Callable = field(default=lambda e: None)
    active: bool = True

    def cancel(self):
        self.active = False


class EventBus:
    def __init__(self, logger: logging.Logger = None):
        self._logger = logger or logging.getLogger(__name__)
        self._handlers: Dict[Type, List[Subscription]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type, handler: Callable) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler)
        with self._lock:
            self._handlers[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription):
        subscription.active = False
        with self._lock:
            subs = self._handlers.get(subscription.event_type, [])
            if subscription in subs:
                subs.remove(subscription)

    def publish(self, event) -> int:
        """Deliver *event* to every active subscriber and return how many ran."""
        event_type = type(event)

        with self._lock:
            subs = list(self._handlers[event_type])

        delivered = 0
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(event)
                delivered += 1
            except Exception as e:
                self._logger.error(f"Handler failed for {event_type.__name__}: {e}")
        return delivered

    def subscriber_count(self, event_type: Type) -> int:
        with self._lock:
            return sum(1 for sub in self._handlers[event_type] if sub.active)
