"""BaseViewModel — pure Python, no Qt dependency.

Provides subscription lifecycle management so that concrete ViewModels can
subscribe to ``EventBus`` events, and register their own teardown hooks
(pending timers and the like), and have all of it released by ``dispose()``.
"""

from __future__ import annotations

from typing import Callable, Type

from musicmemory.events.bus import EventBus, Subscription


class BaseViewModel:
    """ViewModel base class — pure Python, no Qt dependency."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._disposers: list[Callable[[], None]] = []
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def subscribe_event(
        self,
        event_bus: EventBus,
        event_type: Type,
        handler: Callable,
    ) -> Subscription:
        """Subscribe to an event type and track the subscription."""
        sub = event_bus.subscribe(event_type, handler)
        self._subscriptions.append(sub)
        return sub

    def add_disposer(self, disposer: Callable[[], None]) -> None:
        """Run *disposer* when the ViewModel is disposed."""
        self._disposers.append(disposer)

    def dispose(self) -> None:
        """Cancel all tracked event subscriptions and run teardown hooks."""
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions.clear()
        for disposer in reversed(self._disposers):
            disposer()
        self._disposers.clear()
        self._disposed = True
