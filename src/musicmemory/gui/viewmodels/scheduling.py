"""Timer-based "last write wins" scheduling without a Qt dependency.

ViewModels never sleep or spawn threads.  They hand callbacks to a
:class:`Scheduler`; the GUI supplies a ``QTimer`` backed one (see
``musicmemory.gui.ui.qt_scheduler``) and the command line runs callbacks
straight away with :class:`ImmediateScheduler`.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

_logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run *callback* once after *delay_ms* on the owning thread."""
        ...


class _SpentHandle:
    def cancel(self) -> None:
        return None


class ImmediateScheduler:
    """Runs every callback synchronously, ignoring the delay."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        callback()
        return _SpentHandle()


class Debouncer:
    """Collapse bursts of :meth:`trigger` calls into one callback.

    Each trigger cancels the pending timer and schedules a fresh one, so the
    callback runs once, ``interval_ms`` after the last trigger.  A timer that
    still fires after being superseded is recognised by its token and
    ignored.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        interval_ms: int,
        callback: Callable[[], None],
        *,
        name: str = "debounce",
    ) -> None:
        self._scheduler = scheduler
        self._interval_ms = interval_ms
        self._callback = callback
        self._name = name
        self._token: Optional[object] = None
        self._handle: Optional[TimerHandle] = None

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def is_pending(self) -> bool:
        return self._token is not None

    def trigger(self) -> None:
        self._cancel_handle()
        token = object()
        self._token = token
        handle = self._scheduler.call_later(self._interval_ms, lambda: self._fire(token))
        # An immediate scheduler has already fired by now.
        if self._token is token:
            self._handle = handle

    def cancel(self) -> None:
        self._cancel_handle()
        self._token = None

    def flush(self) -> bool:
        """Run a pending callback now; return whether one was pending."""
        if self._token is None:
            return False
        self._fire(self._token)
        return True

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, token: object) -> None:
        if token is not self._token:
            _logger.debug("%s: dropped superseded callback", self._name)
            return
        self._cancel_handle()
        self._token = None
        self._callback()


__all__ = ["Debouncer", "ImmediateScheduler", "Scheduler", "TimerHandle"]
