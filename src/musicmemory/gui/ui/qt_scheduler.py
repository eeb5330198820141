"""``QTimer`` backed scheduler for the pure-Python ViewModels."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class _QtTimerHandle:
    def __init__(self, scheduler: "QtTimerScheduler", timer: QTimer) -> None:
        self._scheduler = scheduler
        self._timer: Optional[QTimer] = timer

    @property
    def is_active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._scheduler._release(self._timer)
        self._timer = None


class QtTimerScheduler(QObject):
    """Schedules callbacks as single-shot timers on the Qt event loop.

    Timers are parented to the scheduler, so parenting the scheduler to the
    owning screen ties every pending callback to that screen's lifetime.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._timers: set[QTimer] = set()

    @property
    def pending_count(self) -> int:
        return len(self._timers)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _QtTimerHandle:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(max(0, int(delay_ms)))
        handle = _QtTimerHandle(self, timer)

        def _on_timeout() -> None:
            self._release(timer)
            handle._timer = None
            callback()

        timer.timeout.connect(_on_timeout)
        self._timers.add(timer)
        timer.start()
        return handle

    def cancel_all(self) -> None:
        for timer in list(self._timers):
            timer.stop()
            self._release(timer)

    def _release(self, timer: QTimer) -> None:
        if timer in self._timers:
            self._timers.discard(timer)
            timer.deleteLater()
