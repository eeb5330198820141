"""Pure Python signal system — no Qt dependency.

Provides ``Signal`` for observer-pattern callbacks and ``ObservableProperty``
for data-binding in ViewModels.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

_logger = logging.getLogger(__name__)


class Signal:
    """Pure Python signal — does not depend on Qt.

    Handlers run in connection order.  An exception raised by one handler is
    logged and does not stop the remaining handlers, so a broken view
    binding cannot take the list state down with it.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []
        self._lock = threading.Lock()

    def connect(self, handler: Callable) -> None:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

    def disconnect(self, handler: Callable) -> None:
        with self._lock:
            self._handlers.remove(handler)

    def disconnect_all(self) -> None:
        with self._lock:
            self._handlers.clear()

    def emit(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(*args, **kwargs)
            except Exception:
                _logger.exception("Signal handler %r failed", handler)

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)


class ObservableProperty:
    """Observable property — ViewModel data-binding foundation.

    Emits ``changed(new_value, old_value)`` whenever the value changes.  With
    ``identity=True`` a change means a different object; use it for large
    sequences that are always replaced rather than mutated.
    """

    def __init__(self, initial_value: Any = None, *, identity: bool = False) -> None:
        self._value = initial_value
        self._identity = identity
        self.changed = Signal()

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        if self._identity:
            differs = new_value is not self._value
        else:
            differs = new_value != self._value
        if differs:
            old_value = self._value
            self._value = new_value
            self.changed.emit(new_value, old_value)
