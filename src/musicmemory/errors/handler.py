"""Central reporting for faults a list screen recovers from.

A list controller that hits a fault degrades to an empty list and hands the
exception here.  The handler writes the single log record for it, tells the
rest of the app through :class:`ErrorOccurredEvent` and forwards serious
faults to whatever surface the front end registered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

from musicmemory.events.bus import Event, EventBus
from musicmemory.utils.logging import get_logger


class ErrorSeverity(Enum):
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    list_name: str = ""
    stage: str = ""

    @property
    def message(self) -> str:
        return describe(self.error, self.list_name, self.stage)


UiCallback = Callable[[str, ErrorSeverity], None]


def describe(error: Exception, list_name: str = "", stage: str = "") -> str:
    """Human readable one-liner, e.g. ``songs: sort failed: TypeError: ...``."""
    detail = f"{error.__class__.__name__}: {error}"
    if stage:
        detail = f"{stage} failed: {detail}"
    if list_name:
        detail = f"{list_name}: {detail}"
    return detail


class ErrorHandler:
    """Log, publish and surface recoverable faults."""

    def __init__(self, event_bus: EventBus, logger: Optional[logging.Logger] = None) -> None:
        self._events = event_bus
        self._logger = logger or get_logger("errors")
        self._ui_callback: Optional[UiCallback] = None

    def register_ui_callback(self, callback: Optional[UiCallback]) -> None:
        self._ui_callback = callback

    def handle(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        *,
        list_name: str = "",
        stage: str = "",
    ) -> ErrorOccurredEvent:
        event = ErrorOccurredEvent(error=error, severity=severity, list_name=list_name, stage=stage)
        context: Dict[str, str] = {"list": list_name, "stage": stage}
        self._logger.log(severity.value, "%s", event.message, extra={"context": context})

        self._events.publish(event)

        if self._ui_callback is not None and severity.value >= logging.ERROR:
            self._ui_callback(event.message, severity)
        return event


__all__ = ["ErrorHandler", "ErrorOccurredEvent", "ErrorSeverity", "describe"]
