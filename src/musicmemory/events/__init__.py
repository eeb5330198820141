from .bus import Event, EventBus, Subscription
from .library_events import LibraryAccessChangedEvent, LibraryEvent, LibraryLoadedEvent

__all__ = [
    "Event",
    "EventBus",
    "LibraryAccessChangedEvent",
    "LibraryEvent",
    "LibraryLoadedEvent",
    "Subscription",
]
