"""Events the music library publishes on the bus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .bus import Event

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from ..domain.library import LibrarySnapshot


@dataclass(kw_only=True)
class LibraryEvent(Event):
    """Base for library notifications; *source* names what triggered it."""

    source: str = ""


@dataclass(kw_only=True)
class LibraryLoadedEvent(LibraryEvent):
    """Published whenever the library collections are (re)built."""

    snapshot: Optional["LibrarySnapshot"] = None


@dataclass(kw_only=True)
class LibraryAccessChangedEvent(LibraryEvent):
    has_access: bool = False
    reason: str = ""
