"""Immutable library snapshots shown by the ranked list screens.

Every item kind satisfies :class:`MediaListItem`, the minimal display
contract the list controller relies on.  Snapshots are taken when the
library loads and are never mutated afterwards; a library change produces
brand new objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Hashable, Optional, Protocol, Tuple, runtime_checkable

from ..config import DISTANT_PAST, UNKNOWN_TITLE


class MediaKind(str, Enum):
    SONG = "songs"
    ALBUM = "albums"
    ARTIST = "artists"
    GENRE = "genres"
    PLAYLIST = "playlists"


@runtime_checkable
class MediaListItem(Protocol):
    """Display contract shared by every item a list screen can rank."""

    @property
    def id(self) -> Hashable: ...

    @property
    def list_title(self) -> str: ...

    @property
    def list_subtitle(self) -> str: ...

    @property
    def list_play_count(self) -> int: ...

    @property
    def list_icon_name(self) -> str: ...


@dataclass(frozen=True)
class Song:
    id: str
    title: Optional[str] = None
    artist: Optional[str] = None
    album_title: Optional[str] = None
    album_artist: Optional[str] = None
    genre: Optional[str] = None
    play_count: int = 0
    duration: float = 0.0  # seconds
    date_added: Optional[datetime] = None
    last_played: Optional[datetime] = None

    def __post_init__(self) -> None:
        # Dates without an offset are read as UTC so every date stays comparable.
        for name in ("date_added", "last_played"):
            value = getattr(self, name)
            if value is not None and value.tzinfo is None:
                object.__setattr__(self, name, value.replace(tzinfo=timezone.utc))

    @property
    def list_title(self) -> str:
        return self.title or UNKNOWN_TITLE

    @property
    def list_subtitle(self) -> str:
        return self.artist or UNKNOWN_TITLE

    @property
    def list_play_count(self) -> int:
        return self.play_count

    @property
    def list_icon_name(self) -> str:
        return "audio-x-generic"


class _SongCollection:
    """Shared helpers for aggregates that own a tuple of songs."""

    songs: Tuple[Song, ...]
    total_play_count: int

    @property
    def song_count(self) -> int:
        return len(self.songs)

    @property
    def average_play_count(self) -> int:
        if not self.songs:
            return 0
        return self.total_play_count // len(self.songs)

    @property
    def latest_date_added(self) -> datetime:
        """Most recent ``date_added`` among the songs, or the distant past."""
        dates = [song.date_added for song in self.songs if song.date_added is not None]
        return max(dates) if dates else DISTANT_PAST

    @property
    def latest_played(self) -> datetime:
        dates = [song.last_played for song in self.songs if song.last_played is not None]
        return max(dates) if dates else DISTANT_PAST

    @property
    def list_play_count(self) -> int:
        return self.total_play_count

    @property
    def list_subtitle(self) -> str:
        return f"{len(self.songs)} songs"


@dataclass(frozen=True)
class Album(_SongCollection):
    id: str
    title: str
    artist: str
    songs: Tuple[Song, ...] = ()
    total_play_count: int = 0

    @property
    def list_title(self) -> str:
        return self.title

    @property
    def list_subtitle(self) -> str:
        return self.artist

    @property
    def list_icon_name(self) -> str:
        return "media-optical"


@dataclass(frozen=True)
class Artist(_SongCollection):
    name: str
    songs: Tuple[Song, ...] = ()
    total_play_count: int = 0

    @property
    def id(self) -> str:
        return self.name

    @property
    def list_title(self) -> str:
        return self.name

    @property
    def list_icon_name(self) -> str:
        return "avatar-default"


@dataclass(frozen=True)
class Genre(_SongCollection):
    name: str
    songs: Tuple[Song, ...] = ()
    total_play_count: int = 0

    @property
    def id(self) -> str:
        return self.name

    @property
    def list_title(self) -> str:
        return self.name

    @property
    def list_icon_name(self) -> str:
        return "folder-music"


@dataclass(frozen=True)
class Playlist(_SongCollection):
    playlist_id: str
    name: str
    songs: Tuple[Song, ...] = ()
    total_play_count: int = 0

    @property
    def id(self) -> str:
        return self.playlist_id

    @property
    def list_title(self) -> str:
        return self.name

    @property
    def list_icon_name(self) -> str:
        return "view-media-playlist"


__all__ = [
    "Album",
    "Artist",
    "Genre",
    "MediaKind",
    "MediaListItem",
    "Playlist",
    "Song",
]
