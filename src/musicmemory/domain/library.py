"""Group song snapshots into the ranked collections shown by the list screens."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, TypeVar

from ..config import HIDE_ZERO_PLAY_COUNTS, UNKNOWN_PLAYLIST
from ..events.bus import EventBus
from ..events.library_events import LibraryAccessChangedEvent, LibraryLoadedEvent
from .models import Album, Artist, Genre, MediaKind, MediaListItem, Playlist, Song

LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=MediaListItem)


@dataclass(frozen=True)
class PlaylistRecord:
    """A playlist as delivered by the library: a name and its song ids."""

    playlist_id: str
    name: Optional[str] = None
    song_ids: Tuple[str, ...] = ()


def _by_play_count(items: Iterable[T]) -> List[T]:
    return sorted(items, key=lambda item: item.list_play_count, reverse=True)


def build_albums(songs: Iterable[Song]) -> List[Album]:
    """Group *songs* by album title and album artist.

    Songs without an album title or without any artist are left out.
    """

    grouped: Dict[str, List[Song]] = {}
    heads: Dict[str, Tuple[str, str]] = {}
    for song in songs:
        artist = song.album_artist or song.artist
        if not song.album_title or not artist:
            continue
        key = f"{song.album_title}-{artist}"
        grouped.setdefault(key, []).append(song)
        heads.setdefault(key, (song.album_title, artist))
    albums = [
        Album(
            id=key,
            title=heads[key][0],
            artist=heads[key][1],
            songs=tuple(members),
            total_play_count=sum(song.play_count for song in members),
        )
        for key, members in grouped.items()
    ]
    return _by_play_count(albums)


def build_artists(songs: Iterable[Song]) -> List[Artist]:
    grouped: Dict[str, List[Song]] = {}
    for song in songs:
        if song.artist:
            grouped.setdefault(song.artist, []).append(song)
    return _by_play_count(
        Artist(name=name, songs=tuple(members), total_play_count=sum(s.play_count for s in members))
        for name, members in grouped.items()
    )


def build_genres(songs: Iterable[Song]) -> List[Genre]:
    grouped: Dict[str, List[Song]] = {}
    for song in songs:
        if song.genre:
            grouped.setdefault(song.genre, []).append(song)
    return _by_play_count(
        Genre(name=name, songs=tuple(members), total_play_count=sum(s.play_count for s in members))
        for name, members in grouped.items()
    )


def build_playlists(
    records: Iterable[PlaylistRecord],
    songs_by_id: Mapping[str, Song],
) -> List[Playlist]:
    """Resolve playlist records against the song table.

    Song ids the table does not know are dropped; a playlist keeps its
    duplicates because the library allows the same song twice.
    """

    playlists = []
    for record in records:
        members = tuple(songs_by_id[sid] for sid in record.song_ids if sid in songs_by_id)
        missing = len(record.song_ids) - len(members)
        if missing:
            LOGGER.debug("Playlist %s references %d unknown songs", record.playlist_id, missing)
        playlists.append(
            Playlist(
                playlist_id=record.playlist_id,
                name=record.name or UNKNOWN_PLAYLIST,
                songs=members,
                total_play_count=sum(song.play_count for song in members),
            )
        )
    return _by_play_count(playlists)


def without_zero_play_counts(items: Iterable[T]) -> List[T]:
    return [item for item in items if item.list_play_count > 0]


@dataclass(frozen=True)
class LibrarySnapshot:
    """All five collections built from one library load."""

    songs: Tuple[Song, ...] = ()
    albums: Tuple[Album, ...] = ()
    artists: Tuple[Artist, ...] = ()
    genres: Tuple[Genre, ...] = ()
    playlists: Tuple[Playlist, ...] = ()

    @classmethod
    def build(
        cls,
        songs: Sequence[Song],
        playlists: Sequence[PlaylistRecord] = (),
    ) -> "LibrarySnapshot":
        ordered = _by_play_count(songs)
        songs_by_id = {song.id: song for song in ordered}
        return cls(
            songs=tuple(ordered),
            albums=tuple(build_albums(ordered)),
            artists=tuple(build_artists(ordered)),
            genres=tuple(build_genres(ordered)),
            playlists=tuple(build_playlists(playlists, songs_by_id)),
        )

    def collection(self, kind: MediaKind) -> Tuple[MediaListItem, ...]:
        return getattr(self, MediaKind(kind).value)

    def played_only(self) -> "LibrarySnapshot":
        """Return a copy with every zero-play item removed."""
        return replace(
            self,
            songs=tuple(without_zero_play_counts(self.songs)),
            albums=tuple(without_zero_play_counts(self.albums)),
            artists=tuple(without_zero_play_counts(self.artists)),
            genres=tuple(without_zero_play_counts(self.genres)),
            playlists=tuple(without_zero_play_counts(self.playlists)),
        )


@dataclass
class MusicLibrary:
    """Holds the current library and announces every rebuild on the bus.

    The library-access layer calls :meth:`load` whenever the catalog changes
    or access is granted; list screens never read from here directly but
    react to :class:`LibraryLoadedEvent`.
    """

    event_bus: EventBus
    hide_zero_play_counts: bool = HIDE_ZERO_PLAY_COUNTS
    has_access: bool = False
    _full: LibrarySnapshot = field(default_factory=LibrarySnapshot, repr=False)

    @property
    def snapshot(self) -> LibrarySnapshot:
        """The collections list screens should display."""
        if self.hide_zero_play_counts:
            return self._full.played_only()
        return self._full

    def load(self, songs: Sequence[Song], playlists: Sequence[PlaylistRecord] = ()) -> LibrarySnapshot:
        self._full = LibrarySnapshot.build(songs, playlists)
        if not self.has_access:
            self.has_access = True
            self.event_bus.publish(LibraryAccessChangedEvent(has_access=True, source="load"))
        LOGGER.info(
            "Library loaded: %d songs, %d albums, %d artists, %d genres, %d playlists",
            len(self._full.songs),
            len(self._full.albums),
            len(self._full.artists),
            len(self._full.genres),
            len(self._full.playlists),
        )
        return self._announce()

    def revoke_access(self, reason: str = "") -> None:
        self.has_access = False
        self._full = LibrarySnapshot()
        self.event_bus.publish(LibraryAccessChangedEvent(has_access=False, reason=reason, source="revoke"))
        self._announce()

    def set_hide_zero_play_counts(self, hide: bool) -> None:
        if hide == self.hide_zero_play_counts:
            return
        self.hide_zero_play_counts = hide
        self._announce()

    def _announce(self) -> LibrarySnapshot:
        snapshot = self.snapshot
        self.event_bus.publish(LibraryLoadedEvent(snapshot=snapshot, source="library"))
        return snapshot


__all__ = [
    "LibrarySnapshot",
    "MusicLibrary",
    "PlaylistRecord",
    "build_albums",
    "build_artists",
    "build_genres",
    "build_playlists",
    "without_zero_play_counts",
]
