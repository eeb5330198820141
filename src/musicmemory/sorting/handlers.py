"""Sort handler factories, one per item kind.

A factory knows how to order its kind by every option of its enumeration.
:meth:`SortHandlerFactory.build_registry` walks the full option set so a
forgotten branch fails when the registry is built, not when a user picks
the option.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import ClassVar, Dict, Optional, Type

from ..config import DISTANT_PAST
from ..domain.models import MediaKind
from ..errors import MissingSortHandlerError
from .options import (
    AlbumSortOption,
    ArtistSortOption,
    GenreSortOption,
    PlaylistSortOption,
    SongSortOption,
    SortOption,
)
from .registry import Comparator, ComparatorRegistry


def _text(value: Optional[str]) -> str:
    return (value or "").casefold()


# Comparators shared by the song-collection kinds (albums, artists, genres,
# playlists), which all expose the same aggregate properties.

def _more_plays(a, b) -> bool:
    return a.total_play_count > b.total_play_count


def _more_songs(a, b) -> bool:
    return len(a.songs) > len(b.songs)


def _added_later(a, b) -> bool:
    return a.latest_date_added > b.latest_date_added


def _played_later(a, b) -> bool:
    return a.latest_played > b.latest_played


def _name_first(a, b) -> bool:
    return _text(a.name) < _text(b.name)


class SortHandlerFactory(ABC):
    """Builds the comparator registry for one item kind."""

    option_type: ClassVar[Type[SortOption]]

    @abstractmethod
    def create_sort_handler(self, option: SortOption) -> Optional[Comparator]:
        """Return the comparator for *option*, or ``None`` if unsupported."""

    def build_registry(self) -> ComparatorRegistry:
        registry: ComparatorRegistry = ComparatorRegistry(self.option_type)
        for option in self.option_type:
            handler = self.create_sort_handler(option)
            if handler is None:
                raise MissingSortHandlerError(
                    f"{type(self).__name__} does not handle {option.value!r}"
                )
            registry.register(option, handler)
        return registry.validate()


class SongsSortHandlerFactory(SortHandlerFactory):
    option_type = SongSortOption

    def create_sort_handler(self, option: SortOption) -> Optional[Comparator]:
        if option is SongSortOption.PLAY_COUNT:
            return lambda a, b: a.play_count > b.play_count
        if option is SongSortOption.TITLE:
            return lambda a, b: _text(a.title) < _text(b.title)
        if option is SongSortOption.ARTIST:
            return lambda a, b: _text(a.artist) < _text(b.artist)
        if option is SongSortOption.DURATION:
            return lambda a, b: a.duration > b.duration
        if option is SongSortOption.DATE_ADDED:
            return lambda a, b: (a.date_added or DISTANT_PAST) > (b.date_added or DISTANT_PAST)
        if option is SongSortOption.RECENTLY_PLAYED:
            return lambda a, b: (a.last_played or DISTANT_PAST) > (b.last_played or DISTANT_PAST)
        return None


class AlbumsSortHandlerFactory(SortHandlerFactory):
    option_type = AlbumSortOption

    def create_sort_handler(self, option: SortOption) -> Optional[Comparator]:
        if option is AlbumSortOption.PLAY_COUNT:
            return _more_plays
        if option is AlbumSortOption.TITLE:
            return lambda a, b: _text(a.title) < _text(b.title)
        if option is AlbumSortOption.ARTIST:
            return lambda a, b: _text(a.artist) < _text(b.artist)
        if option is AlbumSortOption.SONG_COUNT:
            return _more_songs
        if option is AlbumSortOption.DATE_ADDED:
            return _added_later
        if option is AlbumSortOption.RECENTLY_PLAYED:
            return _played_later
        return None


class ArtistsSortHandlerFactory(SortHandlerFactory):
    option_type = ArtistSortOption

    def create_sort_handler(self, option: SortOption) -> Optional[Comparator]:
        return {
            ArtistSortOption.PLAY_COUNT: _more_plays,
            ArtistSortOption.NAME: _name_first,
            ArtistSortOption.SONG_COUNT: _more_songs,
            ArtistSortOption.DATE_ADDED: _added_later,
            ArtistSortOption.RECENTLY_PLAYED: _played_later,
        }.get(option)


class GenresSortHandlerFactory(SortHandlerFactory):
    option_type = GenreSortOption

    def create_sort_handler(self, option: SortOption) -> Optional[Comparator]:
        return {
            GenreSortOption.PLAY_COUNT: _more_plays,
            GenreSortOption.NAME: _name_first,
            GenreSortOption.SONG_COUNT: _more_songs,
            GenreSortOption.DATE_ADDED: _added_later,
            GenreSortOption.RECENTLY_PLAYED: _played_later,
        }.get(option)


class PlaylistsSortHandlerFactory(SortHandlerFactory):
    option_type = PlaylistSortOption

    def create_sort_handler(self, option: SortOption) -> Optional[Comparator]:
        return {
            PlaylistSortOption.PLAY_COUNT: _more_plays,
            PlaylistSortOption.NAME: _name_first,
            PlaylistSortOption.SONG_COUNT: _more_songs,
        }.get(option)


FACTORIES: Dict[MediaKind, Type[SortHandlerFactory]] = {
    MediaKind.SONG: SongsSortHandlerFactory,
    MediaKind.ALBUM: AlbumsSortHandlerFactory,
    MediaKind.ARTIST: ArtistsSortHandlerFactory,
    MediaKind.GENRE: GenresSortHandlerFactory,
    MediaKind.PLAYLIST: PlaylistsSortHandlerFactory,
}


@lru_cache(maxsize=None)
def registry_for(kind: MediaKind) -> ComparatorRegistry:
    """Return the shared, validated registry for *kind*."""

    return FACTORIES[MediaKind(kind)]().build_registry()


__all__ = [
    "AlbumsSortHandlerFactory",
    "ArtistsSortHandlerFactory",
    "FACTORIES",
    "GenresSortHandlerFactory",
    "PlaylistsSortHandlerFactory",
    "SongsSortHandlerFactory",
    "SortHandlerFactory",
    "registry_for",
]
