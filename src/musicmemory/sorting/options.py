"""Sort options offered by each list screen.

Each member's value is its stable key (used in settings and on the command
line); ``label`` is the text shown in the sort picker.
"""

from __future__ import annotations

from enum import Enum
from typing import Type


class SortOption(str, Enum):
    """Base for per-kind sort enumerations: ``MEMBER = (key, label)``."""

    label: str

    def __new__(cls, key: str, label: str):
        obj = str.__new__(cls, key)
        obj._value_ = key
        obj.label = label
        return obj

    @classmethod
    def from_key(cls, key: str):
        """Look up a member by key or label, case-insensitively."""
        wanted = key.strip().casefold().replace(" ", "_").replace("-", "_")
        for member in cls:
            if member.value == wanted or member.label.casefold().replace(" ", "_") == wanted:
                return member
        raise ValueError(f"{key!r} is not a valid {cls.__name__}")

    def __str__(self) -> str:
        return self.value


class SongSortOption(SortOption):
    ARTIST = ("artist", "Artist")
    DATE_ADDED = ("date_added", "Date Added")
    DURATION = ("duration", "Duration")
    PLAY_COUNT = ("play_count", "Play Count")
    RECENTLY_PLAYED = ("recently_played", "Recently Played")
    TITLE = ("title", "Title")


class AlbumSortOption(SortOption):
    ARTIST = ("artist", "Artist")
    DATE_ADDED = ("date_added", "Date Added")
    PLAY_COUNT = ("play_count", "Play Count")
    RECENTLY_PLAYED = ("recently_played", "Recently Played")
    SONG_COUNT = ("song_count", "Song Count")
    TITLE = ("title", "Title")


class ArtistSortOption(SortOption):
    DATE_ADDED = ("date_added", "Date Added")
    NAME = ("name", "Name")
    PLAY_COUNT = ("play_count", "Play Count")
    RECENTLY_PLAYED = ("recently_played", "Recently Played")
    SONG_COUNT = ("song_count", "Song Count")


class GenreSortOption(SortOption):
    DATE_ADDED = ("date_added", "Date Added")
    NAME = ("name", "Name")
    PLAY_COUNT = ("play_count", "Play Count")
    RECENTLY_PLAYED = ("recently_played", "Recently Played")
    SONG_COUNT = ("song_count", "Song Count")


class PlaylistSortOption(SortOption):
    NAME = ("name", "Name")
    PLAY_COUNT = ("play_count", "Play Count")
    SONG_COUNT = ("song_count", "Song Count")


def option_labels(option_type: Type[SortOption]) -> list[tuple[str, str]]:
    return [(member.value, member.label) for member in option_type]


__all__ = [
    "AlbumSortOption",
    "ArtistSortOption",
    "GenreSortOption",
    "PlaylistSortOption",
    "SongSortOption",
    "SortOption",
    "option_labels",
]
