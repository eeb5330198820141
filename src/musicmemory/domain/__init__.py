from .library import LibrarySnapshot, MusicLibrary, PlaylistRecord
from .models import Album, Artist, Genre, MediaKind, MediaListItem, Playlist, Song

__all__ = [
    "Album",
    "Artist",
    "Genre",
    "LibrarySnapshot",
    "MediaKind",
    "MediaListItem",
    "MusicLibrary",
    "Playlist",
    "PlaylistRecord",
    "Song",
]
