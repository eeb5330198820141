"""Sort options, comparator registries and their per-kind factories."""

from .handlers import FACTORIES, SortHandlerFactory, registry_for
from .options import (
    AlbumSortOption,
    ArtistSortOption,
    GenreSortOption,
    PlaylistSortOption,
    SongSortOption,
    SortOption,
)
from .registry import Comparator, ComparatorRegistry

__all__ = [
    "AlbumSortOption",
    "ArtistSortOption",
    "Comparator",
    "ComparatorRegistry",
    "FACTORIES",
    "GenreSortOption",
    "PlaylistSortOption",
    "SongSortOption",
    "SortHandlerFactory",
    "SortOption",
    "registry_for",
]
