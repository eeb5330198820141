"""Read library snapshots exported as JSON.

The document carries a flat song table and playlists that reference songs
by id::

    {
      "songs": [
        {"id": "1", "title": "...", "artist": "...", "album": "...",
         "album_artist": "...", "genre": "...", "play_count": 12,
         "duration": 215.0, "date_added": "2024-03-01T10:00:00Z",
         "last_played": "2025-01-07T21:14:03+01:00"}
      ],
      "playlists": [{"id": "p1", "name": "Road Trip", "songs": ["1"]}]
    }

Only ``id`` is required for a song; missing optional fields stay empty.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple

from dateutil.parser import isoparse

from ..domain.library import PlaylistRecord
from ..domain.models import Song
from ..errors import LibraryError, LibraryFormatError
from ..utils.jsonio import read_json
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


def _parse_datetime(value: Any, where: str) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise LibraryFormatError(f"{where}: expected an ISO-8601 string, got {value!r}")
    try:
        return isoparse(value)
    except (ValueError, OverflowError) as exc:
        raise LibraryFormatError(f"{where}: {exc}") from exc


def _optional_text(entry: dict, *keys: str) -> Optional[str]:
    for key in keys:
        value = entry.get(key)
        if value is not None:
            return str(value)
    return None


def _song_from_entry(entry: Any, index: int) -> Song:
    where = f"songs[{index}]"
    if not isinstance(entry, dict):
        raise LibraryFormatError(f"{where}: expected an object")
    if entry.get("id") in (None, ""):
        raise LibraryFormatError(f"{where}: missing id")
    play_count = entry.get("play_count", 0) or 0
    if not isinstance(play_count, int) or isinstance(play_count, bool) or play_count < 0:
        raise LibraryFormatError(f"{where}: play_count must be a non-negative integer")
    duration = entry.get("duration", 0) or 0
    if not isinstance(duration, (int, float)) or isinstance(duration, bool):
        raise LibraryFormatError(f"{where}: duration must be a number")
    return Song(
        id=str(entry["id"]),
        title=_optional_text(entry, "title"),
        artist=_optional_text(entry, "artist"),
        album_title=_optional_text(entry, "album", "album_title"),
        album_artist=_optional_text(entry, "album_artist"),
        genre=_optional_text(entry, "genre"),
        play_count=play_count,
        duration=float(duration),
        date_added=_parse_datetime(entry.get("date_added"), f"{where}.date_added"),
        last_played=_parse_datetime(entry.get("last_played"), f"{where}.last_played"),
    )


def _playlist_from_entry(entry: Any, index: int) -> PlaylistRecord:
    where = f"playlists[{index}]"
    if not isinstance(entry, dict):
        raise LibraryFormatError(f"{where}: expected an object")
    if entry.get("id") in (None, ""):
        raise LibraryFormatError(f"{where}: missing id")
    song_ids = entry.get("songs", [])
    if not isinstance(song_ids, list):
        raise LibraryFormatError(f"{where}.songs: expected a list of song ids")
    return PlaylistRecord(
        playlist_id=str(entry["id"]),
        name=_optional_text(entry, "name"),
        song_ids=tuple(str(song_id) for song_id in song_ids),
    )


def parse_library(payload: Any) -> Tuple[List[Song], List[PlaylistRecord]]:
    """Turn a decoded JSON document into song and playlist snapshots."""

    if not isinstance(payload, dict):
        raise LibraryFormatError("library document must be a JSON object")
    raw_songs = payload.get("songs", [])
    raw_playlists = payload.get("playlists", [])
    if not isinstance(raw_songs, list) or not isinstance(raw_playlists, list):
        raise LibraryFormatError("'songs' and 'playlists' must be lists")

    songs = [_song_from_entry(entry, index) for index, entry in enumerate(raw_songs)]
    seen: set[str] = set()
    for song in songs:
        if song.id in seen:
            raise LibraryFormatError(f"duplicate song id {song.id!r}")
        seen.add(song.id)
    playlists = [_playlist_from_entry(entry, index) for index, entry in enumerate(raw_playlists)]
    return songs, playlists


def load_library(path: Path) -> Tuple[List[Song], List[PlaylistRecord]]:
    path = Path(path)
    try:
        payload = read_json(path)
    except FileNotFoundError as exc:
        raise LibraryError(f"{path}: no such file") from exc
    except (OSError, ValueError) as exc:
        raise LibraryFormatError(f"{path}: {exc}") from exc
    songs, playlists = parse_library(payload)
    LOGGER.debug("Read %d songs and %d playlists from %s", len(songs), len(playlists), path)
    return songs, playlists


__all__ = ["load_library", "parse_library"]
