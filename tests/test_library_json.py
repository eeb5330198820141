"""Tests for the JSON library snapshot reader."""

import json
from datetime import timezone

import pytest

from musicmemory.errors import LibraryError, LibraryFormatError
from musicmemory.io.library_json import load_library, parse_library


def _write(tmp_path, payload):
    path = tmp_path / "library.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestParseLibrary:
    def test_full_song_entry(self):
        songs, playlists = parse_library(
            {
                "songs": [
                    {
                        "id": 7,
                        "title": "Hey",
                        "artist": "Band",
                        "album": "Debut",
                        "album_artist": "Band",
                        "genre": "Rock",
                        "play_count": 12,
                        "duration": 215,
                        "date_added": "2024-03-01T10:00:00Z",
                        "last_played": "2025-01-07T21:14:03+01:00",
                    }
                ],
                "playlists": [{"id": "p1", "name": "Mix", "songs": [7]}],
            }
        )

        (song,) = songs
        assert song.id == "7"
        assert song.album_title == "Debut"
        assert song.duration == 215.0
        assert song.date_added.year == 2024
        assert song.last_played.utcoffset().total_seconds() == 3600
        assert playlists[0].song_ids == ("7",)

    def test_minimal_song(self):
        (song,), playlists = parse_library({"songs": [{"id": "a"}]})

        assert song.title is None
        assert song.play_count == 0
        assert song.date_added is None
        assert playlists == []

    def test_naive_dates_become_utc(self):
        (song,), _ = parse_library({"songs": [{"id": "a", "date_added": "2024-05-01T08:00:00"}]})

        assert song.date_added.tzinfo == timezone.utc

    def test_album_title_alias(self):
        (song,), _ = parse_library({"songs": [{"id": "a", "album_title": "Other"}]})

        assert song.album_title == "Other"

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"songs": {}},
            {"songs": ["nope"]},
            {"songs": [{"title": "no id"}]},
            {"songs": [{"id": "a", "play_count": -1}]},
            {"songs": [{"id": "a", "play_count": True}]},
            {"songs": [{"id": "a", "duration": "long"}]},
            {"songs": [{"id": "a", "date_added": "yesterday"}]},
            {"songs": [{"id": "a", "last_played": 12}]},
            {"songs": [{"id": "a"}, {"id": "a"}]},
            {"playlists": [{"name": "no id"}]},
            {"playlists": [{"id": "p", "songs": "s1"}]},
        ],
    )
    def test_malformed_documents(self, payload):
        with pytest.raises(LibraryFormatError):
            parse_library(payload)


class TestLoadLibrary:
    def test_reads_file(self, tmp_path):
        path = _write(tmp_path, {"songs": [{"id": "a", "play_count": 3}]})

        songs, _ = load_library(path)

        assert songs[0].play_count == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(LibraryError):
            load_library(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "library.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(LibraryFormatError):
            load_library(path)
