"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from musicmemory.cli import app

runner = CliRunner()


@pytest.fixture
def library_file(tmp_path):
    songs = [
        {"id": "1", "title": "Alpha", "artist": "Ann", "album": "One", "genre": "Pop", "play_count": 5},
        {"id": "2", "title": "Bravo", "artist": "Ben", "album": "One", "genre": "Pop", "play_count": 9},
        {"id": "3", "title": "Charlie", "artist": "Ann", "album": "Two", "genre": "Jazz", "play_count": 2},
        {"id": "4", "title": "Love Me", "artist": "Cat", "album": "Two", "genre": "Jazz", "play_count": 7},
        {"id": "5", "title": "Silent", "artist": "Dan", "genre": "Ambient", "play_count": 0},
    ]
    playlists = [{"id": "p1", "name": "Mix", "songs": ["1", "4"]}]
    path = tmp_path / "library.json"
    path.write_text(json.dumps({"songs": songs, "playlists": playlists}), encoding="utf-8")
    return path


def _rows(output, titles):
    return sorted(titles, key=output.index)


def test_top_songs_by_play_count(library_file):
    result = runner.invoke(app, ["top", "songs", str(library_file)])

    assert result.exit_code == 0, result.output
    assert _rows(result.output, ["Alpha", "Bravo", "Charlie", "Love Me"]) == [
        "Bravo",
        "Love Me",
        "Alpha",
        "Charlie",
    ]
    assert "Silent" not in result.output
    assert "Showing 4 of 4" in result.output


def test_include_unplayed(library_file):
    result = runner.invoke(app, ["top", "songs", str(library_file), "--include-unplayed"])

    assert result.exit_code == 0, result.output
    assert "Silent" in result.output
    assert "Showing 5 of 5" in result.output


def test_sort_and_direction(library_file):
    result = runner.invoke(app, ["top", "songs", str(library_file), "--sort", "title", "--ascending"])

    assert result.exit_code == 0, result.output
    assert "by Title (ascending)" in result.output
    assert _rows(result.output, ["Alpha", "Bravo", "Charlie", "Love Me"]) == [
        "Love Me",
        "Charlie",
        "Bravo",
        "Alpha",
    ]


def test_search(library_file):
    result = runner.invoke(app, ["top", "songs", str(library_file), "-q", "love"])

    assert result.exit_code == 0, result.output
    assert "Love Me" in result.output
    assert "Bravo" not in result.output
    assert "Found 1 results" in result.output
    assert "#2" in result.output


def test_aggregated_kind(library_file):
    result = runner.invoke(app, ["top", "albums", str(library_file)])

    assert result.exit_code == 0, result.output
    # Albums are keyed by title and artist.
    assert "Showing 4 of 4" in result.output


def test_unknown_sort_option_is_usage_error(library_file):
    result = runner.invoke(app, ["top", "playlists", str(library_file), "--sort", "duration"])

    assert result.exit_code == 2


def test_malformed_library_reports_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"songs": [{"title": "no id"}]}), encoding="utf-8")

    result = runner.invoke(app, ["top", "songs", str(path)])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_settings_supply_default_sort(library_file, tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text(
        json.dumps({"default_sort": {"songs": {"option": "title", "ascending": False}}}),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["top", "songs", str(library_file), "--settings", str(settings)])

    assert result.exit_code == 0, result.output
    assert "by Title (descending)" in result.output


def test_sort_options_lists_keys():
    result = runner.invoke(app, ["sort-options", "playlists"])

    assert result.exit_code == 0, result.output
    for key in ("name", "play_count", "song_count"):
        assert key in result.output
    assert "duration" not in result.output


def test_descending_overrides_settings(library_file, tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text(
        json.dumps({"default_sort": {"songs": {"option": "title", "ascending": True}}}),
        encoding="utf-8",
    )

    from_settings = runner.invoke(app, ["top", "songs", str(library_file), "--settings", str(settings)])
    overridden = runner.invoke(
        app, ["top", "songs", str(library_file), "--settings", str(settings), "--descending"]
    )

    assert from_settings.exit_code == 0, from_settings.output
    assert "by Title (ascending)" in from_settings.output
    assert overridden.exit_code == 0, overridden.output
    assert "by Title (descending)" in overridden.output
    assert _rows(overridden.output, ["Alpha", "Bravo", "Charlie", "Love Me"])[0] == "Alpha"


def test_last_library_is_remembered(library_file, tmp_path):
    settings = tmp_path / "settings.json"

    first = runner.invoke(app, ["top", "songs", str(library_file), "--settings", str(settings)])
    again = runner.invoke(app, ["top", "songs", "--settings", str(settings)])

    assert first.exit_code == 0, first.output
    stored = json.loads(settings.read_text(encoding="utf-8"))
    assert stored["library"]["last_snapshot_path"] == str(library_file.resolve())
    assert again.exit_code == 0, again.output
    assert again.output == first.output


def test_without_library_or_remembered_one_is_usage_error(tmp_path):
    result = runner.invoke(app, ["top", "songs", "--settings", str(tmp_path / "settings.json")])

    assert result.exit_code == 2


def test_remembered_library_that_disappeared_is_usage_error(library_file, tmp_path):
    settings = tmp_path / "settings.json"
    runner.invoke(app, ["top", "songs", str(library_file), "--settings", str(settings)])
    library_file.unlink()

    result = runner.invoke(app, ["top", "songs", "--settings", str(settings)])

    assert result.exit_code == 2
