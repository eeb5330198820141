from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for settings tests", exc_type=ImportError)
pytest.importorskip("PySide6.QtWidgets", reason="Qt widgets not available", exc_type=ImportError)
pytest.importorskip("PySide6.QtTest", reason="Qt test helpers not available", exc_type=ImportError)

from PySide6.QtTest import QSignalSpy
from PySide6.QtWidgets import QApplication

from musicmemory.domain.library import MusicLibrary
from musicmemory.domain.models import MediaKind, Song
from musicmemory.errors import SettingsLoadError, SettingsValidationError
from musicmemory.events.bus import EventBus
from musicmemory.gui.factories.viewmodel_factory import ViewModelFactory
from musicmemory.gui.viewmodels.scheduling import ImmediateScheduler
from musicmemory.settings.manager import SettingsManager, default_settings_path
from musicmemory.settings.schema import DEFAULT_SETTINGS, merge_with_defaults


@pytest.fixture(scope="module")
def qapp() -> QApplication:
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def test_settings_manager_creates_defaults(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()

    assert settings_path.exists()
    assert manager.get("lists.initial_batch_size") == 75
    assert manager.get("default_sort.songs.option") == "play_count"
    assert manager.get("library.hide_zero_play_counts") is True
    assert manager.get("missing.key", "fallback") == "fallback"


def test_settings_manager_roundtrip(tmp_path: Path, qapp: QApplication) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()
    spy = QSignalSpy(manager.settingsChanged)
    snapshot_path = tmp_path / "library.json"

    manager.set("library.last_snapshot_path", snapshot_path)
    qapp.processEvents()

    assert spy.count() == 1
    assert manager.get("library.last_snapshot_path") == str(snapshot_path)
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["library"]["last_snapshot_path"] == str(snapshot_path)


def test_partial_file_is_merged_with_defaults(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(
        json.dumps({"default_sort": {"albums": {"option": "title"}}, "lists": {"batch_increment": 25}}),
        encoding="utf-8",
    )
    manager = SettingsManager(path=settings_path)
    manager.load()

    assert manager.get("default_sort.albums") == {"option": "title", "ascending": False}
    assert manager.get("default_sort.songs.option") == "play_count"
    assert manager.get("lists.batch_increment") == 25
    assert manager.get("lists.initial_batch_size") == 75


def test_invalid_value_rejected_and_state_kept(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()

    with pytest.raises(SettingsValidationError):
        manager.set("lists.initial_batch_size", 0)

    assert manager.get("lists.initial_batch_size") == 75


def test_corrupt_file_raises_load_error(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        SettingsManager(path=settings_path).load()


def test_non_object_file_raises_load_error(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        SettingsManager(path=settings_path).load()


def test_schema_violation_in_file(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"lists": {"reveal_delay_ms": -1}}), encoding="utf-8")

    with pytest.raises(SettingsValidationError):
        SettingsManager(path=settings_path).load()


def test_snapshot_is_a_copy(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()

    snapshot = manager.snapshot()
    snapshot["lists"]["initial_batch_size"] = 1

    assert manager.get("lists.initial_batch_size") == 75


def test_default_path_honours_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    if os.name == "nt":
        pytest.skip("XDG paths only apply on POSIX")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setattr("sys.platform", "linux")

    assert default_settings_path() == tmp_path / "musicmemory" / "settings.json"


def test_merge_with_defaults_does_not_touch_defaults() -> None:
    merge_with_defaults({"lists": {"initial_batch_size": 5}})

    assert DEFAULT_SETTINGS["lists"]["initial_batch_size"] == 75


def test_zero_play_preference_refreshes_lists(tmp_path: Path, qapp: QApplication) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    bus = EventBus()
    library = MusicLibrary(bus, hide_zero_play_counts=manager.get("library.hide_zero_play_counts"))
    factory = ViewModelFactory(bus, ImmediateScheduler(), settings=manager, library=library)
    vm = factory.create_list_vm(MediaKind.SONG)
    library.load([Song(id="1", play_count=3), Song(id="2", play_count=0)])
    assert [song.id for song in vm.visible_items()] == ["1"]

    manager.set("library.hide_zero_play_counts", False)
    qapp.processEvents()

    assert library.hide_zero_play_counts is False
    assert [song.id for song in vm.visible_items()] == ["1", "2"]

    manager.set("lists.batch_increment", 10)
    manager.set("library.hide_zero_play_counts", True)
    qapp.processEvents()

    assert vm.full_count == 1
    vm.dispose()
