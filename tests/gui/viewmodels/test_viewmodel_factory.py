"""Tests for ViewModelFactory — pure Python, no Qt dependency."""

from copy import deepcopy
from unittest.mock import Mock

import pytest

from musicmemory.domain.library import MusicLibrary
from musicmemory.domain.models import MediaKind
from musicmemory.errors.handler import ErrorHandler, ErrorOccurredEvent
from musicmemory.events.bus import EventBus
from musicmemory.events.library_events import LibraryLoadedEvent
from musicmemory.gui.factories.viewmodel_factory import ViewModelFactory
from musicmemory.gui.viewmodels.media_list_viewmodel import MediaListViewModel
from musicmemory.settings.schema import DEFAULT_SETTINGS
from musicmemory.sorting.options import AlbumSortOption, SongSortOption


def _settings(**overrides):
    data = deepcopy(DEFAULT_SETTINGS)
    for section, values in overrides.items():
        data[section].update(values)

    def _get(key, default=None):
        target = data
        for part in key.split("."):
            if not isinstance(target, dict) or part not in target:
                return default
            target = target[part]
        return target

    return Mock(get=Mock(side_effect=_get))


class TestViewModelFactory:
    @pytest.mark.parametrize("kind", list(MediaKind))
    def test_create_list_vm_for_every_kind(self, scheduler, kind):
        factory = ViewModelFactory(EventBus(), scheduler)

        vm = factory.create_list_vm(kind)

        assert isinstance(vm, MediaListViewModel)
        assert vm.name == kind.value
        assert vm.sort_option.value.value == "play_count"
        assert vm.sort_ascending.value is False

    def test_vms_are_independent(self, scheduler):
        factory = ViewModelFactory(EventBus(), scheduler)

        first = factory.create_list_vm(MediaKind.SONG)
        second = factory.create_list_vm(MediaKind.SONG)
        first.set_sort_option(SongSortOption.TITLE)

        assert first is not second
        assert second.sort_option.value is SongSortOption.PLAY_COUNT

    def test_library_load_fills_list(self, scheduler, songs_200):
        bus = EventBus()
        library = MusicLibrary(bus)
        vm = ViewModelFactory(bus, scheduler, library=library).create_list_vm(MediaKind.SONG)

        library.load(songs_200)
        scheduler.advance(100)

        assert vm.full_count == 200
        assert len(vm.visible_items()) == 75

    def test_seeds_from_already_loaded_library(self, scheduler, songs_200):
        bus = EventBus()
        library = MusicLibrary(bus)
        library.load(songs_200)

        vm = ViewModelFactory(bus, scheduler, library=library).create_list_vm(MediaKind.ARTIST)
        scheduler.advance(100)

        assert vm.full_count == 7
        assert vm.visible_items()[0].total_play_count >= vm.visible_items()[-1].total_play_count

    def test_revoked_access_empties_list(self, scheduler, songs_200):
        bus = EventBus()
        library = MusicLibrary(bus)
        vm = ViewModelFactory(bus, scheduler, library=library).create_list_vm(MediaKind.SONG)
        library.load(songs_200)
        scheduler.advance(100)

        library.revoke_access("denied")
        scheduler.advance(100)

        assert vm.visible_items() == []

    def test_empty_snapshot_event_clears(self, scheduler, songs_200):
        bus = EventBus()
        vm = ViewModelFactory(bus, scheduler).create_list_vm(MediaKind.SONG)
        vm.set_full_collection(songs_200)

        bus.publish(LibraryLoadedEvent(snapshot=None))
        scheduler.advance(100)

        assert vm.full_count == 0

    def test_dispose_stops_listening(self, scheduler):
        bus = EventBus()
        vm = ViewModelFactory(bus, scheduler).create_list_vm(MediaKind.GENRE)
        assert bus.subscriber_count(LibraryLoadedEvent) == 1

        vm.dispose()

        assert bus.subscriber_count(LibraryLoadedEvent) == 0

    def test_default_sort_from_settings(self, scheduler):
        settings = _settings(default_sort={"albums": {"option": "title", "ascending": True}})
        factory = ViewModelFactory(EventBus(), scheduler, settings=settings)

        vm = factory.create_list_vm(MediaKind.ALBUM)

        assert vm.sort_option.value is AlbumSortOption.TITLE
        assert vm.sort_ascending.value is True

    def test_unknown_default_sort_falls_back(self, scheduler, caplog):
        settings = _settings(default_sort={"songs": {"option": "mood", "ascending": False}})
        factory = ViewModelFactory(EventBus(), scheduler, settings=settings)

        option, ascending = factory.default_sort(MediaKind.SONG)

        assert option is SongSortOption.PLAY_COUNT
        assert ascending is False
        assert "mood" in caplog.text

    def test_tuning_from_settings(self, scheduler):
        settings = _settings(lists={"initial_batch_size": 10})
        factory = ViewModelFactory(EventBus(), scheduler, settings=settings)

        vm = factory.create_list_vm(MediaKind.SONG)

        assert vm.tuning.initial_batch_size == 10
        assert vm.displayed_item_count.value == 10

    def test_error_handler_passed_through(self, scheduler):
        handler = Mock()
        factory = ViewModelFactory(EventBus(), scheduler, error_handler=handler)
        vm = factory.create_list_vm(MediaKind.SONG)

        vm.set_full_collection([object(), object()])
        scheduler.advance(100)

        handler.handle.assert_called_once()

    def test_faults_published_on_factory_bus(self, scheduler):
        bus = EventBus()
        reported = []
        bus.subscribe(ErrorOccurredEvent, reported.append)
        factory = ViewModelFactory(bus, scheduler, error_handler=ErrorHandler(bus))
        vm = factory.create_list_vm(MediaKind.ARTIST)

        vm.set_full_collection([object(), object()])
        scheduler.advance(100)

        (event,) = reported
        assert event.list_name == "artists"
        assert event.stage == "sort"
        assert vm.visible_items() == []

    def test_zero_play_setting_forwarded_to_library(self, scheduler):
        settings = _settings()
        library = Mock()
        ViewModelFactory(EventBus(), scheduler, settings=settings, library=library)
        (slot,) = settings.settingsChanged.connect.call_args.args

        slot("lists.batch_increment", 10)
        slot("library.hide_zero_play_counts", False)

        library.set_hide_zero_play_counts.assert_called_once_with(False)
