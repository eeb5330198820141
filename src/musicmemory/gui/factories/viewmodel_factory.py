"""ViewModelFactory — centralised creation of the ranked list ViewModels.

Each screen gets its own :class:`MediaListViewModel`; only the comparator
registries are shared.  The factory reads the initial sort and the list
tuning from settings, wires the ViewModel to library reloads and forwards
the zero-play preference to the library when it changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

from musicmemory.domain.models import MediaKind
from musicmemory.events.bus import EventBus
from musicmemory.events.library_events import LibraryLoadedEvent
from musicmemory.gui.viewmodels.list_tuning import ListTuning
from musicmemory.gui.viewmodels.media_list_viewmodel import MediaListViewModel
from musicmemory.gui.viewmodels.scheduling import Scheduler
from musicmemory.settings.schema import DEFAULT_SETTINGS
from musicmemory.sorting.handlers import registry_for
from musicmemory.sorting.options import SortOption

if TYPE_CHECKING:
    from musicmemory.domain.library import MusicLibrary
    from musicmemory.errors.handler import ErrorHandler
    from musicmemory.settings.manager import SettingsManager

LOGGER = logging.getLogger(__name__)

HIDE_ZERO_PLAYS_KEY = "library.hide_zero_play_counts"


def _lookup(data: dict, key: str, default: Any = None) -> Any:
    target: Any = data
    for part in key.split("."):
        if not isinstance(target, dict) or part not in target:
            return default
        target = target[part]
    return target


class ViewModelFactory:
    """Centrally creates list ViewModels for every item kind."""

    def __init__(
        self,
        event_bus: EventBus,
        scheduler: Scheduler,
        *,
        settings: Optional["SettingsManager"] = None,
        library: Optional["MusicLibrary"] = None,
        error_handler: Optional["ErrorHandler"] = None,
    ) -> None:
        self._event_bus = event_bus
        self._scheduler = scheduler
        self._settings = settings
        self._library = library
        self._error_handler = error_handler
        if settings is not None and library is not None:
            settings.settingsChanged.connect(self._on_setting_changed)

    def _on_setting_changed(self, key: str, value: Any) -> None:
        if key == HIDE_ZERO_PLAYS_KEY and self._library is not None:
            LOGGER.debug("Zero-play filter %s", "on" if value else "off")
            self._library.set_hide_zero_play_counts(bool(value))

    def _setting(self, key: str, default: Any = None) -> Any:
        if self._settings is not None:
            return self._settings.get(key, default)
        return _lookup(DEFAULT_SETTINGS, key, default)

    def tuning(self) -> ListTuning:
        return ListTuning.from_mapping(self._setting("lists"))

    def default_sort(self, kind: MediaKind) -> Tuple[SortOption, bool]:
        """Return the configured initial sort for *kind*.

        An option key the kind does not know falls back to play count.
        """
        kind = MediaKind(kind)
        option_type = registry_for(kind).option_type
        entry = self._setting(f"default_sort.{kind.value}") or {}
        ascending = bool(entry.get("ascending", False))
        key = entry.get("option") or "play_count"
        try:
            return option_type.from_key(key), ascending
        except ValueError:
            LOGGER.warning("Unknown default sort %r for %s; using play count", key, kind.value)
            return option_type.PLAY_COUNT, ascending

    def create_list_vm(self, kind: MediaKind) -> MediaListViewModel:
        kind = MediaKind(kind)
        option, ascending = self.default_sort(kind)
        vm = MediaListViewModel(
            registry_for(kind),
            option,
            scheduler=self._scheduler,
            sort_ascending=ascending,
            tuning=self.tuning(),
            error_handler=self._error_handler,
            name=kind.value,
        )

        def _on_library_loaded(event: LibraryLoadedEvent) -> None:
            if event.snapshot is None:
                vm.set_full_collection([])
            else:
                vm.set_full_collection(event.snapshot.collection(kind))

        vm.subscribe_event(self._event_bus, LibraryLoadedEvent, _on_library_loaded)
        if self._library is not None and self._library.has_access:
            vm.set_full_collection(self._library.snapshot.collection(kind))
        return vm
