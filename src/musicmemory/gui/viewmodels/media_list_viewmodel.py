"""MediaListViewModel — pure Python, no Qt dependency.

One ViewModel shape drives every ranked list screen (songs, albums,
artists, genres, playlists).  The item kind only enters through the
comparator registry handed in at construction.

State flow::

    set_full_collection / set_sort_option / set_sort_ascending
        -> (sort debounce) -> sorted ``items`` + RankIndex -> filter
    set_search_text
        -> (search debounce) -> filter
    load_more / load_more_if_needed
        -> (reveal delay) -> grow window -> filter

The filter step produces ``filtered_items``: the leading window of the
sorted collection when no search is active, otherwise every match.
"""

from __future__ import annotations

import logging
from typing import Generic, Hashable, Iterable, List, Optional, Sequence, TypeVar

from musicmemory.domain.models import MediaListItem
from musicmemory.errors import UnknownSortOptionError
from musicmemory.errors.handler import ErrorHandler, ErrorSeverity, describe
from musicmemory.gui.viewmodels.base import BaseViewModel
from musicmemory.gui.viewmodels.list_tuning import ListTuning
from musicmemory.gui.viewmodels.rank_index import RankIndex, item_identity
from musicmemory.gui.viewmodels.scheduling import Debouncer, Scheduler, TimerHandle
from musicmemory.gui.viewmodels.signal import ObservableProperty, Signal
from musicmemory.sorting.options import SortOption
from musicmemory.sorting.registry import ComparatorRegistry

T = TypeVar("T", bound=MediaListItem)
OptionT = TypeVar("OptionT", bound=SortOption)


def matches_search(item: MediaListItem, needle: str) -> bool:
    """Case-insensitive substring match on title or subtitle."""
    folded = needle.casefold()
    return folded in item.list_title.casefold() or folded in item.list_subtitle.casefold()


class MediaListViewModel(BaseViewModel, Generic[T, OptionT]):
    """Searchable, sortable, incrementally revealed view over one collection.

    The ViewModel owns the full collection and the reveal window; views
    only read ``filtered_items`` / :meth:`rank_of` and write through the
    public methods.  All work happens on the caller's thread, deferred
    through *scheduler*.
    """

    def __init__(
        self,
        registry: ComparatorRegistry[T, OptionT],
        initial_sort_option: OptionT,
        *,
        scheduler: Scheduler,
        sort_ascending: bool = False,
        tuning: Optional[ListTuning] = None,
        error_handler: Optional[ErrorHandler] = None,
        name: str = "list",
    ) -> None:
        super().__init__()
        self._registry = registry.validate()
        if initial_sort_option not in registry:
            raise UnknownSortOptionError(
                f"{initial_sort_option!r} is not a {registry.option_type.__name__}"
            )
        self._scheduler = scheduler
        self._tuning = tuning or ListTuning()
        self._error_handler = error_handler
        self._name = name
        self._logger = logging.getLogger(__name__)

        # Observable properties
        self.items = ObservableProperty([], identity=True)
        self.filtered_items = ObservableProperty([], identity=True)
        self.search_text = ObservableProperty("")
        self.sort_option = ObservableProperty(initial_sort_option)
        self.sort_ascending = ObservableProperty(bool(sort_ascending))
        self.displayed_item_count = ObservableProperty(self._tuning.initial_batch_size)
        self.is_loading_more = ObservableProperty(False)

        # Signals
        self.items_updated = Signal()  # emits the new visible list
        self.error_occurred = Signal()

        self._source: List[T] = []
        self._rank_index = RankIndex()
        self._visible_positions: dict[Hashable, int] = {}
        self._applied_search = ""
        self._reveal_token: Optional[object] = None
        self._reveal_handle: Optional[TimerHandle] = None

        self._sort_debouncer = Debouncer(
            scheduler,
            self._tuning.sort_debounce_ms,
            self._apply_sort,
            name=f"{name}.sort",
        )
        self._search_debouncer = Debouncer(
            scheduler,
            self._tuning.search_debounce_ms,
            self._apply_search,
            name=f"{name}.search",
        )
        self.add_disposer(self._cancel_pending)

    # -- read side -----------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def registry(self) -> ComparatorRegistry[T, OptionT]:
        return self._registry

    @property
    def sort_options(self) -> List[OptionT]:
        return self._registry.options

    @property
    def tuning(self) -> ListTuning:
        return self._tuning

    @property
    def rank_index(self) -> RankIndex:
        return self._rank_index

    @property
    def full_count(self) -> int:
        return len(self._source)

    @property
    def result_count(self) -> int:
        """Number of rows currently displayed (search matches while searching)."""
        return len(self.filtered_items.value)

    @property
    def has_more(self) -> bool:
        return not self.search_text.value and self.displayed_item_count.value < len(self._source)

    @property
    def is_searching(self) -> bool:
        return bool(self._applied_search)

    def visible_items(self) -> List[T]:
        return list(self.filtered_items.value)

    def rank_of(self, item: T) -> Optional[int]:
        """Overall 1-based rank of *item*, ``None`` if it is no longer listed."""
        return self._rank_index.rank_of(item)

    # -- write side ----------------------------------------------------------

    def set_full_collection(self, items: Iterable[T]) -> None:
        """Replace the backing collection wholesale."""
        self._source = list(items)
        self._reset_window()
        self._sort_debouncer.trigger()

    def set_search_text(self, text: Optional[str]) -> None:
        text = text or ""
        previous = self.search_text.value
        if text == previous:
            return
        self.search_text.value = text
        if previous and not text:
            self._reset_window()
        self._search_debouncer.trigger()

    def set_sort_option(self, option: OptionT) -> None:
        if option not in self._registry:
            raise UnknownSortOptionError(
                f"{option!r} is not a {self._registry.option_type.__name__}"
            )
        if option is self.sort_option.value:
            return
        self.sort_option.value = option
        self._reset_window()
        self._sort_debouncer.trigger()

    def set_sort_ascending(self, ascending: bool) -> None:
        ascending = bool(ascending)
        if ascending == self.sort_ascending.value:
            return
        self.sort_ascending.value = ascending
        self._reset_window()
        self._sort_debouncer.trigger()

    def toggle_sort_direction(self) -> None:
        self.set_sort_ascending(not self.sort_ascending.value)

    def reset_view(self) -> None:
        """Apply all pending changes now with a fresh window."""
        self._search_debouncer.cancel()
        self._sort_debouncer.cancel()
        self._applied_search = self.search_text.value
        self._reset_window()
        self._apply_sort()

    def flush_pending(self) -> bool:
        """Run any debounced sort/search immediately; return whether any ran."""
        ran_sort = self._sort_debouncer.flush()
        ran_search = self._search_debouncer.flush()
        return ran_sort or ran_search

    # -- reveal window -------------------------------------------------------

    def load_more_if_needed(self, current_item: T) -> bool:
        """Reveal more rows when *current_item* is near the end of the window."""
        if not self._can_load_more():
            return False
        position = self._visible_positions.get(item_identity(current_item))
        if position is None:
            return False
        if position < len(self.filtered_items.value) - self._tuning.load_more_threshold:
            return False
        return self.load_more()

    def load_more(self) -> bool:
        """Start one reveal step; return ``False`` if the guards refuse it."""
        if not self._can_load_more():
            return False
        self.is_loading_more.value = True
        token = object()
        self._reveal_token = token
        handle = self._scheduler.call_later(
            self._tuning.reveal_delay_ms, lambda: self._finish_reveal(token)
        )
        if self._reveal_token is token:
            self._reveal_handle = handle
        return True

    def _can_load_more(self) -> bool:
        return (
            not self.search_text.value
            and not self.is_loading_more.value
            and self.displayed_item_count.value < len(self._source)
        )

    def _finish_reveal(self, token: object) -> None:
        if token is not self._reveal_token:
            return
        self._reveal_token = None
        self._reveal_handle = None
        grown = min(
            self.displayed_item_count.value + self._tuning.batch_increment,
            len(self._source),
        )
        self.displayed_item_count.value = grown
        self._logger.debug("%s: window grown to %d of %d", self._name, grown, len(self._source))
        self._refilter()
        self.is_loading_more.value = False

    def _cancel_reveal(self) -> None:
        if self._reveal_handle is not None:
            self._reveal_handle.cancel()
        self._reveal_handle = None
        self._reveal_token = None
        self.is_loading_more.value = False

    def _reset_window(self) -> None:
        self._cancel_reveal()
        total = len(self._source)
        initial = self._tuning.initial_batch_size
        self.displayed_item_count.value = min(initial, total) if total else initial

    # -- recomputation -------------------------------------------------------

    def _apply_sort(self) -> None:
        option = self.sort_option.value
        ascending = self.sort_ascending.value
        try:
            ordered = self._registry.sort(self._source, option, ascending)
            ranks = RankIndex.build(ordered)
        except Exception as exc:
            self._fail(exc, "sort")
            return
        self._rank_index = ranks
        self.items.value = ordered
        self._logger.debug(
            "%s: sorted %d items by %s (%s)",
            self._name,
            len(ordered),
            option.value,
            "ascending" if ascending else "descending",
        )
        self._refilter()

    def _apply_search(self) -> None:
        self._applied_search = self.search_text.value
        self._refilter()

    def _refilter(self) -> None:
        ordered: Sequence[T] = self.items.value
        needle = self._applied_search
        try:
            if needle:
                visible = [item for item in ordered if matches_search(item, needle)]
            else:
                visible = list(ordered[: self.displayed_item_count.value])
        except Exception as exc:
            self._fail(exc, "filter")
            return
        self._publish(visible)

    def _publish(self, visible: List[T]) -> None:
        positions: dict[Hashable, int] = {}
        for index, item in enumerate(visible):
            positions.setdefault(item_identity(item), index)
        self._visible_positions = positions
        self.filtered_items.value = visible
        self.items_updated.emit(visible)

    def _fail(self, exc: Exception, stage: str) -> None:
        """Degrade to an empty list instead of letting the fault escape."""
        if self._error_handler is not None:
            self._error_handler.handle(exc, ErrorSeverity.ERROR, list_name=self._name, stage=stage)
        else:
            self._logger.error("%s", describe(exc, self._name, stage))
        self._rank_index = RankIndex()
        self.items.value = []
        self._publish([])
        self.error_occurred.emit(str(exc))

    def _cancel_pending(self) -> None:
        self._sort_debouncer.cancel()
        self._search_debouncer.cancel()
        self._cancel_reveal()


__all__ = ["MediaListViewModel", "matches_search"]
