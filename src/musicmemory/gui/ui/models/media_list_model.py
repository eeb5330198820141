"""Qt list model that presents a MediaListViewModel to QML and item views."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt, Signal, Slot

from musicmemory.gui.viewmodels.media_list_viewmodel import MediaListViewModel
from musicmemory.gui.ui.models.roles import Roles, role_names


_LOGGER = logging.getLogger(__name__)


def _extends(old: List[Any], new: List[Any]) -> bool:
    """Return ``True`` when *new* is *old* with rows appended at the end."""
    if len(new) <= len(old):
        return False
    return all(a is b for a, b in zip(old, new))


class MediaListModel(QAbstractListModel):
    """
    Qt adapter over a :class:`MediaListViewModel`.
    Rows are the ViewModel's visible items; reveal steps arrive as row
    insertions so views keep their scroll position.
    """

    loadingMoreChanged = Signal(bool)
    searchResultsChanged = Signal(int)

    def __init__(self, viewmodel: MediaListViewModel, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._viewmodel = viewmodel
        self._rows: List[Any] = viewmodel.visible_items()

        viewmodel.filtered_items.changed.connect(self._on_rows_changed)
        viewmodel.is_loading_more.changed.connect(self._on_loading_changed)

    @property
    def viewmodel(self) -> MediaListViewModel:
        return self._viewmodel

    def detach(self) -> None:
        """Stop listening to the ViewModel (call before disposing it)."""
        self._viewmodel.filtered_items.changed.disconnect(self._on_rows_changed)
        self._viewmodel.is_loading_more.changed.disconnect(self._on_loading_changed)

    def rowCount(self, parent=QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._rows)

    def roleNames(self):
        return role_names(super().roleNames())

    def item_at(self, row: int) -> Optional[Any]:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return None
        item = self.item_at(index.row())
        if item is None:
            return None

        role_int = int(role)

        if role_int == Qt.ItemDataRole.DisplayRole or role_int == Roles.TITLE:
            return item.list_title
        if role_int == Qt.ItemDataRole.ToolTipRole:
            return f"{item.list_title} - {item.list_subtitle} ({item.list_play_count} plays)"
        if role_int == Roles.ITEM_ID:
            return item.id
        if role_int == Roles.SUBTITLE:
            return item.list_subtitle
        if role_int == Roles.PLAY_COUNT:
            return item.list_play_count
        if role_int == Roles.RANK:
            # 0 renders as "#0" for rows that dropped out of the collection.
            return self._viewmodel.rank_of(item) or 0
        if role_int == Roles.ICON_NAME:
            return item.list_icon_name
        if role_int == Roles.ITEM:
            return item
        return None

    # -- incremental reveal ------------------------------------------------

    def canFetchMore(self, parent=QModelIndex()) -> bool:
        if parent.isValid():
            return False
        return self._viewmodel.has_more and not self._viewmodel.is_loading_more.value

    def fetchMore(self, parent=QModelIndex()) -> None:
        if parent.isValid():
            return
        self._viewmodel.load_more()

    @Slot(int)
    def rowShown(self, row: int) -> None:
        """Views report each rendered row so the window grows near the end."""
        item = self.item_at(row)
        if item is not None:
            self._viewmodel.load_more_if_needed(item)

    @Slot(str)
    def setSearchText(self, text: str) -> None:
        self._viewmodel.set_search_text(text)

    @Slot()
    def toggleSortDirection(self) -> None:
        self._viewmodel.toggle_sort_direction()

    # -- ViewModel notifications --------------------------------------------

    def _on_rows_changed(self, new_rows, old_rows) -> None:
        new_rows = list(new_rows)
        if _extends(self._rows, new_rows):
            first = len(self._rows)
            self.beginInsertRows(QModelIndex(), first, len(new_rows) - 1)
            self._rows = new_rows
            self.endInsertRows()
        else:
            self.beginResetModel()
            self._rows = new_rows
            self.endResetModel()
        _LOGGER.debug("%s: model now has %d rows", self._viewmodel.name, len(self._rows))
        if self._viewmodel.is_searching:
            self.searchResultsChanged.emit(len(self._rows))

    def _on_loading_changed(self, loading, _previous) -> None:
        self.loadingMoreChanged.emit(bool(loading))
