"""Role definitions shared by the list models."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict

from PySide6.QtCore import Qt


class Roles(IntEnum):
    """Custom roles exposed to QML or widgets."""

    ITEM_ID = Qt.UserRole + 1
    TITLE = Qt.UserRole + 2
    SUBTITLE = Qt.UserRole + 3
    PLAY_COUNT = Qt.UserRole + 4
    RANK = Qt.UserRole + 5
    ICON_NAME = Qt.UserRole + 6
    ITEM = Qt.UserRole + 7


def role_names(base: Dict[int, bytes] | None = None) -> Dict[int, bytes]:
    """Return a mapping of Qt role numbers to byte names."""

    mapping: Dict[int, bytes] = {} if base is None else dict(base)
    mapping.update(
        {
            Roles.ITEM_ID: b"itemId",
            Roles.TITLE: b"title",
            Roles.SUBTITLE: b"subtitle",
            Roles.PLAY_COUNT: b"playCount",
            Roles.RANK: b"rank",
            Roles.ICON_NAME: b"iconName",
            Roles.ITEM: b"item",
        }
    )
    return mapping


__all__ = ["Roles", "role_names"]
