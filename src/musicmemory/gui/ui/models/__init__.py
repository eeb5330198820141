"""Expose Qt models used by the GUI."""

from .media_list_model import MediaListModel
from .roles import Roles

__all__ = [
    "MediaListModel",
    "Roles",
]
