from .signal import Signal, ObservableProperty
from .base import BaseViewModel
from .list_tuning import ListTuning
from .media_list_viewmodel import MediaListViewModel
from .rank_index import RankIndex
from .scheduling import Debouncer, ImmediateScheduler, Scheduler

__all__ = [
    "BaseViewModel",
    "Debouncer",
    "ImmediateScheduler",
    "ListTuning",
    "MediaListViewModel",
    "ObservableProperty",
    "RankIndex",
    "Scheduler",
    "Signal",
]
