import heapq
import itertools
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Qt-backed tests run headless.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from musicmemory.domain.models import Song  # noqa: E402


class _ManualHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler: callbacks run only when the clock advances."""

    def __init__(self) -> None:
        self.now = 0
        self._queue = []
        self._seq = itertools.count()

    def call_later(self, delay_ms, callback):
        handle = _ManualHandle()
        heapq.heappush(self._queue, (self.now + delay_ms, next(self._seq), callback, handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, _, handle in self._queue if not handle.cancelled)

    def advance(self, ms: int) -> None:
        target = self.now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, callback, handle = heapq.heappop(self._queue)
            self.now = due
            if not handle.cancelled:
                callback()
        self.now = target

    def run_all(self) -> None:
        while self._queue:
            self.advance(self._queue[0][0] - self.now)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_song(index: int, **overrides) -> Song:
    fields = {
        "id": f"s{index:03d}",
        "title": f"Track {index:03d}",
        "artist": f"Artist {index % 7}",
        "album_title": f"Album {index % 11}",
        "genre": ("Rock", "Jazz", "Pop")[index % 3],
        "play_count": index,
        "duration": 120.0 + index,
        "date_added": BASE_DATE + timedelta(days=index),
        "last_played": BASE_DATE + timedelta(days=2 * index),
    }
    fields.update(overrides)
    return Song(**fields)


@pytest.fixture
def song_factory():
    return make_song


@pytest.fixture
def songs_200():
    """200 songs with distinct play counts 1..200; ids s001..s200."""
    return [make_song(i) for i in range(1, 201)]
