"""Default configuration values for Music Memory."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Final

# ---------------------------------------------------------------------------
# List screen tuning
# ---------------------------------------------------------------------------

# Number of leading rows exposed by a list screen before the user scrolls.
# Every collection replacement or sort change snaps the window back to this.
INITIAL_BATCH_SIZE: Final[int] = 75

# Rows added to the window by one "reveal more" step.
BATCH_INCREMENT: Final[int] = 75

# A rendered row this close to the end of the window triggers a reveal.
LOAD_MORE_THRESHOLD: Final[int] = 15

SEARCH_DEBOUNCE_MS: Final[int] = 300
SORT_DEBOUNCE_MS: Final[int] = 100

# Cosmetic pause while the "loading more" spinner is visible.
REVEAL_DELAY_MS: Final[int] = 200

# ---------------------------------------------------------------------------
# Library
# ---------------------------------------------------------------------------

# Stand-in for a missing date so date comparators stay total.  Library
# snapshots carry timezone-aware datetimes, so the sentinel is aware too.
DISTANT_PAST: Final[datetime] = datetime.min.replace(tzinfo=timezone.utc)

HIDE_ZERO_PLAY_COUNTS: Final[bool] = True

UNKNOWN_TITLE: Final[str] = "Unknown"
UNKNOWN_PLAYLIST: Final[str] = "Unknown Playlist"
