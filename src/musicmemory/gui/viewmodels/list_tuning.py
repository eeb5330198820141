"""Window and timing parameters for the ranked list screens."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from musicmemory import config


@dataclass(frozen=True)
class ListTuning:
    initial_batch_size: int = config.INITIAL_BATCH_SIZE
    batch_increment: int = config.BATCH_INCREMENT
    load_more_threshold: int = config.LOAD_MORE_THRESHOLD
    search_debounce_ms: int = config.SEARCH_DEBOUNCE_MS
    sort_debounce_ms: int = config.SORT_DEBOUNCE_MS
    reveal_delay_ms: int = config.REVEAL_DELAY_MS

    def __post_init__(self) -> None:
        if self.initial_batch_size <= 0 or self.batch_increment <= 0:
            raise ValueError("batch sizes must be positive")
        if self.load_more_threshold < 0:
            raise ValueError("load_more_threshold must not be negative")
        for name in ("search_debounce_ms", "sort_debounce_ms", "reveal_delay_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ListTuning":
        """Build from the ``lists`` settings section, ignoring unknown keys."""
        if not data:
            return cls()
        known = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
