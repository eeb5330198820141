"""Schema helpers for the application settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from .. import config

_POSITIVE = {"type": "integer", "minimum": 1}
_NON_NEGATIVE = {"type": "integer", "minimum": 0}

_SORT_ENTRY = {
    "type": "object",
    "properties": {
        "option": {"type": "string", "minLength": 1},
        "ascending": {"type": "boolean"},
    },
    "required": ["option", "ascending"],
    "additionalProperties": False,
}

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "musicmemory/settings.schema.json",
    "type": "object",
    "required": ["schema", "lists", "default_sort", "library"],
    "properties": {
        "schema": {"const": "musicmemory/settings@1"},
        "lists": {
            "type": "object",
            "properties": {
                "initial_batch_size": _POSITIVE,
                "batch_increment": _POSITIVE,
                "load_more_threshold": _NON_NEGATIVE,
                "search_debounce_ms": _NON_NEGATIVE,
                "sort_debounce_ms": _NON_NEGATIVE,
                "reveal_delay_ms": _NON_NEGATIVE,
            },
            "additionalProperties": False,
        },
        "default_sort": {
            "type": "object",
            "properties": {
                kind: _SORT_ENTRY
                for kind in ("songs", "albums", "artists", "genres", "playlists")
            },
            "additionalProperties": False,
        },
        "library": {
            "type": "object",
            "properties": {
                "hide_zero_play_counts": {"type": "boolean"},
                "last_snapshot_path": {"type": ["string", "null"]},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "musicmemory/settings@1",
    "lists": {
        "initial_batch_size": config.INITIAL_BATCH_SIZE,
        "batch_increment": config.BATCH_INCREMENT,
        "load_more_threshold": config.LOAD_MORE_THRESHOLD,
        "search_debounce_ms": config.SEARCH_DEBOUNCE_MS,
        "sort_debounce_ms": config.SORT_DEBOUNCE_MS,
        "reveal_delay_ms": config.REVEAL_DELAY_MS,
    },
    "default_sort": {
        kind: {"option": "play_count", "ascending": False}
        for kind in ("songs", "albums", "artists", "genres", "playlists")
    },
    "library": {
        "hide_zero_play_counts": config.HIDE_ZERO_PLAY_COUNTS,
        "last_snapshot_path": None,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "default_sort" and isinstance(value, dict):
                target = merged.setdefault("default_sort", {})
                for kind, entry in value.items():
                    if isinstance(entry, dict) and isinstance(target.get(kind), dict):
                        target[kind] = {**target[kind], **entry}
                    else:
                        target[kind] = entry
                continue
            if key in ("lists", "library") and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
