from .schema import DEFAULT_SETTINGS, SETTINGS_SCHEMA, merge_with_defaults, validate_settings

__all__ = [
    "DEFAULT_SETTINGS",
    "SETTINGS_SCHEMA",
    "merge_with_defaults",
    "validate_settings",
]
