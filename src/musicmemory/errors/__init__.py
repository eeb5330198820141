"""Custom exception hierarchy for Music Memory."""

from __future__ import annotations


class MusicMemoryError(Exception):
    """Base class for all custom errors raised by Music Memory."""


# --- Sorting (programming errors, never recovered at runtime) ---

class SortConfigurationError(MusicMemoryError):
    """Base class for comparator registry misconfiguration."""


class MissingSortHandlerError(SortConfigurationError):
    """Raised when a sort option has no registered comparator."""


class UnknownSortOptionError(SortConfigurationError):
    """Raised when a caller asks for a sort option the registry does not know."""


# --- Library ---

class LibraryError(MusicMemoryError):
    """Base class for errors occurring while reading the music library."""


class LibraryFormatError(LibraryError):
    """Raised when a library snapshot document is malformed."""


# --- Settings ---

class SettingsError(MusicMemoryError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "LibraryError",
    "LibraryFormatError",
    "MissingSortHandlerError",
    "MusicMemoryError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "SortConfigurationError",
    "UnknownSortOptionError",
]
