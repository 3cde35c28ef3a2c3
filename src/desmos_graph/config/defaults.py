"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

SETTINGS_VERSION = "1"

# Delay after a keypress before the host re-renders (ms, 0 disables); read by the host only
DEFAULT_DEBOUNCE_MS = 500

# Default cache settings
DEFAULT_CACHE_ENABLED = True
DEFAULT_CACHE_LOCATION = "memory"
DEFAULT_CACHE_DIRECTORY = None

# The only origin completion messages are accepted from
DEFAULT_ORIGIN = "app://obsidian.md"

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "version": SETTINGS_VERSION,
        "debounce": DEFAULT_DEBOUNCE_MS,
        "cache_enabled": DEFAULT_CACHE_ENABLED,
        "cache_location": DEFAULT_CACHE_LOCATION,
        "cache_directory": DEFAULT_CACHE_DIRECTORY,
        "origin": DEFAULT_ORIGIN,
        "log_level": DEFAULT_LOG_LEVEL,
    }
