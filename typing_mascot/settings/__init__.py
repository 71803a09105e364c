"""Persistent display settings for the typing mascot.

The GUI host owns the in-memory value between calls; this package owns the
single JSON file in the per-user config directory.

Design goals:
  * Whole-file writes, done atomically (no truncated settings on crash)
  * Loud loads (a corrupt file is reported, never silently replaced)
  * No caching (every call reflects the file on disk)
"""

from .errors import ConfigDirError, SettingsError, SettingsIOError, SettingsParseError
from .model import (
    ANIMATION_SPEED_RANGE,
    OPACITY_RANGE,
    SETTINGS_FILENAME,
    ImagePaths,
    Settings,
    WindowPosition,
    WindowSize,
    default_settings,
    dumps_settings,
    loads_settings,
)
from .store import SettingsStore

__all__ = [
    "ANIMATION_SPEED_RANGE",
    "OPACITY_RANGE",
    "SETTINGS_FILENAME",
    "ConfigDirError",
    "ImagePaths",
    "Settings",
    "SettingsError",
    "SettingsIOError",
    "SettingsParseError",
    "SettingsStore",
    "WindowPosition",
    "WindowSize",
    "default_settings",
    "dumps_settings",
    "loads_settings",
]
