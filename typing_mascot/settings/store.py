from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

from .errors import ConfigDirError, SettingsIOError, SettingsParseError
from .model import SETTINGS_FILENAME, Settings, default_settings, dumps_settings, loads_settings

logger = logging.getLogger(__name__)


def _default_resolver() -> Callable[[], Path]:
    # Imported lazily: paths depends on this package for its error types.
    from ..paths import AppConfigDirResolver

    return AppConfigDirResolver()


def _deep_merge(base: Dict[str, Any], patch: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in patch.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass
class SettingsStore:
    """Load/save the mascot settings file.

    Each call is one synchronous transaction against the file system. There is
    no cache and no lock: concurrent saves resolve as last writer wins.
    """

    resolver: Callable[[], Path] = field(default_factory=_default_resolver)
    filename: str = SETTINGS_FILENAME

    def config_dir(self, create: bool = True) -> Path:
        try:
            directory = Path(self.resolver())
        except ConfigDirError:
            raise
        except Exception as exc:
            raise ConfigDirError("Failed to get config directory", exc) from exc
        if create and not directory.exists():
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ConfigDirError("Failed to create config directory", exc) from exc
            logger.debug("Created config directory %s", directory)
        return directory

    def path(self, create: bool = False) -> Path:
        return self.config_dir(create=create) / self.filename

    def get(self) -> Settings:
        path = self.path(create=True)
        if not path.exists():
            logger.debug("No settings file at %s; using defaults", path)
            return default_settings()

        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SettingsIOError("Failed to read settings file", exc) from exc
        return loads_settings(raw)

    def save(self, settings: Settings) -> None:
        path = self.path(create=True)

        # Round-trip through the parser so nothing reaches disk that get() would reject.
        try:
            checked = Settings.from_dict(settings.to_dict())
            data = dumps_settings(checked).encode("utf-8")
        except SettingsParseError as exc:
            raise SettingsIOError("Failed to serialize settings", exc.cause_text) from exc
        except (TypeError, ValueError, AttributeError) as exc:
            raise SettingsIOError("Failed to serialize settings", exc) from exc

        for note in checked.range_warnings():
            logger.warning("Saving out-of-range setting: %s", note)

        # Atomic write
        tmp = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=path.name + ".", suffix=".tmp")
            tmp = Path(tmp_name)
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp, path)
        except OSError as exc:
            if tmp is not None:
                try:
                    tmp.unlink()
                except OSError:
                    pass
            raise SettingsIOError("Failed to write settings file", exc) from exc
        logger.info("Saved settings to %s", path)

    def reset(self) -> Settings:
        path = self.path(create=False)
        if path.exists():
            try:
                path.unlink()
            except OSError as exc:
                raise SettingsIOError("Failed to delete settings file", exc) from exc
            logger.info("Deleted settings file %s", path)
        return default_settings()

    # Convenience helpers -------------------------------------------------
    def update(self, patch: Mapping[str, Any]) -> Settings:
        """Apply a partial camelCase change by rewriting the whole file."""
        current = self.get().to_dict()
        updated = Settings.from_dict(_deep_merge(current, patch))
        self.save(updated)
        return updated
