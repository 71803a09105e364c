"""Config directory resolution.

The settings store is handed one of these resolvers instead of looking up a
global location itself, so tests and the CLI can point it anywhere.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from platformdirs import user_config_dir

from .settings.errors import ConfigDirError

DEFAULT_APP_ID = "com.typing-mascot.app"
CONFIG_DIR_ENV = "TYPING_MASCOT_CONFIG_DIR"

PathResolver = Callable[[], Path]


@dataclass(frozen=True)
class AppConfigDirResolver:
    """Resolve the per-user, per-application config directory.

    Search order:
      1) $TYPING_MASCOT_CONFIG_DIR (if set and non-blank)
      2) the platform convention for ``app_id`` (via platformdirs)
    """

    app_id: str = DEFAULT_APP_ID
    env_var: str = CONFIG_DIR_ENV

    def __call__(self) -> Path:
        try:
            env = (os.environ.get(self.env_var) or "").strip()
            if env:
                return Path(env).expanduser()
            return Path(user_config_dir(self.app_id, appauthor=False, roaming=True))
        except Exception as exc:
            raise ConfigDirError("Failed to get config directory", exc) from exc


@dataclass(frozen=True)
class FixedDirResolver:
    path: Path

    def __call__(self) -> Path:
        return Path(self.path).expanduser()
