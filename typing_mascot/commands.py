"""Operations exposed to the GUI front-end.

Each function returns a JSON-serialisable payload: ``{"success": True, ...}``
on success, ``{"success": False, "error": "<message>"}`` on a settings
failure. Settings travel in their camelCase form.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from .log_utils import sanitize_message
from .settings import Settings, SettingsError, SettingsStore

logger = logging.getLogger(__name__)

_DEFAULT_STORE: Optional[SettingsStore] = None


def default_store() -> SettingsStore:
    global _DEFAULT_STORE
    if _DEFAULT_STORE is None:
        _DEFAULT_STORE = SettingsStore()
    return _DEFAULT_STORE


def _failure(action: str, exc: SettingsError) -> Dict[str, Any]:
    message = sanitize_message(str(exc))
    logger.error("%s failed: %s", action, message)
    return {"success": False, "error": message}


def get_settings(store: Optional[SettingsStore] = None) -> Dict[str, Any]:
    store = store or default_store()
    try:
        settings = store.get()
    except SettingsError as exc:
        return _failure("get_settings", exc)
    return {"success": True, "settings": settings.to_dict()}


def save_settings(
    settings: Union[Settings, Mapping[str, Any]],
    store: Optional[SettingsStore] = None,
) -> Dict[str, Any]:
    store = store or default_store()
    try:
        if not isinstance(settings, Settings):
            settings = Settings.from_dict(settings)
        store.save(settings)
    except SettingsError as exc:
        return _failure("save_settings", exc)
    return {"success": True}


def reset_settings(store: Optional[SettingsStore] = None) -> Dict[str, Any]:
    store = store or default_store()
    try:
        settings = store.reset()
    except SettingsError as exc:
        return _failure("reset_settings", exc)
    return {"success": True, "settings": settings.to_dict()}
