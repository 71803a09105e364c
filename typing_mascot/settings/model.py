from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .errors import SettingsParseError

SETTINGS_FILENAME = "settings.json"

# Documented ranges. The store does not enforce them.
ANIMATION_SPEED_RANGE = (50, 500)  # milliseconds per frame
OPACITY_RANGE = (0.0, 1.0)

PARSE_ERROR = "Failed to parse settings"

# Integer fields are 32-bit signed in the persisted format.
INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1


@dataclass
class WindowPosition:
    x: int = 100
    y: int = 100


@dataclass
class WindowSize:
    width: int = 200
    height: int = 200


@dataclass
class ImagePaths:
    """Image file paths for the mascot animation frames."""

    typing1: str = ""
    typing2: str = ""
    idle: str = ""


@dataclass
class Settings:
    """Display settings for the mascot window.

    Field names are snake_case in Python; the persisted form always uses the
    camelCase keys produced by :meth:`to_dict`.
    """

    window_position: WindowPosition = field(default_factory=WindowPosition)
    window_size: WindowSize = field(default_factory=WindowSize)
    animation_speed: int = 200
    images: ImagePaths = field(default_factory=ImagePaths)
    opacity: float = 1.0
    always_on_top: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "windowPosition": {"x": self.window_position.x, "y": self.window_position.y},
            "windowSize": {"width": self.window_size.width, "height": self.window_size.height},
            "animationSpeed": self.animation_speed,
            "images": {
                "typing1": self.images.typing1,
                "typing2": self.images.typing2,
                "idle": self.images.idle,
            },
            "opacity": self.opacity,
            "alwaysOnTop": self.always_on_top,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Settings":
        """Build settings from the camelCase mapping.

        Every field is required and type-checked; unknown keys are ignored.
        Raises :class:`SettingsParseError` naming the offending field.
        """

        root = _require_object(data, "settings")
        pos = _require_object(_require_key(root, "windowPosition", "windowPosition"), "windowPosition")
        size = _require_object(_require_key(root, "windowSize", "windowSize"), "windowSize")
        images = _require_object(_require_key(root, "images", "images"), "images")

        return cls(
            window_position=WindowPosition(
                x=_int_field(pos, "x", "windowPosition.x"),
                y=_int_field(pos, "y", "windowPosition.y"),
            ),
            window_size=WindowSize(
                width=_int_field(size, "width", "windowSize.width"),
                height=_int_field(size, "height", "windowSize.height"),
            ),
            animation_speed=_int_field(root, "animationSpeed", "animationSpeed"),
            images=ImagePaths(
                typing1=_str_field(images, "typing1", "images.typing1"),
                typing2=_str_field(images, "typing2", "images.typing2"),
                idle=_str_field(images, "idle", "images.idle"),
            ),
            opacity=_float_field(root, "opacity", "opacity"),
            always_on_top=_bool_field(root, "alwaysOnTop", "alwaysOnTop"),
        )

    def range_warnings(self) -> List[str]:
        """Notes for values outside their documented ranges (informational only)."""
        notes: List[str] = []
        lo, hi = ANIMATION_SPEED_RANGE
        if not _in_range(self.animation_speed, lo, hi):
            notes.append(f"animationSpeed {self.animation_speed} is outside {lo}-{hi} ms")
        lo_f, hi_f = OPACITY_RANGE
        if not _in_range(self.opacity, lo_f, hi_f):
            notes.append(f"opacity {self.opacity} is outside {lo_f}-{hi_f}")
        return notes


def _in_range(value: Any, lo: float, hi: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return lo <= value <= hi


def default_settings() -> Settings:
    return Settings()


def dumps_settings(settings: Settings) -> str:
    return json.dumps(settings.to_dict(), indent=2, ensure_ascii=False, allow_nan=False)


def loads_settings(text: str) -> Settings:
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise SettingsParseError(PARSE_ERROR, exc) from exc
    return Settings.from_dict(data)


# Shape checks -------------------------------------------------------------

def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _invalid(where: str, expected: str, value: Any) -> SettingsParseError:
    return SettingsParseError(
        PARSE_ERROR, f"invalid type for `{where}`: expected {expected}, found {_type_name(value)}"
    )


def _require_object(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise _invalid(where, "an object", value)
    return value


def _require_key(obj: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in obj:
        raise SettingsParseError(PARSE_ERROR, f"missing field `{where}`")
    return obj[key]


def _int_field(obj: Mapping[str, Any], key: str, where: str) -> int:
    value = _require_key(obj, key, where)
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid(where, "an integer", value)
    if not INT_MIN <= value <= INT_MAX:
        raise SettingsParseError(
            PARSE_ERROR, f"invalid value for `{where}`: {value} does not fit a 32-bit integer"
        )
    return value


def _float_field(obj: Mapping[str, Any], key: str, where: str) -> float:
    value = _require_key(obj, key, where)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _invalid(where, "a number", value)
    return float(value)


def _str_field(obj: Mapping[str, Any], key: str, where: str) -> str:
    value = _require_key(obj, key, where)
    if not isinstance(value, str):
        raise _invalid(where, "a string", value)
    return value


def _bool_field(obj: Mapping[str, Any], key: str, where: str) -> bool:
    value = _require_key(obj, key, where)
    if not isinstance(value, bool):
        raise _invalid(where, "a boolean", value)
    return value
