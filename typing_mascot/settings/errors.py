from __future__ import annotations


class SettingsError(Exception):
    """Base class for settings failures.

    ``str(err)`` is the message shown to the user: a static description of
    the failing step followed by the underlying error text.
    """

    def __init__(self, description: str, cause: object = None) -> None:
        self.description = description
        self.cause_text = "" if cause is None else str(cause)
        if self.cause_text:
            message = f"{description}: {self.cause_text}"
        else:
            message = description
        super().__init__(message)


class SettingsIOError(SettingsError):
    """Reading, writing or deleting the settings file failed."""


class ConfigDirError(SettingsIOError):
    """The per-user config directory could not be resolved or created."""


class SettingsParseError(SettingsError):
    """The settings file is not valid JSON or does not have the expected shape."""
