"""Logging-related utilities.

The settings modules only create loggers; handlers are configured by the
host process through :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Optional, TextIO, Union


# A reasonably complete ANSI escape sequence matcher (CSI + single-character).
_ANSI_ESCAPE_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_FILENAME = "typing_mascot.log"


def sanitize_message(text: str) -> str:
    """Flatten an error text so it displays on a single line.

    - Strip ANSI escape sequences.
    - Collapse CR/LF runs into ``" | "``.
    - Trim surrounding whitespace.
    """

    if not text:
        return ""

    text = _ANSI_ESCAPE_RE.sub("", text)
    lines = [ln.strip() for ln in re.split(r"[\r\n]+", text)]
    return " | ".join(ln for ln in lines if ln)


def setup_logging(
    log_dir: Optional[Union[str, Path]] = None,
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
) -> Optional[str]:
    """Configure logging to a persistent file plus a console stream (stdout by default).

    The mascot usually runs without a visible console, so a log file next to
    the settings is the place to look after a failure. Returns the log file
    path, or None when no file could be set up.
    """

    root = logging.getLogger()
    # Don't clobber an existing logging configuration (e.g. when embedded).
    if root.handlers:
        return None

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    log_path: Optional[Path] = None
    if log_dir is not None:
        try:
            directory = Path(log_dir).expanduser()
            directory.mkdir(parents=True, exist_ok=True)
            log_path = directory / LOG_FILENAME
            handlers.insert(0, logging.FileHandler(str(log_path), mode="a", encoding="utf-8"))
        except OSError:
            log_path = None

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    if log_path is None:
        return None
    logging.getLogger(__name__).info("Logging to %s", log_path)
    return str(log_path)
