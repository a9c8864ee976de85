import logging
import os
import sys
from typing import Optional, Union

ENV_LOG_LEVEL = "SHELLCRAFT_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def _as_level(value: Union[str, int, None]) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.isdigit():
            return int(text)
        level = logging.getLevelName(text.upper())
        if isinstance(level, int):
            return level
    return None


def resolve_level(default_level: int = logging.INFO, configured: Union[str, int, None] = None) -> int:
    """Pick a log level: SHELLCRAFT_LOG_LEVEL env var, then the configured value, then the default.

    Names are case-insensitive; numeric levels are taken as is. Values that
    are neither fall through to the next source.
    """
    for candidate in (os.getenv(ENV_LOG_LEVEL), configured):
        level = _as_level(candidate)
        if level is not None:
            return level
    return default_level


def configure_logging(level: int = logging.INFO) -> None:
    """Send log records to stderr, leaving stdout to the journal text.

    Replaces any root handlers, so calling it twice in one process does not
    duplicate output.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(handler)
    root.setLevel(level)
