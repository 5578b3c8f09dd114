"""Root logging setup shared by both entry points."""

from __future__ import annotations

import contextlib
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_MAX_BYTES = 500 * 1024
LOG_FILE_BACKUPS = 2


def resolve_level(level: Union[int, str]) -> int:
    """Accept ``logging.DEBUG`` as well as ``"debug"``."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


def _build_handlers(
    level: int,
    stream: Optional[TextIO],
    log_file: Optional[Union[str, Path]],
) -> List[logging.Handler]:
    # stdout is reserved for program output such as the --list report
    handlers: List[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def configure_logging(
    level: Union[int, str] = logging.INFO,
    *,
    stream: Optional[TextIO] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """Install the console and optional rotating file handlers on the root logger.

    Existing root handlers are closed and replaced on every call.
    """
    numeric_level = resolve_level(level)
    root = logging.getLogger()

    for handler in root.handlers[:]:
        root.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()
    for handler in _build_handlers(numeric_level, stream, log_file):
        root.addHandler(handler)

    root.setLevel(numeric_level)


__all__ = ["configure_logging", "resolve_level", "LOG_FORMAT", "LOG_DATEFMT"]
