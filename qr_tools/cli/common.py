"""Pieces every entry point needs: logging flags, config lookups and banners."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, TypeVar

from qr_tools.core.logging_config import configure_logging
from qr_tools.core.logging_utils import LoggerLike, ensure_structured_logger

T = TypeVar("T")

LOG_LEVELS: dict[str, int] = {
    name: getattr(logging, name.upper())
    for name in ("debug", "info", "warning", "error", "critical")
}


def add_common_cli_arguments(
    parser: argparse.ArgumentParser,
) -> None:
    """Add ``--log-level``, ``--log-file`` and ``--config``."""
    group = parser.add_argument_group("logging and configuration")
    group.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="warning",
        help="Logging verbosity (default: %(default)s)",
    )
    group.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Also write logs to this rotating file",
    )
    group.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="key = value settings file",
    )


def setup_cli_logging(args: Any) -> None:
    configure_logging(
        getattr(args, "log_level", "warning"),
        log_file=getattr(args, "log_file", None),
    )


def _lookup(config: Mapping[str, Any], key: str, default: T, convert: Callable[[Any], T]) -> T:
    value = config.get(key)
    if value is None:
        return default
    try:
        return convert(value)
    except (TypeError, ValueError):
        return default


def get_config_int(config: Mapping[str, Any], key: str, default: int) -> int:
    return _lookup(config, key, default, int)


def get_config_str(config: Mapping[str, Any], key: str, default: str) -> str:
    return _lookup(config, key, default, str)


def get_config_path(config: Mapping[str, Any], key: str, default: Optional[Path]) -> Optional[Path]:
    text = _lookup(config, key, "", str).strip()
    return Path(text) if text else default


def install_exception_handlers(logger: LoggerLike = None) -> None:
    """Log uncaught exceptions at CRITICAL before the interpreter exits."""
    log = ensure_structured_logger(logger, fallback_name=__name__)

    def _excepthook(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        log.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = _excepthook


def log_program_startup(logger: LoggerLike, program: str, **details: Any) -> None:
    log = ensure_structured_logger(logger, fallback_name=__name__)
    rule = "=" * 60
    log.info(rule)
    log.info("%s starting", program)
    for key, value in details.items():
        log.info("%s: %s", key.replace("_", " ").title(), value)
    log.info(rule)


def log_program_shutdown(logger: LoggerLike, program: str, **details: Any) -> None:
    log = ensure_structured_logger(logger, fallback_name=__name__)
    if not details:
        log.info("%s stopped", program)
        return
    log.info("%s stopped (%s)", program, ", ".join(f"{key}={value}" for key, value in details.items()))


__all__ = [
    "LOG_LEVELS",
    "add_common_cli_arguments",
    "setup_cli_logging",
    "get_config_int",
    "get_config_str",
    "get_config_path",
    "install_exception_handlers",
    "log_program_startup",
    "log_program_shutdown",
]
