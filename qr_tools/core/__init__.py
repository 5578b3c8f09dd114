"""Shared infrastructure (logging, errors) for the QR tools."""

from .errors import CameraOpenError, EncodeError, QRToolsError
from .logging_config import configure_logging
from .logging_utils import LoggerLike, StructuredLogger, ensure_structured_logger, get_module_logger

__all__ = [
    "CameraOpenError",
    "EncodeError",
    "QRToolsError",
    "configure_logging",
    "LoggerLike",
    "StructuredLogger",
    "ensure_structured_logger",
    "get_module_logger",
]
