"""Component-prefixed loggers for the QR tools.

Every module asks for ``get_module_logger(__name__)``. Messages come out as
``[Scanner.frame_loop] Frame loop started`` so the two programs' log lines
can be told apart in a shared log file.
"""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional, Tuple, Union

ROOT_NAMESPACE = "qr_tools"
DEFAULT_COMPONENT = "Core"

# Package levels that carry no information in a component name.
_SKIPPED_PARTS = ("modules", "core")


def _namespaced(name: Optional[str]) -> str:
    if not name:
        return ROOT_NAMESPACE
    if name == ROOT_NAMESPACE or name.startswith(ROOT_NAMESPACE + "."):
        return name
    return f"{ROOT_NAMESPACE}.{name}"


def component_for(name: str) -> str:
    """``qr_tools.modules.Scanner.scanner_core.frame_loop`` -> ``Scanner.frame_loop``."""
    if not name:
        return DEFAULT_COMPONENT
    if name != ROOT_NAMESPACE and not name.startswith(ROOT_NAMESPACE + "."):
        return name
    parts = [
        part
        for part in name.split(".")[1:]
        if part not in _SKIPPED_PARTS and not part.endswith("_core")
    ]
    return ".".join(parts) or DEFAULT_COMPONENT


class StructuredLogger(logging.LoggerAdapter):
    """LoggerAdapter that prefixes messages with ``[component]``.

    Formatting happens here rather than in the record so a mismatched
    format string degrades to ``message | args=...`` instead of a logging
    traceback in the middle of a frame loop.
    """

    def __init__(self, logger: logging.Logger, component: Optional[str] = None) -> None:
        super().__init__(logger, {})
        self.component = component or component_for(logger.name)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        text = str(msg)
        tag = f"[{self.component}]"
        if not text.startswith(tag):
            text = f"{tag} {text}"
        return text, kwargs

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        text, kwargs = self.process(_render(msg, args), kwargs)
        kwargs.setdefault("stacklevel", 2)
        self.logger.log(level, text, **kwargs)

    def getChild(self, suffix: str) -> "StructuredLogger":
        return StructuredLogger(self.logger.getChild(suffix), component=f"{self.component}.{suffix}")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<StructuredLogger {self.logger.name} [{self.component}]>"


def _render(msg: Any, args: tuple) -> str:
    text = str(msg)
    if not args:
        return text
    try:
        return text % args
    except (TypeError, ValueError):
        return f"{text} | args={' '.join(str(arg) for arg in args)}"


LoggerLike = Union[StructuredLogger, logging.Logger, logging.LoggerAdapter, None]


def ensure_structured_logger(
    logger: LoggerLike,
    *,
    component: Optional[str] = None,
    fallback_name: Optional[str] = None,
) -> StructuredLogger:
    """Wrap whatever logger the caller passed, or create one for ``fallback_name``."""
    if isinstance(logger, StructuredLogger):
        return logger
    if isinstance(logger, logging.LoggerAdapter):
        return StructuredLogger(logger.logger, component=component)
    if isinstance(logger, logging.Logger):
        return StructuredLogger(logger, component=component)
    return get_module_logger(fallback_name)


def get_module_logger(name: Optional[str] = None) -> StructuredLogger:
    return StructuredLogger(logging.getLogger(_namespaced(name)))


__all__ = [
    "LoggerLike",
    "StructuredLogger",
    "component_for",
    "ensure_structured_logger",
    "get_module_logger",
]
