"""OpenCV window used to present annotated frames."""

from __future__ import annotations

import contextlib
from typing import Protocol

import cv2
import numpy as np

from qr_tools.core.logging_utils import LoggerLike, ensure_structured_logger
from qr_tools.modules.Scanner.defaults import DEFAULT_WAIT_KEY_MS, DEFAULT_WINDOW_TITLE


class Display(Protocol):
    def show(self, frame: np.ndarray) -> int:
        """Present ``frame`` and return the latest key code (-1 for none)."""
        ...

    def close(self) -> None:
        ...


class WindowDisplay:
    """``cv2.imshow`` window; key codes come from ``waitKeyEx`` and are not masked."""

    def __init__(
        self,
        title: str = DEFAULT_WINDOW_TITLE,
        wait_ms: int = DEFAULT_WAIT_KEY_MS,
        *,
        logger: LoggerLike = None,
    ) -> None:
        self.title = title
        self.wait_ms = max(1, wait_ms)
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._opened = False

    def show(self, frame: np.ndarray) -> int:
        cv2.imshow(self.title, frame)
        if not self._opened:
            self._opened = True
            self._logger.debug("Window '%s' shown (%dx%d)", self.title, frame.shape[1], frame.shape[0])
        # Extended codes stay intact so arrows never alias to ASCII exit keys.
        return cv2.waitKeyEx(self.wait_ms)

    def close(self) -> None:
        if not self._opened:
            return
        self._opened = False
        with contextlib.suppress(cv2.error):
            cv2.destroyWindow(self.title)
        cv2.destroyAllWindows()


__all__ = ["Display", "WindowDisplay"]
