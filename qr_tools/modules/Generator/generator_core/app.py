"""Interactive generator loop: redraw on change, poll keys, save on request."""

from __future__ import annotations

import contextlib
import random
from pathlib import Path
from typing import Callable, Optional, Protocol

import cv2
import numpy as np

from qr_tools.core.logging_utils import LoggerLike, ensure_structured_logger
from qr_tools.modules.base.exit_control import ExitFlag

from .encoder import Encoder, QRCodeEncoder
from .render import compose_canvas, compose_saved_canvas, render_qr, save_qr
from .state import GeneratorState, KeyAction, apply_key, normalize_key

DEFAULT_WINDOW_TITLE = "QR Code Generator"
DEFAULT_POLL_INTERVAL_MS = 100


class GeneratorWindow(Protocol):
    def show(self, canvas: np.ndarray) -> None:
        ...

    def wait_key(self, timeout_ms: int) -> int:
        """Raw key code, or -1 when the timeout expires."""
        ...

    def close(self) -> None:
        ...


class OpenCVWindow:
    """Auto-sized ``cv2`` window reporting extended key codes."""

    def __init__(self, title: str = DEFAULT_WINDOW_TITLE) -> None:
        self.title = title
        self._created = False

    def show(self, canvas: np.ndarray) -> None:
        if not self._created:
            cv2.namedWindow(self.title, cv2.WINDOW_AUTOSIZE)
            self._created = True
        cv2.imshow(self.title, canvas)

    def wait_key(self, timeout_ms: int) -> int:
        return cv2.waitKeyEx(timeout_ms)

    def close(self) -> None:
        if not self._created:
            return
        self._created = False
        with contextlib.suppress(cv2.error):
            cv2.destroyWindow(self.title)
        cv2.destroyAllWindows()


class GeneratorApp:
    """Keyboard driven QR generator.

    Keys are polled with a short timeout instead of blocking forever so a
    termination signal recorded in ``flag`` ends the session promptly.
    """

    def __init__(
        self,
        state: GeneratorState,
        window: GeneratorWindow,
        *,
        encoder: Optional[Encoder] = None,
        flag: Optional[ExitFlag] = None,
        rng: Optional[random.Random] = None,
        writer: Optional[Callable[..., bool]] = None,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        logger: LoggerLike = None,
    ) -> None:
        self.state = state
        self._window = window
        self._encoder = encoder if encoder is not None else QRCodeEncoder()
        self.flag = flag if flag is not None else ExitFlag()
        self._rng = rng or random.Random()
        self._writer = writer or save_qr
        self._poll_interval_ms = max(1, poll_interval_ms)
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self.saved_paths: list[Path] = []
        self.redraws = 0

    def redraw(self) -> None:
        canvas = compose_canvas(render_qr(self.state, self._encoder, logger=self._logger), self.state)
        self._window.show(canvas)
        self.redraws += 1

    def save(self) -> bool:
        qr = render_qr(self.state, self._encoder, logger=self._logger)
        path = self.state.save_path()
        ok = self._writer(qr, path, logger=self._logger)
        if ok:
            self.saved_paths.append(path)
        self._window.show(compose_saved_canvas(qr, path, ok=ok))
        return ok

    def handle_key(self, code: int) -> KeyAction:
        ch = normalize_key(code)
        action = apply_key(self.state, ch, self._rng)
        if action is not KeyAction.NONE:
            self._logger.debug("Key %d -> %s", ch, action.value)
        return action

    def run(self) -> str:
        """Run until quit; returns ``"key"`` or ``"signal"``."""
        self._logger.info("Generator started with payload %r", self.state.text)
        needs_redraw = True
        try:
            while True:
                if self.flag.is_set():
                    self._logger.info("Exit requested via signal")
                    return "signal"
                if needs_redraw:
                    self.redraw()
                    needs_redraw = False

                code = self._window.wait_key(self._poll_interval_ms)
                if code < 0:
                    continue

                action = self.handle_key(code)
                if action is KeyAction.QUIT:
                    self._logger.info("Exit requested via key")
                    return "key"
                if action is KeyAction.SAVE:
                    self.save()
                elif action is KeyAction.REDRAW:
                    needs_redraw = True
        finally:
            self._window.close()


__all__ = ["GeneratorApp", "GeneratorWindow", "OpenCVWindow", "DEFAULT_WINDOW_TITLE", "DEFAULT_POLL_INTERVAL_MS"]
