"""Scoped raw/non-blocking mode for the controlling terminal."""

from __future__ import annotations

import contextlib
import os
import sys
from typing import Optional

try:
    import fcntl
    import termios
except ImportError:  # pragma: no cover - non-POSIX platforms have no terminal keys
    fcntl = None
    termios = None

from qr_tools.core.logging_utils import LoggerLike, ensure_structured_logger


class TerminalSession:
    """Owns the terminal mode while the frame loop is running.

    On acquire the terminal stops echoing, stops line buffering and reads
    become non-blocking, so single key presses can be polled once per frame.
    The saved attributes are restored on release. When ``fd`` is not a TTY
    (pipes, CI) the session stays inactive and :meth:`read_key` returns None.
    """

    def __init__(self, fd: Optional[int] = None, *, logger: LoggerLike = None) -> None:
        self._fd = fd
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._saved_attrs = None
        self._saved_flags: Optional[int] = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def fd(self) -> Optional[int]:
        return self._fd

    def acquire(self) -> "TerminalSession":
        if self._active:
            return self
        if termios is None or fcntl is None:
            self._logger.debug("termios unavailable - terminal keys disabled")
            return self

        fd = self._resolve_fd()
        if fd is None or not os.isatty(fd):
            self._logger.debug("stdin is not a TTY - terminal keys disabled")
            return self

        try:
            saved_attrs = termios.tcgetattr(fd)
            raw = termios.tcgetattr(fd)
            raw[3] &= ~(termios.ICANON | termios.ECHO)
            termios.tcsetattr(fd, termios.TCSANOW, raw)
        except termios.error as exc:
            self._logger.warning("Unable to switch terminal to raw mode: %s", exc)
            return self

        try:
            flags = fcntl.fcntl(fd, fcntl.F_GETFL)
            fcntl.fcntl(fd, fcntl.F_SETFL, flags | os.O_NONBLOCK)
        except OSError as exc:
            termios.tcsetattr(fd, termios.TCSANOW, saved_attrs)
            self._logger.warning("Unable to make terminal non-blocking: %s", exc)
            return self

        self._fd = fd
        self._saved_attrs = saved_attrs
        self._saved_flags = flags
        self._active = True
        self._logger.debug("Terminal raw mode enabled on fd %d", fd)
        return self

    def release(self) -> None:
        if not self._active:
            return
        fd = self._fd
        try:
            termios.tcsetattr(fd, termios.TCSANOW, self._saved_attrs)
        except termios.error as exc:
            self._logger.warning("Failed to restore terminal attributes: %s", exc)
        try:
            fcntl.fcntl(fd, fcntl.F_SETFL, self._saved_flags)
        except OSError as exc:
            self._logger.warning("Failed to restore terminal blocking mode: %s", exc)
        self._active = False
        self._saved_attrs = None
        self._saved_flags = None
        self._logger.debug("Terminal mode restored on fd %d", fd)

    def read_key(self) -> Optional[int]:
        """Return one pending byte from the terminal, or None."""
        if not self._active:
            return None
        try:
            data = os.read(self._fd, 1)
        except (BlockingIOError, InterruptedError):
            return None
        except OSError as exc:
            self._logger.debug("Terminal read failed: %s", exc)
            return None
        if not data:
            return None
        return data[0]

    def _resolve_fd(self) -> Optional[int]:
        if self._fd is not None:
            return self._fd
        with contextlib.suppress(AttributeError, ValueError, OSError):
            return sys.stdin.fileno()
        return None

    def __enter__(self) -> "TerminalSession":
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


__all__ = ["TerminalSession"]
