"""Exit coordination shared by the scanner and the generator.

Three independent sources can ask a program to stop: a key pressed in the
OpenCV window, a key typed in the controlling terminal, and a termination
signal. Each source is a provider with ``poll_exit_intent()``;
:class:`ExitMonitor` merges them into a single decision per loop iteration.
"""

from __future__ import annotations

import contextlib
import signal
from typing import Iterable, Iterator, Optional, Protocol

from qr_tools.core.logging_utils import LoggerLike, ensure_structured_logger

from .terminal import TerminalSession

NO_KEY = -1

EXIT_KEYS = frozenset({
    27,                     # ESC
    ord("q"), ord("Q"),     # quit
    ord("x"), ord("X"),     # exit
    ord("c"), ord("C"),     # close
    3,                      # Ctrl+C
    4,                      # Ctrl+D
    17,                     # Ctrl+Q
    24,                     # Ctrl+X
})

EXIT_SIGNAL_NAMES = ("SIGINT", "SIGTERM", "SIGHUP")


def is_exit_key(code: Optional[int]) -> bool:
    """True for the ASCII exit keys.

    Extended key codes (> 255) are never masked to 8 bits: 0xFF51 (Left)
    would otherwise read as 'Q'.
    """
    if code is None or code < 0 or code > 255:
        return False
    return code in EXIT_KEYS


class ExitFlag:
    """Process-wide stop request written by the signal handler.

    A single writer (the handler) and a single reader (the loop) share it.
    Only plain attribute stores: the handler may be re-entered by a second
    signal, so nothing here may take a lock.
    """

    def __init__(self) -> None:
        self._set = False
        self.signum: Optional[int] = None

    def set(self, signum: Optional[int] = None) -> None:
        if signum is not None and self.signum is None:
            self.signum = signum
        self._set = True

    def is_set(self) -> bool:
        return self._set


def exit_signals() -> list[signal.Signals]:
    """Termination signals available on this platform."""
    return [getattr(signal, name) for name in EXIT_SIGNAL_NAMES if hasattr(signal, name)]


@contextlib.contextmanager
def install_exit_signal_handlers(
    flag: ExitFlag,
    signals: Optional[Iterable[int]] = None,
    *,
    logger: LoggerLike = None,
) -> Iterator[ExitFlag]:
    """Point termination signals at ``flag`` for the duration of the block."""

    log = ensure_structured_logger(logger, fallback_name=__name__)

    def handle_signal(signum, frame):
        flag.set(signum)

    previous = {}
    for sig in (signals if signals is not None else exit_signals()):
        try:
            previous[sig] = signal.signal(sig, handle_signal)
        except (OSError, ValueError) as exc:
            # ValueError: not the main thread; OSError: signal not supported
            log.debug("Could not install handler for signal %s: %s", sig, exc)

    try:
        yield flag
    finally:
        for sig, handler in previous.items():
            with contextlib.suppress(OSError, ValueError, TypeError):
                signal.signal(sig, handler if handler is not None else signal.SIG_DFL)


class ExitIntentProvider(Protocol):
    name: str

    def poll_exit_intent(self) -> bool:
        ...


class DisplayKeyProvider:
    """Key captured from the image window during the current iteration."""

    name = "display_key"

    def __init__(self) -> None:
        self._key: int = NO_KEY

    def set_key(self, key: Optional[int]) -> None:
        self._key = NO_KEY if key is None else key

    def poll_exit_intent(self) -> bool:
        key, self._key = self._key, NO_KEY
        return is_exit_key(key)


class TerminalKeyProvider:
    """One pending byte from the controlling terminal, read without blocking."""

    name = "terminal_key"

    def __init__(self, session: TerminalSession) -> None:
        self._session = session

    def poll_exit_intent(self) -> bool:
        return is_exit_key(self._session.read_key())


class SignalFlagProvider:
    name = "signal"

    def __init__(self, flag: ExitFlag) -> None:
        self._flag = flag

    def poll_exit_intent(self) -> bool:
        return self._flag.is_set()


class ExitMonitor:
    """Merges the display, terminal and signal sources into one decision."""

    def __init__(
        self,
        terminal: Optional[TerminalSession] = None,
        flag: Optional[ExitFlag] = None,
        *,
        logger: LoggerLike = None,
    ) -> None:
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._display = DisplayKeyProvider()
        self.flag = flag if flag is not None else ExitFlag()
        providers: list[ExitIntentProvider] = [self._display]
        if terminal is not None:
            providers.append(TerminalKeyProvider(terminal))
        providers.append(SignalFlagProvider(self.flag))
        self._providers = providers
        self.last_reason: Optional[str] = None

    @property
    def providers(self) -> tuple[ExitIntentProvider, ...]:
        return tuple(self._providers)

    def should_exit(self, display_key: Optional[int] = None) -> bool:
        self._display.set_key(display_key)
        for provider in self._providers:
            if provider.poll_exit_intent():
                if self.last_reason is None:
                    self._logger.info("Exit requested via %s", provider.name)
                self.last_reason = provider.name
                return True
        return False


__all__ = [
    "NO_KEY",
    "EXIT_KEYS",
    "is_exit_key",
    "ExitFlag",
    "exit_signals",
    "install_exit_signal_handlers",
    "ExitIntentProvider",
    "DisplayKeyProvider",
    "TerminalKeyProvider",
    "SignalFlagProvider",
    "ExitMonitor",
]
