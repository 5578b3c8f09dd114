"""Building blocks shared by the scanner and the generator."""

from .config_loader import ConfigLoader
from .exit_control import (
    EXIT_KEYS,
    NO_KEY,
    ExitFlag,
    ExitMonitor,
    install_exit_signal_handlers,
    is_exit_key,
)
from .terminal import TerminalSession
from .utils import FrameStats

__all__ = [
    "ConfigLoader",
    "EXIT_KEYS",
    "NO_KEY",
    "ExitFlag",
    "ExitMonitor",
    "install_exit_signal_handlers",
    "is_exit_key",
    "TerminalSession",
    "FrameStats",
]
