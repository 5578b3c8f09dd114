"""Generator state and keyboard handling."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

DEFAULT_TEXT = "Hello, QR!"

ECL_NAMES = ("L", "M", "Q", "H")

VERSION_MIN, VERSION_MAX = 0, 40      # 0 = pick the smallest version that fits
ECL_MIN, ECL_MAX = 0, len(ECL_NAMES) - 1
SCALE_MIN, SCALE_MAX = 1, 64          # pixels per module
QUIET_ZONE_MIN, QUIET_ZONE_MAX = 0, 16  # modules

# Random payload length range.
RANDOM_TEXT_MIN_LEN = 12
RANDOM_TEXT_MAX_LEN = 24
RANDOM_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase

KEY_BACKSPACE = 8
KEY_ESC = 27
KEY_DELETE = 127

# X11 keysyms reported by cv2.waitKeyEx on GTK/Qt builds.
_KEYSYM_RANGE = range(0xFF00, 0x10000)
_KEYSYM_ALIASES = {
    0xFF08: KEY_BACKSPACE,  # BackSpace
    0xFF1B: KEY_ESC,        # Escape
    0xFFFF: KEY_DELETE,     # Delete
    0xFF9F: KEY_DELETE,     # KP_Delete
}


class KeyAction(Enum):
    NONE = "none"
    REDRAW = "redraw"
    SAVE = "save"
    QUIT = "quit"


def clamp(value: int, lo: int, hi: int) -> int:
    return lo if value < lo else hi if value > hi else value


def ecl_name(index: int) -> str:
    return ECL_NAMES[clamp(index, ECL_MIN, ECL_MAX)]


@dataclass(slots=True)
class GeneratorState:
    text: str = DEFAULT_TEXT
    version: int = 0
    ecl_index: int = 1
    scale: int = 15
    quiet_zone: int = 7
    show_help: bool = False
    output: Optional[Path] = None

    @property
    def ecl(self) -> str:
        return ecl_name(self.ecl_index)

    def auto_filename(self) -> str:
        return f"qrcode_v{self.version}_ecl{self.ecl}_sc{self.scale}_qz{self.quiet_zone}.png"

    def save_path(self) -> Path:
        return self.output if self.output is not None else Path(self.auto_filename())


def normalize_key(code: int) -> int:
    """Map a ``cv2.waitKeyEx`` code to the character the key handler expects.

    Navigation and function keysyms are dropped (-1) so they cannot alias
    to ASCII commands; everything else keeps its low byte, which strips
    modifier bits some backends add to shifted keys.
    """
    if code < 0:
        return -1
    keysym = code & 0xFFFF
    if keysym in _KEYSYM_RANGE:
        return _KEYSYM_ALIASES.get(keysym, -1)
    return code & 0xFF


def random_text(rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    length = rng.randint(RANDOM_TEXT_MIN_LEN, RANDOM_TEXT_MAX_LEN)
    return "".join(rng.choice(RANDOM_ALPHABET) for _ in range(length))


def apply_key(state: GeneratorState, ch: int, rng: Optional[random.Random] = None) -> KeyAction:
    """Apply one normalized key press to ``state``; the first matching binding wins."""
    if ch < 0:
        return KeyAction.NONE

    if ch in (KEY_ESC, ord("q"), ord("Q")):
        return KeyAction.QUIT

    if ch in (ord("h"), ord("H")):
        state.show_help = not state.show_help
        return KeyAction.REDRAW
    if ch in (ord("r"), ord("R")):
        state.text = random_text(rng)
        return KeyAction.REDRAW
    if ch in (ord("c"), ord("C")):
        state.text = ""
        return KeyAction.REDRAW

    if ch in (ord("+"), ord("=")):
        state.scale = clamp(state.scale + 1, SCALE_MIN, SCALE_MAX)
        return KeyAction.REDRAW
    if ch in (ord("-"), ord("_")):
        state.scale = clamp(state.scale - 1, SCALE_MIN, SCALE_MAX)
        return KeyAction.REDRAW

    if ch in (ord("["), ord("{")):
        state.quiet_zone = clamp(state.quiet_zone - 1, QUIET_ZONE_MIN, QUIET_ZONE_MAX)
        return KeyAction.REDRAW
    if ch in (ord("]"), ord("}")):
        state.quiet_zone = clamp(state.quiet_zone + 1, QUIET_ZONE_MIN, QUIET_ZONE_MAX)
        return KeyAction.REDRAW

    if ch == ord("e"):
        state.ecl_index = clamp(state.ecl_index - 1, ECL_MIN, ECL_MAX)
        return KeyAction.REDRAW
    if ch == ord("E"):
        state.ecl_index = clamp(state.ecl_index + 1, ECL_MIN, ECL_MAX)
        return KeyAction.REDRAW
    if ch == ord("v"):
        state.version = clamp(state.version - 1, VERSION_MIN, VERSION_MAX)
        return KeyAction.REDRAW
    if ch == ord("V"):
        state.version = clamp(state.version + 1, VERSION_MIN, VERSION_MAX)
        return KeyAction.REDRAW

    if ch in (ord("s"), ord("S")):
        return KeyAction.SAVE

    if 32 <= ch <= 126:
        state.text += chr(ch)
        return KeyAction.REDRAW
    if ch in (KEY_BACKSPACE, KEY_DELETE):
        if not state.text:
            return KeyAction.NONE
        state.text = state.text[:-1]
        return KeyAction.REDRAW

    return KeyAction.NONE


__all__ = [
    "DEFAULT_TEXT",
    "ECL_NAMES",
    "GeneratorState",
    "KeyAction",
    "apply_key",
    "clamp",
    "ecl_name",
    "normalize_key",
    "random_text",
]
