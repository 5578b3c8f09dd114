"""Generator core: state and key handling, encoder, renderer and the app loop."""

from .app import GeneratorApp, GeneratorWindow, OpenCVWindow
from .encoder import EncodeParams, Encoder, ModuleGrid, QRCodeEncoder
from .render import compose_canvas, compose_saved_canvas, render_qr, save_qr
from .state import GeneratorState, KeyAction, apply_key, normalize_key, random_text

__all__ = [
    "GeneratorApp",
    "GeneratorWindow",
    "OpenCVWindow",
    "EncodeParams",
    "Encoder",
    "ModuleGrid",
    "QRCodeEncoder",
    "compose_canvas",
    "compose_saved_canvas",
    "render_qr",
    "save_qr",
    "GeneratorState",
    "KeyAction",
    "apply_key",
    "normalize_key",
    "random_text",
]
