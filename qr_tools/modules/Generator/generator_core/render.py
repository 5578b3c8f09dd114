"""Turning a generator state into images: the bare symbol, the window canvas
and the save confirmation."""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from qr_tools.core.errors import EncodeError
from qr_tools.core.logging_utils import LoggerLike, ensure_structured_logger
from qr_tools.modules.base.overlay_renderer import BLACK, GREEN, WHITE, TextStyle, draw_text

from .encoder import EncodeParams, Encoder, ModuleGrid
from .state import GeneratorState

PLACEHOLDER_SIZE = 240
EMPTY_PAYLOAD_SHADE = 255
ENCODE_FAILED_SHADE = 200

CANVAS_MARGIN_TOP = 10
CANVAS_EXTRA_ROWS = 120
CANVAS_MIN_WIDTH = 640
SAVED_EXTRA_ROWS = 60
SAVED_MIN_WIDTH = 480

INFO_ORIGIN_X = 10
INFO_FIRST_LINE_Y = 20
INFO_LINE_HEIGHT = 22
INFO_SECTION_GAP = 8

TITLE_COLOR = WHITE
HELP_COLOR = (200, 200, 200)
SAVED_COLOR = (0, 128, 255)

HELP_LINES = (
    "Keys:",
    "  Type to append, Backspace to delete",
    "  v/V version, e/E error correction",
    "  +/- or =/_ scale, [/ ] or {/} quiet zone",
    "  r random, c clear, s save, h help, q/ESC quit",
)


def modules_to_image(grid: ModuleGrid, quiet_zone: int, scale: int) -> np.ndarray:
    """Dark modules -> 0, light -> 255, padded and upscaled (nearest neighbour)."""
    image = np.where(grid.modules, 0, 255).astype(np.uint8)
    qz = max(0, quiet_zone)
    if qz:
        image = np.pad(image, qz, mode="constant", constant_values=255)
    sc = max(1, scale)
    if sc == 1:
        return image
    height, width = image.shape
    return cv2.resize(image, (width * sc, height * sc), interpolation=cv2.INTER_NEAREST)


def render_qr(state: GeneratorState, encoder: Encoder, *, logger: LoggerLike = None) -> np.ndarray:
    """Grayscale render of the current payload.

    An empty payload gives a white placeholder; a payload that cannot be
    encoded with the chosen version/ECL gives a gray one.
    """
    if not state.text:
        return np.full((PLACEHOLDER_SIZE, PLACEHOLDER_SIZE), EMPTY_PAYLOAD_SHADE, dtype=np.uint8)
    try:
        grid = encoder.encode(state.text, EncodeParams(version=state.version, ecl_index=state.ecl_index))
    except EncodeError as exc:
        ensure_structured_logger(logger, fallback_name=__name__).info("Encoding failed: %s", exc)
        return np.full((PLACEHOLDER_SIZE, PLACEHOLDER_SIZE), ENCODE_FAILED_SHADE, dtype=np.uint8)
    return modules_to_image(grid, state.quiet_zone, state.scale)


def place_on_canvas(qr: np.ndarray, extra_rows: int, min_width: int) -> np.ndarray:
    height, width = qr.shape[:2]
    canvas = np.full((height + extra_rows, max(width, min_width), 3), 255, dtype=np.uint8)
    x = (canvas.shape[1] - width) // 2
    canvas[CANVAS_MARGIN_TOP:CANVAS_MARGIN_TOP + height, x:x + width] = cv2.cvtColor(qr, cv2.COLOR_GRAY2BGR)
    return canvas


def info_lines(state: GeneratorState) -> list[tuple[str, tuple[int, int, int]]]:
    target = str(state.output) if state.output is not None else "auto name"
    lines = [
        ("QR Code Generator (GUI)", TITLE_COLOR),
        ("Text: " + (state.text if state.text else "<empty>"), GREEN),
        (f"Version: {state.version} (v/V)  ECL: {state.ecl} (e/E)", GREEN),
        (f"Scale: {state.scale} (+/- or =/_)  QuietZone: {state.quiet_zone} ([/ ] or {{/}})", GREEN),
        (f"Save: s -> {target}", GREEN),
    ]
    return lines


def overlay_info(canvas: np.ndarray, state: GeneratorState) -> None:
    """Outlined parameter and key help text, only while help is toggled on."""
    if not state.show_help:
        return
    y = INFO_FIRST_LINE_Y

    def put(line: str, color) -> None:
        nonlocal y
        draw_text(
            canvas,
            line,
            (INFO_ORIGIN_X, y),
            TextStyle(font_scale=0.6, color=color, thickness=1, outline=BLACK, outline_thickness=2),
        )
        y += INFO_LINE_HEIGHT

    for line, color in info_lines(state):
        put(line, color)
    y += INFO_SECTION_GAP
    for line in HELP_LINES:
        put(line, HELP_COLOR)


def compose_canvas(qr: np.ndarray, state: GeneratorState) -> np.ndarray:
    canvas = place_on_canvas(qr, CANVAS_EXTRA_ROWS, CANVAS_MIN_WIDTH)
    overlay_info(canvas, state)
    return canvas


def compose_saved_canvas(qr: np.ndarray, path: Path, *, ok: bool = True) -> np.ndarray:
    canvas = place_on_canvas(qr, SAVED_EXTRA_ROWS, SAVED_MIN_WIDTH)
    message = f"Saved: {path}" if ok else f"Save failed: {path}"
    draw_text(
        canvas,
        message,
        (INFO_ORIGIN_X, canvas.shape[0] - 15),
        TextStyle(font_scale=0.6, color=SAVED_COLOR, thickness=2, outline=BLACK, outline_thickness=2),
    )
    return canvas


def save_qr(qr: np.ndarray, path: Path, *, logger: LoggerLike = None) -> bool:
    log = ensure_structured_logger(logger, fallback_name=__name__)
    try:
        ok = bool(cv2.imwrite(str(path), qr))
    except cv2.error as exc:
        log.error("Failed to write %s: %s", path, exc)
        return False
    if ok:
        log.info("Saved QR image to %s (%dx%d)", path, qr.shape[1], qr.shape[0])
    else:
        log.error("Failed to write %s", path)
    return ok


__all__ = [
    "modules_to_image",
    "render_qr",
    "compose_canvas",
    "compose_saved_canvas",
    "overlay_info",
    "info_lines",
    "save_qr",
]
