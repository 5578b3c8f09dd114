"""Helpers for rendering consistent text and shape overlays on BGR frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

Color = Tuple[int, int, int]
Point = Tuple[int, int]

GREEN: Color = (0, 255, 0)
BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)

STATS_FORMAT = "avg {avg_ms:.2f} ms  fps {avg_fps:.1f}  QR {detected:d}"


@dataclass(frozen=True, slots=True)
class TextStyle:
    font_scale: float = 0.6
    color: Color = GREEN
    thickness: int = 2
    outline: Optional[Color] = None
    outline_thickness: int = 2
    line_type: int = cv2.LINE_AA


STATS_STYLE = TextStyle(font_scale=0.8, color=GREEN, thickness=2, line_type=cv2.LINE_8)
LABEL_STYLE = TextStyle(font_scale=0.6, color=GREEN, thickness=2)
STATS_ORIGIN: Point = (10, 30)


def build_stats_text(avg_ms: float, avg_fps: float, detected: int) -> str:
    """Compose the fixed-format statistics line."""
    return STATS_FORMAT.format(avg_ms=avg_ms, avg_fps=avg_fps, detected=detected)


def draw_text(frame: np.ndarray, text: str, origin: Point, style: TextStyle = LABEL_STYLE) -> None:
    """Render ``text`` at ``origin``, optionally over a thicker outline pass."""
    if style.outline is not None:
        cv2.putText(
            frame,
            text,
            origin,
            cv2.FONT_HERSHEY_SIMPLEX,
            style.font_scale,
            style.outline,
            style.outline_thickness,
            style.line_type,
        )
    cv2.putText(
        frame,
        text,
        origin,
        cv2.FONT_HERSHEY_SIMPLEX,
        style.font_scale,
        style.color,
        style.thickness,
        style.line_type,
    )


def draw_polygon(frame: np.ndarray, points: Sequence[Point], color: Color = GREEN, thickness: int = 3) -> None:
    """Draw a closed polygon through ``points``."""
    if not points:
        return
    pts = np.asarray(points, dtype=np.int32).reshape((-1, 1, 2))
    cv2.polylines(frame, [pts], True, color, thickness, cv2.LINE_AA)


def render_stats_overlay(frame: np.ndarray, text: str, origin: Point = STATS_ORIGIN) -> None:
    draw_text(frame, text, origin, STATS_STYLE)


__all__ = [
    "Color",
    "Point",
    "GREEN",
    "BLACK",
    "WHITE",
    "TextStyle",
    "STATS_STYLE",
    "LABEL_STYLE",
    "STATS_ORIGIN",
    "build_stats_text",
    "draw_text",
    "draw_polygon",
    "render_stats_overlay",
]
