"""Per-frame annotation of detection results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from qr_tools.modules.base.overlay_renderer import (
    GREEN,
    LABEL_STYLE,
    Point,
    draw_polygon,
    draw_text,
)

from .detector import DetectionResult

LABEL_OFFSET: Point = (-20, -10)
POLYGON_THICKNESS = 3


@dataclass(slots=True)
class Annotation:
    detected_count: int = 0
    centroid: Optional[Point] = None
    text: Optional[str] = None


def polygon_centroid(points: Sequence[Point]) -> Point:
    """Mean of the corner points, truncated toward zero like C integer division."""
    if not points:
        raise ValueError("centroid of an empty polygon is undefined")
    n = len(points)
    return _trunc_div(sum(int(x) for x, _ in points), n), _trunc_div(sum(int(y) for _, y in points), n)


def _trunc_div(total: int, n: int) -> int:
    quotient = abs(total) // n
    return -quotient if total < 0 else quotient


def annotate_detection(frame: np.ndarray, result: DetectionResult) -> Annotation:
    """Draw the boundary and label of a positive detection onto ``frame``."""
    if not result.is_positive:
        return Annotation()
    centroid = polygon_centroid(result.polygon)
    draw_polygon(frame, result.polygon, GREEN, POLYGON_THICKNESS)
    origin = (centroid[0] + LABEL_OFFSET[0], centroid[1] + LABEL_OFFSET[1])
    draw_text(frame, result.text, origin, LABEL_STYLE)
    return Annotation(detected_count=1, centroid=centroid, text=result.text)


__all__ = ["Annotation", "LABEL_OFFSET", "polygon_centroid", "annotate_detection"]
