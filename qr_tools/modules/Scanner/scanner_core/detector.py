"""QR detection backed by ``cv2.QRCodeDetector``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

import cv2
import numpy as np

from qr_tools.core.logging_utils import LoggerLike, ensure_structured_logger

Point = Tuple[int, int]

MIN_POLYGON_POINTS = 4


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Outcome of one detector call; valid for the current frame only."""

    text: Optional[str] = None
    polygon: Tuple[Point, ...] = ()

    @property
    def is_positive(self) -> bool:
        return bool(self.text) and len(self.polygon) >= MIN_POLYGON_POINTS

    @classmethod
    def empty(cls) -> "DetectionResult":
        return cls()


class Detector(Protocol):
    def detect(self, image: np.ndarray) -> DetectionResult:
        ...


def polygon_from_points(points: Optional[np.ndarray]) -> Tuple[Point, ...]:
    """Flatten OpenCV's (1, N, 2) float corner array into integer tuples."""
    if points is None:
        return ()
    arr = np.asarray(points).reshape(-1, 2)
    return tuple((int(x), int(y)) for x, y in arr)


class OpenCVQRDetector:
    """Single-code detector/decoder.

    Uses ``detectAndDecodeCurved`` when the OpenCV build provides it, which
    copes with codes printed on curved surfaces.
    """

    def __init__(self, *, curved: bool = True, logger: LoggerLike = None) -> None:
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._detector = cv2.QRCodeDetector()
        self._decode = self._detector.detectAndDecode
        if curved and hasattr(self._detector, "detectAndDecodeCurved"):
            self._decode = self._detector.detectAndDecodeCurved
        elif curved:
            self._logger.info("detectAndDecodeCurved unavailable in this OpenCV build; using detectAndDecode")

    def detect(self, image: np.ndarray) -> DetectionResult:
        try:
            text, points, _ = self._decode(image)
        except cv2.error as exc:
            self._logger.debug("QR decoder failed on frame: %s", exc)
            return DetectionResult.empty()
        return DetectionResult(text=text or None, polygon=polygon_from_points(points))


__all__ = [
    "DetectionResult",
    "Detector",
    "OpenCVQRDetector",
    "polygon_from_points",
    "MIN_POLYGON_POINTS",
]
