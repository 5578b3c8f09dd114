"""Camera capture source backed by OpenCV."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol

import cv2
import numpy as np

from qr_tools.core.errors import CameraOpenError
from qr_tools.core.logging_utils import LoggerLike, ensure_structured_logger
from qr_tools.modules.Scanner.defaults import (
    DEFAULT_FRAME_HEIGHT,
    DEFAULT_FRAME_WIDTH,
    DEFAULT_PROBE_INDICES,
)


class CaptureSource(Protocol):
    """Anything that yields frames on demand.

    ``read()`` returns None once the stream has ended or failed.
    """

    def read(self) -> Optional[np.ndarray]:
        ...

    def release(self) -> None:
        ...


@dataclass(slots=True)
class CameraProbe:
    index: int
    opened: bool
    width: int = 0
    height: int = 0

    @property
    def dev_path(self) -> str:
        return f"/dev/video{self.index}"


class CameraSource:
    """Frame producer wrapping ``cv2.VideoCapture`` for one camera index."""

    def __init__(
        self,
        index: int,
        width: int = DEFAULT_FRAME_WIDTH,
        height: int = DEFAULT_FRAME_HEIGHT,
        *,
        logger: LoggerLike = None,
    ) -> None:
        self.index = index
        self.width = width
        self.height = height
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._cap: Optional[cv2.VideoCapture] = None
        self.frames_read = 0

    def open(self) -> "CameraSource":
        self.release()
        cap = cv2.VideoCapture(self.index)
        if not cap.isOpened():
            cap.release()
            raise CameraOpenError(self.index)
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        if not cap.isOpened():
            cap.release()
            raise CameraOpenError(self.index, f"Camera index {self.index} closed after configuration")
        self._cap = cap
        self._logger.info(
            "Opened camera %d (requested %dx%d, actual %dx%d)",
            self.index,
            self.width,
            self.height,
            int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )
        return self

    @property
    def is_open(self) -> bool:
        return bool(self._cap is not None and self._cap.isOpened())

    def read(self) -> Optional[np.ndarray]:
        if self._cap is None:
            return None
        ok, frame = self._cap.read()
        if not ok or frame is None or frame.size == 0:
            self._logger.info("Camera %d stopped producing frames after %d frames", self.index, self.frames_read)
            return None
        self.frames_read += 1
        return frame

    def release(self) -> None:
        if self._cap is None:
            return
        self._cap.release()
        self._cap = None
        self._logger.debug("Released camera %d", self.index)


def open_camera(
    index: int,
    width: int = DEFAULT_FRAME_WIDTH,
    height: int = DEFAULT_FRAME_HEIGHT,
    *,
    logger: LoggerLike = None,
) -> Optional[CameraSource]:
    """Open ``index`` or return None when the device is unavailable."""
    log = ensure_structured_logger(logger, fallback_name=__name__)
    try:
        return CameraSource(index, width, height, logger=log).open()
    except CameraOpenError as exc:
        log.info("%s", exc)
        return None


def open_first_available(
    indices: Iterable[int] = DEFAULT_PROBE_INDICES,
    width: int = DEFAULT_FRAME_WIDTH,
    height: int = DEFAULT_FRAME_HEIGHT,
    *,
    logger: LoggerLike = None,
) -> Optional[CameraSource]:
    """Try each index in order and return the first camera that opens."""
    for index in indices:
        source = open_camera(index, width, height, logger=logger)
        if source is not None:
            return source
    return None


def probe_cameras(indices: Iterable[int] = DEFAULT_PROBE_INDICES, *, logger: LoggerLike = None) -> List[CameraProbe]:
    log = ensure_structured_logger(logger, fallback_name=__name__)
    probes: list[CameraProbe] = []
    for index in indices:
        cap = cv2.VideoCapture(index)
        try:
            if not cap.isOpened():
                log.debug("Camera %d did not open", index)
                probes.append(CameraProbe(index=index, opened=False))
                continue
            probes.append(
                CameraProbe(
                    index=index,
                    opened=True,
                    width=int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
                    height=int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
                )
            )
        finally:
            cap.release()
    return probes


def format_probe_report(probes: Iterable[CameraProbe]) -> str:
    """Human readable ``--list`` output; unopened devices are omitted."""
    lines = ["Probing V4L2 cameras..."]
    for probe in probes:
        if not probe.opened:
            continue
        line = f" - {probe.dev_path} (opened)"
        if probe.width > 0 and probe.height > 0:
            line += f" default {probe.width}x{probe.height}"
        lines.append(line)
    return "\n".join(lines)


__all__ = [
    "CaptureSource",
    "CameraProbe",
    "CameraSource",
    "open_camera",
    "open_first_available",
    "probe_cameras",
    "format_probe_report",
]
