"""Per-frame scanner pipeline: capture, detect, annotate, measure, present, check exit."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from qr_tools.core.logging_utils import LoggerLike, ensure_structured_logger
from qr_tools.modules.base.exit_control import ExitMonitor
from qr_tools.modules.base.overlay_renderer import build_stats_text, render_stats_overlay
from qr_tools.modules.base.utils import FrameStats, monotonic_ms

from .annotate import Annotation, annotate_detection
from .capture import CaptureSource
from .detector import Detector
from .display import Display

STOP_STREAM_END = "stream_end"


class LoopState(Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    DETECTING = "detecting"
    ANNOTATING = "annotating"
    PRESENTING = "presenting"
    CHECK_EXIT = "check_exit"
    TERMINATED = "terminated"


@dataclass(slots=True)
class FrameReport:
    """What one iteration produced, handed to the optional ``on_frame`` hook."""

    index: int
    annotation: Annotation
    elapsed_ms: float
    avg_ms: float
    avg_fps: float
    stats_text: str
    key: int


@dataclass(slots=True)
class LoopSummary:
    frames: int
    detections: int
    reason: str
    last_text: Optional[str] = None


class FrameLoop:
    """Single-threaded frame loop; every stage finishes before the next starts."""

    def __init__(
        self,
        source: CaptureSource,
        detector: Detector,
        display: Display,
        monitor: ExitMonitor,
        *,
        stats: Optional[FrameStats] = None,
        clock: Optional[Callable[[], float]] = None,
        on_frame: Optional[Callable[[FrameReport], None]] = None,
        logger: LoggerLike = None,
    ) -> None:
        self._source = source
        self._detector = detector
        self._display = display
        self._monitor = monitor
        self._clock = clock or monotonic_ms
        self.stats = stats if stats is not None else FrameStats()
        self._on_frame = on_frame
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self.state = LoopState.IDLE
        self.frames = 0
        self.detections = 0
        self.last_text: Optional[str] = None
        self.reason: Optional[str] = None

    def run(self) -> LoopSummary:
        self._logger.info("Frame loop started")
        try:
            while self._step():
                pass
        finally:
            self._terminate()
        summary = LoopSummary(
            frames=self.frames,
            detections=self.detections,
            reason=self.reason or STOP_STREAM_END,
            last_text=self.last_text,
        )
        self._logger.info(
            "Frame loop finished: %d frames, %d with a code, stop reason %s",
            summary.frames,
            summary.detections,
            summary.reason,
        )
        return summary

    def _step(self) -> bool:
        self.state = LoopState.CAPTURING
        start = self._clock()
        frame = self._source.read()
        if frame is None:
            self.reason = STOP_STREAM_END
            return False

        self.state = LoopState.DETECTING
        result = self._detector.detect(frame)

        self.state = LoopState.ANNOTATING
        annotation = annotate_detection(frame, result)
        if annotation.detected_count:
            self.detections += 1
            if annotation.text != self.last_text:
                self._logger.info("Decoded QR payload: %s", annotation.text)
            self.last_text = annotation.text

        elapsed = max(0.0, self._clock() - start)
        avg_ms = self.stats.record_frame(elapsed)
        avg_fps = self.stats.tick()
        stats_text = build_stats_text(avg_ms, avg_fps, annotation.detected_count)
        render_stats_overlay(frame, stats_text)

        self.state = LoopState.PRESENTING
        key = self._display.show(frame)
        self.frames += 1
        self._logger.debug("Frame %d: %.2f ms, key %d", self.frames, elapsed, key)

        if self._on_frame is not None:
            self._on_frame(
                FrameReport(
                    index=self.frames,
                    annotation=annotation,
                    elapsed_ms=elapsed,
                    avg_ms=avg_ms,
                    avg_fps=avg_fps,
                    stats_text=stats_text,
                    key=key,
                )
            )

        self.state = LoopState.CHECK_EXIT
        if self._monitor.should_exit(key):
            self.reason = self._monitor.last_reason
            return False
        return True

    def _terminate(self) -> None:
        self.state = LoopState.TERMINATED
        try:
            self._source.release()
        finally:
            self._display.close()


__all__ = ["FrameLoop", "FrameReport", "LoopState", "LoopSummary", "STOP_STREAM_END"]
