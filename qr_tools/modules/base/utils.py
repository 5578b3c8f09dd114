import time
from typing import Callable, Optional

# Smoothing constants for the scanner overlay. They are tuning knobs, not
# derived values.
LATENCY_HISTORY_WEIGHT = 0.98
LATENCY_SAMPLE_WEIGHT = 0.02
FPS_HISTORY_WEIGHT = 0.7
FPS_SAMPLE_WEIGHT = 0.3
FPS_WINDOW_MS = 1000.0


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class FrameStats:
    """Exponentially smoothed frame latency and frames-per-second."""

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or monotonic_ms
        self.avg_ms = 0.0
        self.avg_fps = 0.0
        self.window_start_ms = self._clock()
        self.frames_in_window = 0.0

    def record_frame(self, duration_ms: float) -> float:
        self.avg_ms = LATENCY_HISTORY_WEIGHT * self.avg_ms + LATENCY_SAMPLE_WEIGHT * duration_ms
        return self.avg_ms

    def tick(self) -> float:
        now = self._clock()
        if now - self.window_start_ms > FPS_WINDOW_MS:
            self.window_start_ms = now
            self.avg_fps = FPS_HISTORY_WEIGHT * self.avg_fps + FPS_SAMPLE_WEIGHT * self.frames_in_window
            self.frames_in_window = 0.0
        self.frames_in_window += 1.0
        return self.avg_fps
