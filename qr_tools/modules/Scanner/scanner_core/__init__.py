"""Scanner core: capture source, detector, display and the frame loop."""

from .annotate import Annotation, annotate_detection, polygon_centroid
from .capture import (
    CameraProbe,
    CameraSource,
    CaptureSource,
    format_probe_report,
    open_camera,
    open_first_available,
    probe_cameras,
)
from .detector import DetectionResult, Detector, OpenCVQRDetector
from .display import Display, WindowDisplay
from .frame_loop import FrameLoop, FrameReport, LoopState, LoopSummary

__all__ = [
    "Annotation",
    "annotate_detection",
    "polygon_centroid",
    "CameraProbe",
    "CameraSource",
    "CaptureSource",
    "format_probe_report",
    "open_camera",
    "open_first_available",
    "probe_cameras",
    "DetectionResult",
    "Detector",
    "OpenCVQRDetector",
    "Display",
    "WindowDisplay",
    "FrameLoop",
    "FrameReport",
    "LoopState",
    "LoopSummary",
]
