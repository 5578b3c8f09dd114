"""Unit tests for camera capture with a mocked cv2.VideoCapture."""

from unittest.mock import MagicMock, call, patch

import cv2
import numpy as np
import pytest

from qr_tools.core.errors import CameraOpenError
from qr_tools.modules.Scanner.scanner_core.capture import (
    CameraProbe,
    CameraSource,
    format_probe_report,
    open_camera,
    open_first_available,
    probe_cameras,
)

VIDEO_CAPTURE = "qr_tools.modules.Scanner.scanner_core.capture.cv2.VideoCapture"


def make_capture(opened=True, frames=(), width=640, height=480):
    cap = MagicMock()
    cap.isOpened.return_value = opened
    reads = [(True, frame) for frame in frames] + [(False, None)]
    cap.read.side_effect = reads
    sizes = {cv2.CAP_PROP_FRAME_WIDTH: width, cv2.CAP_PROP_FRAME_HEIGHT: height}
    cap.get.side_effect = lambda prop: sizes.get(prop, 0)
    return cap


class TestCameraSource:

    def test_open_requests_frame_size(self):
        cap = make_capture()
        with patch(VIDEO_CAPTURE, return_value=cap) as ctor:
            source = CameraSource(1, 640, 480).open()

        ctor.assert_called_once_with(1)
        cap.set.assert_has_calls([
            call(cv2.CAP_PROP_FRAME_WIDTH, 640),
            call(cv2.CAP_PROP_FRAME_HEIGHT, 480),
        ])
        assert source.is_open

    def test_open_failure_raises(self):
        cap = make_capture(opened=False)
        with patch(VIDEO_CAPTURE, return_value=cap):
            with pytest.raises(CameraOpenError) as excinfo:
                CameraSource(0).open()

        assert excinfo.value.index == 0
        cap.release.assert_called_once()

    def test_read_until_stream_ends(self):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        cap = make_capture(frames=[frame, frame])
        with patch(VIDEO_CAPTURE, return_value=cap):
            source = CameraSource(0).open()

        assert source.read() is frame
        assert source.read() is frame
        assert source.read() is None
        assert source.frames_read == 2

    def test_empty_frame_ends_stream(self):
        cap = make_capture(frames=[np.zeros((0, 0, 3), dtype=np.uint8)])
        with patch(VIDEO_CAPTURE, return_value=cap):
            source = CameraSource(0).open()

        assert source.read() is None

    def test_release_idempotent(self):
        cap = make_capture()
        with patch(VIDEO_CAPTURE, return_value=cap):
            source = CameraSource(0).open()

        source.release()
        source.release()

        cap.release.assert_called_once()
        assert source.read() is None


class TestOpenHelpers:

    def test_open_camera_returns_none_when_unavailable(self):
        with patch(VIDEO_CAPTURE, return_value=make_capture(opened=False)):
            assert open_camera(1) is None

    def test_open_first_available_falls_back(self):
        caps = {0: make_capture(opened=False), 1: make_capture()}
        with patch(VIDEO_CAPTURE, side_effect=lambda index: caps[index]):
            source = open_first_available((0, 1))

        assert source is not None
        assert source.index == 1

    def test_open_first_available_none(self):
        with patch(VIDEO_CAPTURE, side_effect=lambda index: make_capture(opened=False)):
            assert open_first_available((0, 1)) is None


class TestProbe:

    def test_probe_reports_and_releases(self):
        caps = {0: make_capture(width=1280, height=720), 1: make_capture(opened=False)}
        with patch(VIDEO_CAPTURE, side_effect=lambda index: caps[index]):
            probes = probe_cameras((0, 1))

        assert probes == [
            CameraProbe(index=0, opened=True, width=1280, height=720),
            CameraProbe(index=1, opened=False),
        ]
        caps[0].release.assert_called_once()
        caps[1].release.assert_called_once()

    def test_report_format(self):
        report = format_probe_report([
            CameraProbe(index=0, opened=True, width=640, height=480),
            CameraProbe(index=1, opened=False),
        ])

        assert report.splitlines() == [
            "Probing V4L2 cameras...",
            " - /dev/video0 (opened) default 640x480",
        ]

    def test_report_without_size(self):
        report = format_probe_report([CameraProbe(index=1, opened=True)])

        assert report.splitlines()[1] == " - /dev/video1 (opened)"

    def test_report_nothing_opened(self):
        assert format_probe_report([]) == "Probing V4L2 cameras..."


@pytest.mark.hardware
def test_real_camera_produces_frames():
    source = open_first_available((0, 1))
    if source is None:
        pytest.skip("no camera at /dev/video0 or /dev/video1")
    try:
        frame = source.read()
    finally:
        source.release()

    assert frame is not None
    assert frame.ndim == 3
