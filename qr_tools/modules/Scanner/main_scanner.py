"""Scanner entry point: ``qr-scanner [--list] [0|1]``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from qr_tools.cli.common import (
    add_common_cli_arguments,
    install_exception_handlers,
    log_program_shutdown,
    log_program_startup,
    setup_cli_logging,
)
from qr_tools.core.logging_utils import get_module_logger
from qr_tools.modules.base.exit_control import ExitFlag, ExitMonitor, install_exit_signal_handlers
from qr_tools.modules.base.terminal import TerminalSession

from .config import ScannerConfig
from .defaults import (
    EXIT_BAD_ARGUMENT,
    EXIT_NO_CAMERA,
    EXIT_OK,
    EXIT_REQUESTED_CAMERA_FAILED,
    SUPPORTED_CAMERA_INDICES,
)
from .scanner_core.capture import (
    CaptureSource,
    format_probe_report,
    open_camera,
    open_first_available,
    probe_cameras,
)
from .scanner_core.detector import Detector, OpenCVQRDetector
from .scanner_core.display import Display, WindowDisplay
from .scanner_core.frame_loop import FrameLoop, LoopSummary

DISPLAY_NAME = "QR Scanner"
PROG = "qr-scanner"

logger = get_module_logger(__name__)


class CameraArgumentError(ValueError):
    """Camera argument is not one of the supported indices."""


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Scan QR codes from a webcam and overlay the decoded text.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        help="Probe camera indices 0 and 1, print what opened, and exit",
    )
    parser.add_argument(
        "camera",
        nargs="?",
        default=None,
        help="Camera index to open (0 or 1). Without it, 0 then 1 are tried.",
    )
    add_common_cli_arguments(parser)
    return parser.parse_args(list(argv) if argv is not None else None)


def parse_camera_index(value: Optional[str]) -> Optional[int]:
    """Validate the positional camera argument. Only indices 0 and 1 are accepted."""
    if value is None:
        return None
    if not (value.isascii() and value.isdigit()):
        raise CameraArgumentError(
            f"Only camera index {_supported_text()} is supported "
            f"(image, video and URL inputs are not accepted): {value!r}"
        )
    index = int(value)
    if index not in SUPPORTED_CAMERA_INDICES:
        raise CameraArgumentError(f"Invalid camera index {index}. Only {_supported_text()} is supported.")
    return index


def _supported_text() -> str:
    return " or ".join(str(i) for i in SUPPORTED_CAMERA_INDICES)


def no_camera_guidance(indices: Sequence[int]) -> str:
    tried = " and ".join(f"/dev/video{i}" for i in indices)
    return "\n".join(
        [
            f"Unable to open a camera (tried {tried}).",
            "Hints:",
            f"  1) Run: {PROG} --list  to see which devices open",
            f"  2) Pick one explicitly: {PROG} 0  or  {PROG} 1",
            "  3) File, image and URL inputs are not supported",
        ]
    )


def run_scanner(
    source: CaptureSource,
    config: ScannerConfig,
    *,
    detector: Optional[Detector] = None,
    display: Optional[Display] = None,
    terminal: Optional[TerminalSession] = None,
    flag: Optional[ExitFlag] = None,
) -> LoopSummary:
    """Run the frame loop with terminal keys and termination signals wired in."""
    detector = detector if detector is not None else OpenCVQRDetector()
    display = display if display is not None else WindowDisplay(config.window_title, config.wait_key_ms)
    terminal = terminal if terminal is not None else TerminalSession()
    flag = flag if flag is not None else ExitFlag()

    with terminal, install_exit_signal_handlers(flag):
        monitor = ExitMonitor(terminal, flag)
        loop = FrameLoop(source, detector, display, monitor)
        return loop.run()


def main(argv: Optional[Sequence[str]] = None, *, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = parse_args(argv)
    setup_cli_logging(args)
    install_exception_handlers(logger)

    if args.list:
        config = ScannerConfig.load(args.config)
        print(format_probe_report(probe_cameras(config.probe_indices)), file=stdout)
        return EXIT_OK

    try:
        args.camera_index = parse_camera_index(args.camera)
    except CameraArgumentError as exc:
        print(str(exc), file=stderr)
        return EXIT_BAD_ARGUMENT

    config = ScannerConfig.load(args.config, args)

    log_program_startup(
        logger,
        DISPLAY_NAME,
        camera=config.camera_index if config.camera_index is not None else "auto",
        frame_size=f"{config.frame_width}x{config.frame_height}",
    )

    if config.camera_index is not None:
        source = open_camera(config.camera_index, config.frame_width, config.frame_height)
        if source is None:
            print(
                f"Unable to open camera index {config.camera_index} (only {_supported_text()} is supported).",
                file=stderr,
            )
            return EXIT_REQUESTED_CAMERA_FAILED
    else:
        source = open_first_available(config.probe_indices, config.frame_width, config.frame_height)
        if source is None:
            print(no_camera_guidance(config.probe_indices), file=stderr)
            return EXIT_NO_CAMERA

    try:
        summary = run_scanner(source, config)
    finally:
        source.release()
    log_program_shutdown(logger, DISPLAY_NAME, frames=summary.frames, reason=summary.reason)
    return EXIT_OK


def run(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(main(argv))


if __name__ == "__main__":
    run()
