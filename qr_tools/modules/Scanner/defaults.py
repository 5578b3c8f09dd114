"""
Shared default values for the Scanner module.
"""

DEFAULT_FRAME_WIDTH = 640
DEFAULT_FRAME_HEIGHT = 480
DEFAULT_WINDOW_TITLE = "QR Detect"
DEFAULT_PROBE_INDICES = (0, 1)
DEFAULT_WAIT_KEY_MS = 1
SUPPORTED_CAMERA_INDICES = (0, 1)

EXIT_OK = 0
EXIT_NO_CAMERA = 1
EXIT_BAD_ARGUMENT = 2
EXIT_REQUESTED_CAMERA_FAILED = 3
