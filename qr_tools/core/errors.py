"""Exception hierarchy for the QR tools."""

from typing import Optional


class QRToolsError(Exception):
    """Base class for errors raised by the QR tools."""


class CameraOpenError(QRToolsError):
    """Camera index could not be opened."""

    def __init__(self, index: int, message: Optional[str] = None) -> None:
        self.index = index
        super().__init__(message or f"Unable to open camera index {index}")


class EncodeError(QRToolsError):
    """Payload could not be encoded with the requested parameters."""
