"""Webcam QR scanner."""

from .config import ScannerConfig

__all__ = ["ScannerConfig"]
