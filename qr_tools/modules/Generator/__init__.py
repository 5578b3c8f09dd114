"""Interactive QR generator."""

from .config import GeneratorConfig

__all__ = ["GeneratorConfig"]
