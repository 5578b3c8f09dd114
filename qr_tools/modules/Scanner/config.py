"""Typed configuration for the Scanner module."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from qr_tools.cli.common import get_config_int, get_config_str
from qr_tools.modules.base.config_loader import ConfigLoader

from .defaults import (
    DEFAULT_FRAME_HEIGHT,
    DEFAULT_FRAME_WIDTH,
    DEFAULT_PROBE_INDICES,
    DEFAULT_WAIT_KEY_MS,
    DEFAULT_WINDOW_TITLE,
)


@dataclass(slots=True)
class ScannerConfig:
    """Typed configuration for the Scanner module."""

    frame_width: int = DEFAULT_FRAME_WIDTH
    frame_height: int = DEFAULT_FRAME_HEIGHT
    window_title: str = DEFAULT_WINDOW_TITLE
    probe_indices: tuple[int, ...] = field(default_factory=lambda: tuple(DEFAULT_PROBE_INDICES))
    wait_key_ms: int = DEFAULT_WAIT_KEY_MS
    camera_index: Optional[int] = None

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> "ScannerConfig":
        defaults = cls()
        probe = values.get("probe_indices", defaults.probe_indices)
        if not isinstance(probe, tuple):
            probe = defaults.probe_indices
        return cls(
            frame_width=max(1, get_config_int(values, "frame_width", defaults.frame_width)),
            frame_height=max(1, get_config_int(values, "frame_height", defaults.frame_height)),
            window_title=get_config_str(values, "window_title", defaults.window_title),
            probe_indices=probe,
            wait_key_ms=max(1, get_config_int(values, "wait_key_ms", defaults.wait_key_ms)),
        )

    @classmethod
    def load(cls, config_path: Optional[Path] = None, args: Any = None) -> "ScannerConfig":
        """Build config from an optional config file with optional CLI overrides."""
        defaults = cls().to_dict()
        defaults.pop("camera_index")
        config = cls.from_dict(ConfigLoader.load(config_path, defaults))
        if args is not None:
            config = config._apply_args_override(args)
        return config

    def _apply_args_override(self, args: Any) -> "ScannerConfig":
        camera = getattr(args, "camera_index", None)
        if camera is None:
            return self
        return replace(self, camera_index=camera)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


__all__ = ["ScannerConfig"]
