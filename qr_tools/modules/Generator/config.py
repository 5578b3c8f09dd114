"""Typed configuration for the Generator module."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Optional

from qr_tools.cli.common import get_config_int, get_config_path, get_config_str
from qr_tools.modules.base.config_loader import ConfigLoader

from .generator_core.app import DEFAULT_POLL_INTERVAL_MS, DEFAULT_WINDOW_TITLE
from .generator_core.state import (
    DEFAULT_TEXT,
    ECL_NAMES,
    QUIET_ZONE_MAX,
    QUIET_ZONE_MIN,
    SCALE_MAX,
    SCALE_MIN,
    VERSION_MAX,
    VERSION_MIN,
    GeneratorState,
    clamp,
)


@dataclass(slots=True)
class GeneratorConfig:
    """Typed configuration for the Generator module."""

    window_title: str = DEFAULT_WINDOW_TITLE
    text: str = DEFAULT_TEXT
    output: Optional[Path] = None
    version: int = 0
    ecl: str = "M"
    scale: int = 15
    quiet_zone: int = 7
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> "GeneratorConfig":
        defaults = cls()
        ecl = get_config_str(values, "ecl", defaults.ecl).strip().upper()
        if ecl not in ECL_NAMES:
            ecl = defaults.ecl
        return cls(
            window_title=get_config_str(values, "window_title", defaults.window_title),
            text=get_config_str(values, "text", defaults.text),
            output=get_config_path(values, "output", defaults.output),
            version=clamp(get_config_int(values, "version", defaults.version), VERSION_MIN, VERSION_MAX),
            ecl=ecl,
            scale=clamp(get_config_int(values, "scale", defaults.scale), SCALE_MIN, SCALE_MAX),
            quiet_zone=clamp(get_config_int(values, "quiet_zone", defaults.quiet_zone), QUIET_ZONE_MIN, QUIET_ZONE_MAX),
            poll_interval_ms=max(1, get_config_int(values, "poll_interval_ms", defaults.poll_interval_ms)),
        )

    @classmethod
    def load(cls, config_path: Optional[Path] = None, args: Any = None) -> "GeneratorConfig":
        """Build config from an optional config file with optional CLI overrides."""
        defaults = cls().to_dict()
        defaults.pop("output")
        config = cls.from_dict(ConfigLoader.load(config_path, defaults))
        if args is not None:
            config = config._apply_args_override(args)
        return config

    def _apply_args_override(self, args: Any) -> "GeneratorConfig":
        overrides: dict[str, Any] = {}
        text = getattr(args, "text", None)
        if text is not None:
            overrides["text"] = text
        output = getattr(args, "output", None)
        if output is not None:
            overrides["output"] = Path(output)
        return replace(self, **overrides) if overrides else self

    def initial_state(self) -> GeneratorState:
        return GeneratorState(
            text=self.text,
            version=self.version,
            ecl_index=ECL_NAMES.index(self.ecl),
            scale=self.scale,
            quiet_zone=self.quiet_zone,
            output=self.output,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


__all__ = ["GeneratorConfig"]
