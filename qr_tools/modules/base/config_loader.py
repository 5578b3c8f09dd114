from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

from qr_tools.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)

_TRUE_WORDS = ('true', 'yes', 'on', '1')
_BOOL_WORDS = _TRUE_WORDS + ('false', 'no', 'off', '0')


def _int_any_base(text: str) -> int:
    return int(text, 0)  # accepts 0x.., 0o.., 0b..


def _int_tuple(text: str) -> Tuple[int, ...]:
    # "probe_indices = 0, 1"
    return tuple(int(part, 0) for part in text.split(',') if part.strip())


_CONVERTERS = {int: _int_any_base, float: float, tuple: _int_tuple}


class ConfigLoader:
    """Reads the plain ``key = value`` files passed with ``--config``.

    Values for keys present in ``defaults`` are coerced to the default's
    type; other keys are guessed (bool, int, float, then str). Lines
    starting with ``#`` and trailing ``# ...`` comments are ignored.
    """

    @staticmethod
    def load(
        config_path: Optional[Path],
        defaults: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        config = dict(defaults or {})
        if config_path is None:
            return config

        config_path = Path(config_path)
        if not config_path.is_file():
            logger.warning("Config file %s not found, using defaults", config_path)
            return config

        try:
            text = config_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read config file %s: %s", config_path, e)
            return config

        applied = 0
        for _, key, raw in ConfigLoader._entries(text):
            default = defaults.get(key) if defaults else None
            if default is not None:
                config[key] = ConfigLoader._parse_value_with_type(raw, type(default), default)
            else:
                config[key] = ConfigLoader._parse_value(raw)
            applied += 1

        logger.info("Loaded %d setting(s) from %s", applied, config_path)
        return config

    @staticmethod
    def _entries(text: str) -> Iterator[Tuple[int, str, str]]:
        for line_num, line in enumerate(text.splitlines(), 1):
            line = line.split('#', 1)[0].strip()
            if not line:
                continue
            key, sep, value = line.partition('=')
            if not sep:
                logger.warning("Skipping config line %d without '=': %s", line_num, line)
                continue
            yield line_num, key.strip(), value.strip()

    @staticmethod
    def _parse_value(value: str) -> Any:
        if value.lower() in _BOOL_WORDS:
            return value.lower() in _TRUE_WORDS
        for convert in (int, float):
            try:
                return convert(value)
            except ValueError:
                continue
        return value

    @staticmethod
    def _parse_value_with_type(value: str, target_type: type, default: Any = None) -> Any:
        if target_type is bool:
            return value.lower() in _TRUE_WORDS
        if target_type is str:
            return value

        convert = _CONVERTERS.get(target_type)
        if convert is None:
            return value

        try:
            return convert(value)
        except ValueError:
            logger.warning("Cannot read '%s' as %s, using default", value, target_type.__name__)
            return default if default is not None else target_type()
