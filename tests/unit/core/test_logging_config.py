"""Unit tests for configure_logging."""

import io
import logging

import pytest

from qr_tools.core.logging_config import configure_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


class TestConfigureLogging:

    def test_console_stream_and_level(self, restore_root_logging):
        stream = io.StringIO()

        configure_logging("debug", stream=stream)
        logging.getLogger("qr_tools.test").debug("visible")

        assert restore_root_logging.level == logging.DEBUG
        output = stream.getvalue()
        assert "DEBUG" in output
        assert "qr_tools.test | visible" in output

    def test_level_filters(self, restore_root_logging):
        stream = io.StringIO()

        configure_logging("warning", stream=stream)
        logging.getLogger("qr_tools.test").info("hidden")

        assert stream.getvalue() == ""

    def test_log_file_created(self, restore_root_logging, tmp_path):
        log_file = tmp_path / "logs" / "scanner.log"

        configure_logging("info", stream=io.StringIO(), log_file=log_file)
        logging.getLogger("qr_tools.test").info("to file")
        for handler in restore_root_logging.handlers:
            handler.flush()

        assert "to file" in log_file.read_text(encoding="utf-8")

    def test_unknown_level_rejected(self, restore_root_logging):
        with pytest.raises(ValueError):
            configure_logging("chatty")
