"""Tests for the package logging helpers."""

import logging

from fishchi.errors import RenderError
from fishchi.logging_utils import get_logger, log_exception, set_log_level


class ListHandler(logging.Handler):
    """Collects formatted records in memory."""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestLogging:
    """Tests for get_logger, set_log_level and log_exception."""

    def test_module_loggers_are_children(self) -> None:
        """Module loggers should live under the package logger."""
        assert get_logger("renderer").name == "fishchi.renderer"
        assert get_logger().name == "fishchi"

    def test_set_log_level(self) -> None:
        """Should change the package logger level."""
        root = get_logger()
        previous = root.level
        try:
            set_log_level("debug")
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

    def test_log_exception_includes_detail(self) -> None:
        """Should log the exception class, message and detail."""
        logger = get_logger("tests")
        handler = ListHandler()
        logger.addHandler(handler)
        try:
            log_exception("[Test] failed", RenderError("boom", detail="id='x'"), logger)
        finally:
            logger.removeHandler(handler)

        assert len(handler.records) == 1
        message = handler.records[0].getMessage()
        assert message == "[Test] failed | RenderError: boom | detail=id='x'"
        assert handler.records[0].levelno == logging.ERROR
