# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console, Group
from rich.text import Text
from rich.traceback import Traceback

from promdump.common.environment import Environment
from promdump.common.logging import (
    CustomRichHandler,
    PromDumpLogger,
    PromDumpLoggerMixin,
    setup_rich_logging,
)


def make_log_record(
    msg: str = "Test message",
    level: int = logging.INFO,
    name: str = "test_logger",
    lineno: int = 42,
) -> logging.LogRecord:
    """Factory for creating LogRecord instances with sensible defaults."""
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=lineno,
        msg=msg,
        args=(),
        exc_info=None,
    )


def render_to_str(handler: CustomRichHandler, record: logging.LogRecord) -> str:
    """Render a log record and return the string representation."""
    result = handler.render(record=record, traceback=None, message_renderable=Text(""))
    return str(result)


@pytest.fixture
def handler() -> CustomRichHandler:
    """Create a CustomRichHandler with a mock console."""
    return CustomRichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=MagicMock(spec=Console),
        show_time=False,
        show_level=False,
    )


class TestCustomRichHandlerRender:
    """Test cases for CustomRichHandler.render method."""

    @pytest.mark.parametrize(
        "expected_content,description",
        [
            (":", "timestamp with colons"),
            ("INFO", "log level name"),
            ("(test_logger:42)", "logger suffix with name and line"),
            ("Test message", "log message content"),
        ],
    )
    def test_render_includes_expected_content(
        self, handler: CustomRichHandler, expected_content: str, description: str
    ):
        """Test that rendered output includes expected content."""
        rendered_str = render_to_str(handler, make_log_record())
        assert expected_content in rendered_str, f"Missing {description}"

    def test_render_returns_group_with_traceback(self, handler: CustomRichHandler):
        """Test that render returns Group when traceback is present."""
        result = handler.render(
            record=make_log_record(),
            traceback=MagicMock(spec=Traceback),
            message_renderable=Text(""),
        )
        assert isinstance(result, Group)

    def test_render_truncates_long_messages(self, handler: CustomRichHandler):
        """Test that messages are cut to the configured console length."""
        with patch.object(Environment.LOGGING, "MAX_CONSOLE_MESSAGE_LENGTH", 10):
            rendered_str = render_to_str(handler, make_log_record(msg="x" * 50))

        assert "x" * 10 in rendered_str
        assert "x" * 11 not in rendered_str

    def test_trace_level_has_a_name(self, handler: CustomRichHandler):
        record = make_log_record(level=logging.DEBUG - 5)
        assert "TRACE" in render_to_str(handler, record)


class TestPromDumpLogger:
    """Test lazy message evaluation."""

    def test_callable_is_not_evaluated_when_disabled(self):
        logger = PromDumpLogger("promdump.test.lazy")
        logger._logger.setLevel(logging.INFO)
        message = MagicMock(return_value="expensive")

        logger.debug(message)

        message.assert_not_called()

    def test_callable_is_evaluated_when_enabled(self, caplog):
        logger = PromDumpLogger("promdump.test.lazy")

        with caplog.at_level(logging.DEBUG, logger="promdump.test.lazy"):
            logger.debug(lambda: "computed")

        assert caplog.messages == ["computed"]

    def test_record_points_at_the_caller(self, caplog):
        logger = PromDumpLogger("promdump.test.caller")

        with caplog.at_level(logging.INFO, logger="promdump.test.caller"):
            logger.info("hello")

        assert caplog.records[0].funcName == "test_record_points_at_the_caller"

    def test_level_checks(self):
        logger = PromDumpLogger("promdump.test.levels")
        logger._logger.setLevel(logging.DEBUG)

        assert logger.is_debug_enabled
        assert not logger.is_trace_enabled


class TestPromDumpLoggerMixin:
    """Test the logger mixin."""

    def test_logger_named_after_class(self):
        class Worker(PromDumpLoggerMixin):
            pass

        assert Worker().logger._logger.name == "Worker"

    def test_custom_logger_name(self):
        assert PromDumpLoggerMixin(logger_name="custom").logger._logger.name == "custom"

    def test_methods_log_at_their_level(self, caplog):
        mixin = PromDumpLoggerMixin(logger_name="promdump.test.mixin")

        with caplog.at_level(logging.DEBUG, logger="promdump.test.mixin"):
            mixin.debug("d")
            mixin.info("i")
            mixin.warning(lambda: "w")
            mixin.error("e")

        assert [(r.levelname, r.getMessage()) for r in caplog.records] == [
            ("DEBUG", "d"),
            ("INFO", "i"),
            ("WARNING", "w"),
            ("ERROR", "e"),
        ]
        assert caplog.records[0].funcName == "test_methods_log_at_their_level"


class TestSetupRichLogging:
    """Test root logger setup."""

    def test_installs_single_stderr_handler(self):
        setup_rich_logging("debug")
        setup_rich_logging("debug")

        root_logger = logging.getLogger()
        rich_handlers = [h for h in root_logger.handlers if isinstance(h, CustomRichHandler)]
        assert len(rich_handlers) == 1
        assert rich_handlers[0].console.stderr is True
        assert root_logger.level == logging.DEBUG

    def test_accepts_trace_level(self):
        setup_rich_logging("TRACE")

        assert logging.getLogger().level == logging.DEBUG - 5
