# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Logging infrastructure with lazy message evaluation and Rich console output.

Messages may be passed either as strings or as zero-argument callables. A
callable is only evaluated when the level is enabled, which keeps expensive
formatting (record counts, label dumps) off the hot path::

    self.debug(lambda: f"Fetched {len(values)} values from {url}")

Console output is rendered to stderr so that stdout stays free for the dumped
data.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from rich.console import Console, ConsoleRenderable, Group
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

from promdump.common.environment import Environment

_TRACE = logging.DEBUG - 5
_DEBUG = logging.DEBUG

logging.addLevelName(_TRACE, "TRACE")

MessageT = str | Callable[[], str]


class PromDumpLogger:
    """Thin wrapper around a stdlib logger that accepts lazy messages."""

    def __init__(self, logger_name: str) -> None:
        self._logger = logging.getLogger(logger_name)

    @property
    def is_trace_enabled(self) -> bool:
        return self._logger.isEnabledFor(_TRACE)

    @property
    def is_debug_enabled(self) -> bool:
        return self._logger.isEnabledFor(_DEBUG)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def log(self, level: int, message: MessageT, *args, **kwargs) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if callable(message):
            message = message()
        # stacklevel=3 points the record at the caller of trace()/debug()/etc.
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, message, *args, **kwargs)

    def trace(self, message: MessageT, *args, **kwargs) -> None:
        self.log(_TRACE, message, *args, **kwargs)

    def debug(self, message: MessageT, *args, **kwargs) -> None:
        self.log(_DEBUG, message, *args, **kwargs)

    def info(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.CRITICAL, message, *args, **kwargs)


class PromDumpLoggerMixin:
    """Mixin that gives a class a `PromDumpLogger` named after the class.

    Exposes the logger methods directly on the instance (`self.debug(...)`).
    """

    def __init__(self, logger_name: str | None = None, **kwargs) -> None:
        self.logger = PromDumpLogger(logger_name or self.__class__.__name__)
        super().__init__(**kwargs)

    @property
    def is_trace_enabled(self) -> bool:
        return self.logger.is_trace_enabled

    @property
    def is_debug_enabled(self) -> bool:
        return self.logger.is_debug_enabled

    def trace(self, message: MessageT, *args, **kwargs) -> None:
        self.logger.log(_TRACE, message, *args, **kwargs)

    def debug(self, message: MessageT, *args, **kwargs) -> None:
        self.logger.log(_DEBUG, message, *args, **kwargs)

    def info(self, message: MessageT, *args, **kwargs) -> None:
        self.logger.log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: MessageT, *args, **kwargs) -> None:
        self.logger.log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: MessageT, *args, **kwargs) -> None:
        self.logger.log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self.logger.log(logging.ERROR, message, *args, **kwargs)


_logger = PromDumpLogger(__name__)


class CustomRichHandler(RichHandler):
    """Rich logging handler with a compact single-prefix format.

    Example Output::

        12:26:52.092 WARNING  Prometheus API warning: query hit max samples (query:61)
    """

    LOG_LEVEL_STYLES = {
        "TRACE": "dim",
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold red",
    }

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Traceback | None,
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        """Render a log record as `HH:MM:SS.mmm LEVEL    message (logger:lineno)`."""
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level_style = self.LOG_LEVEL_STYLES.get(record.levelname, "white")
        message = record.getMessage()[: Environment.LOGGING.MAX_CONSOLE_MESSAGE_LENGTH]

        formatted_log = Text.assemble(
            Text(f"{timestamp} ", style="log.time"),
            Text(f"{record.levelname:<8} ", style=level_style),
            Text(f"{message} "),
            Text(f"({record.name}:{record.lineno})", style="dim italic"),
        )
        return Group(formatted_log, traceback) if traceback else formatted_log


def setup_rich_logging(level: str | int = logging.INFO) -> None:
    """Set up rich logging on the root logger, writing to stderr.

    Existing root handlers are removed so repeated calls do not duplicate output.
    """
    if isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    rich_handler = CustomRichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=Console(stderr=True),
        show_time=False,
        show_level=False,
        tracebacks_show_locals=False,
    )
    rich_handler.setLevel(level)
    root_logger.addHandler(rich_handler)

    _logger.debug(lambda: f"Logging initialized with level: {level}")
