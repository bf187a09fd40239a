# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command configuration.

Each command takes one settings object. Every option can be given on the
command line or through a ``PROMDUMP_<OPTION>`` environment variable.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Literal

from cyclopts import Parameter
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self

from promdump.common.enums import Compression, Format, HTTPBackend, Layout
from promdump.common.exceptions import ConfigurationError
from promdump.common.models import ProductQueryConfig, Timerange

TIMESTAMP_LAYOUT = "%Y-%m-%dT%H:%M:%S"
"""Layout of `--start` and `--end`, always interpreted as UTC."""

DEFAULT_WINDOW = timedelta(minutes=5)
DEFAULT_STEP = "1m"

_SECONDS_PER_UNIT = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_PLAIN_SECONDS = re.compile(r"\d+(?:\.\d+)?")

LogLevelT = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_timestamp(text: str) -> datetime:
    """Parse a `YYYY-MM-DDTHH:MM:SS` timestamp as UTC."""
    try:
        return datetime.strptime(text.strip(), TIMESTAMP_LAYOUT).replace(
            tzinfo=timezone.utc
        )
    except ValueError as e:
        raise ValueError(
            f"invalid timestamp {text!r}, expected layout YYYY-MM-DDTHH:MM:SS"
        ) from e


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as `30s`, `1m`, `1h30m`, `500ms`, or plain seconds."""
    text = text.strip()
    if _PLAIN_SECONDS.fullmatch(text):
        return timedelta(seconds=float(text))

    sign = 1.0
    if text[:1] in ("-", "+"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return timedelta(0)

    seconds = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            break
        seconds += float(match.group(1)) * _SECONDS_PER_UNIT[match.group(2)]
        pos = match.end()
    if not text or pos != len(text):
        raise ValueError(f"invalid duration {text!r}")
    return timedelta(seconds=sign * seconds)


class _CommonConfig(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix="PROMDUMP_",
        extra="forbid",
    )

    @model_validator(mode="after")
    def apply_verbose(self) -> Self:
        if self.verbose:
            self.log_level = "DEBUG"
        return self

    backend: Annotated[
        HTTPBackend,
        Field(description="HTTP backend used to talk to Prometheus"),
        Parameter(name=("--backend", "-b")),
    ] = HTTPBackend.AIOHTTP

    client_cert: Annotated[
        str | None,
        Field(description="Path to a PEM file holding the client certificate and key"),
        Parameter(name="--client-cert"),
    ] = None

    output: Annotated[
        str | None,
        Field(description="File to write to instead of stdout"),
        Parameter(name=("--output", "-o")),
    ] = None

    log_level: Annotated[
        LogLevelT,
        Field(description="Logging level (logs are written to stderr)"),
        Parameter(name="--log-level"),
    ] = "WARNING"

    verbose: Annotated[
        bool,
        Field(description="Verbose mode (sets log level to DEBUG)"),
        Parameter(name=("--verbose", "-v")),
    ] = False


class DumpConfig(_CommonConfig):
    """Options of the `dump` command."""

    urls: Annotated[
        list[str],
        Field(description="Prometheus sources to query", min_length=1),
        Parameter(name=("--url", "-u")),
    ]

    format: Annotated[
        Format,
        Field(description="Output format"),
        Parameter(name=("--format", "-f")),
    ] = Format.JSON

    layout: Annotated[
        Layout,
        Field(description="Output layout"),
        Parameter(name=("--layout", "-l")),
    ] = Layout.FLAT

    compress: Annotated[
        Compression,
        Field(description="Compression applied to the output"),
        Parameter(name=("--compress", "-c")),
    ] = Compression.NONE

    start: Annotated[
        str | None,
        Field(
            description="UTC timestamp with layout YYYY-MM-DDTHH:MM:SS (default: 5 minutes ago)"
        ),
        Parameter(name=("--start", "-s")),
    ] = None

    end: Annotated[
        str | None,
        Field(description="UTC timestamp with layout YYYY-MM-DDTHH:MM:SS (default: now)"),
        Parameter(name=("--end", "-e")),
    ] = None

    step: Annotated[
        str,
        Field(description="Resolution step, e.g. 30s, 1m, 1h30m"),
        Parameter(name=("--step", "-S")),
    ] = DEFAULT_STEP

    @field_validator("start", "end")
    @classmethod
    def validate_timestamp(cls, value: str | None) -> str | None:
        if value is not None:
            parse_timestamp(value)
        return value

    @field_validator("step")
    @classmethod
    def validate_step(cls, value: str) -> str:
        parse_duration(value)
        return value

    def timerange(self, now: datetime | None = None) -> Timerange:
        """Resolve the time window, filling in defaults relative to `now`.

        Raises:
            ConfigurationError: If the window is empty or inverted, or the step is not positive.
        """
        now = now or datetime.now(tz=timezone.utc)
        try:
            return Timerange(
                start=parse_timestamp(self.start)
                if self.start
                else now - DEFAULT_WINDOW,
                end=parse_timestamp(self.end) if self.end else now,
                step=parse_duration(self.step),
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"invalid time window: {e.errors()[0]['msg']}"
            ) from e

    def product_query_config(
        self, queries: list[str], now: datetime | None = None
    ) -> ProductQueryConfig:
        if not queries:
            raise ConfigurationError("no query given")
        window = self.timerange(now)
        return ProductQueryConfig(
            start=window.start,
            end=window.end,
            step=window.step,
            queries=queries,
            urls=self.urls,
        )


class MetricsConfig(_CommonConfig):
    """Options of the `metrics` command."""

    url: Annotated[
        str,
        Field(description="Prometheus source to list the metrics of"),
        Parameter(name=("--url", "-u")),
    ]
