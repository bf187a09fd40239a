# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from promdump.common.config import (
    DumpConfig,
    MetricsConfig,
    parse_duration,
    parse_timestamp,
)
from promdump.common.enums import Compression, Format, HTTPBackend, Layout
from promdump.common.exceptions import ConfigurationError
from tests.harness.builders import SOURCE_A, SOURCE_B

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestParseDuration:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("30s", timedelta(seconds=30)),
            ("1m", timedelta(minutes=1)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("500ms", timedelta(milliseconds=500)),
            ("1.5h", timedelta(minutes=90)),
            ("2m30s", timedelta(seconds=150)),
            ("90", timedelta(seconds=90)),
            ("0.5", timedelta(milliseconds=500)),
            ("0", timedelta(0)),
            ("-1m", timedelta(minutes=-1)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "m", "1d", "1m junk", "abc", "1.2.3s"])
    def test_invalid(self, text):
        with pytest.raises(ValueError, match="invalid duration"):
            parse_duration(text)


class TestParseTimestamp:
    def test_utc(self):
        assert parse_timestamp("2024-05-01T11:55:00") == datetime(
            2024, 5, 1, 11, 55, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize("text", ["2024-05-01", "2024-05-01 11:55:00", "yesterday"])
    def test_invalid(self, text):
        with pytest.raises(ValueError, match="expected layout YYYY-MM-DDTHH:MM:SS"):
            parse_timestamp(text)


class TestDumpConfig:
    """Test dump options and defaults."""

    def test_defaults(self):
        config = DumpConfig(urls=[SOURCE_A])

        assert config.format == Format.JSON
        assert config.layout == Layout.FLAT
        assert config.compress == Compression.NONE
        assert config.backend == HTTPBackend.AIOHTTP
        assert config.step == "1m"
        assert config.output is None

    def test_default_window_is_last_five_minutes(self):
        window = DumpConfig(urls=[SOURCE_A]).timerange(now=NOW)

        assert window.start == NOW - timedelta(minutes=5)
        assert window.end == NOW
        assert window.step == timedelta(minutes=1)

    def test_explicit_window(self):
        config = DumpConfig(
            urls=[SOURCE_A],
            start="2024-05-01T10:00:00",
            end="2024-05-01T11:00:00",
            step="30s",
        )

        window = config.timerange(now=NOW)

        assert window.start == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)
        assert window.end == datetime(2024, 5, 1, 11, tzinfo=timezone.utc)
        assert window.step == timedelta(seconds=30)

    def test_inverted_window(self):
        config = DumpConfig(urls=[SOURCE_A], start="2024-05-01T11:00:00", end="2024-05-01T10:00:00")

        with pytest.raises(ConfigurationError, match="invalid time window"):
            config.timerange(now=NOW)

    def test_zero_step(self):
        with pytest.raises(ConfigurationError, match="step must be positive"):
            DumpConfig(urls=[SOURCE_A], step="0s").timerange(now=NOW)

    @pytest.mark.parametrize(
        "field,value",
        [("start", "not-a-time"), ("end", "2024-05-01"), ("step", "1 minute")],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            DumpConfig(urls=[SOURCE_A], **{field: value})

    def test_urls_required(self):
        with pytest.raises(ValidationError):
            DumpConfig(urls=[])

    def test_case_insensitive_choices(self):
        config = DumpConfig(urls=[SOURCE_A], format="PARQUET", layout="Nested", compress="gzip")

        assert config.format == Format.PARQUET
        assert config.layout == Layout.NESTED
        assert config.compress == Compression.GZIP

    def test_unknown_choice(self):
        with pytest.raises(ValidationError):
            DumpConfig(urls=[SOURCE_A], layout="tree")

    def test_verbose_sets_debug(self):
        assert DumpConfig(urls=[SOURCE_A], verbose=True).log_level == "DEBUG"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PROMDUMP_LAYOUT", "nested")
        monkeypatch.setenv("PROMDUMP_URLS", f'["{SOURCE_A}", "{SOURCE_B}"]')

        config = DumpConfig()

        assert config.layout == Layout.NESTED
        assert config.urls == [SOURCE_A, SOURCE_B]

    def test_product_query_config(self):
        config = DumpConfig(urls=[SOURCE_A, SOURCE_B])

        product = config.product_query_config(["up", "down"], now=NOW)

        assert product.urls == [SOURCE_A, SOURCE_B]
        assert product.queries == ["up", "down"]
        assert product.end == NOW

    def test_product_query_config_needs_a_query(self):
        with pytest.raises(ConfigurationError, match="no query given"):
            DumpConfig(urls=[SOURCE_A]).product_query_config([])


class TestMetricsConfig:
    def test_defaults(self):
        config = MetricsConfig(url=SOURCE_A)

        assert config.backend == HTTPBackend.AIOHTTP
        assert config.client_cert is None
        assert config.log_level == "WARNING"
