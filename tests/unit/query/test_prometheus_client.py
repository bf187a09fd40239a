# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import timedelta

import pytest

from promdump.common.exceptions import QueryError, TransportError
from promdump.common.models import Matrix, Scalar, StringValue, Vector
from promdump.query.prometheus_client import PrometheusClient, format_step, format_time
from promdump.transports.base_transport import HttpResponse
from tests.harness import (
    FakePrometheusTransport,
    api_error,
    api_success,
    matrix_data,
    samples,
)
from tests.harness.builders import SOURCE_A, WINDOW_END, WINDOW_START, WINDOW_STEP


async def run_query(transport: FakePrometheusTransport, query: str = "up"):
    client = PrometheusClient(SOURCE_A, transport)
    return await client.query_range(query, WINDOW_START, WINDOW_END, WINDOW_STEP)


class TestFormatting:
    """Test formatting of API time parameters."""

    def test_format_time_whole_seconds(self):
        assert format_time(WINDOW_START) == "1700000000"

    def test_format_time_fractional_seconds(self):
        assert format_time(WINDOW_START + timedelta(milliseconds=500)) == "1700000000.5"

    @pytest.mark.parametrize(
        "step,expected",
        [
            (timedelta(minutes=1), "60"),
            (timedelta(seconds=30), "30"),
            (timedelta(milliseconds=250), "0.25"),
        ],
    )
    def test_format_step(self, step, expected):
        assert format_step(step) == expected


class TestQueryRange:
    """Test range queries against the fake API."""

    @pytest.mark.asyncio
    async def test_sends_query_and_window(self, fake_transport):
        fake_transport.add(SOURCE_A, "up", api_success(matrix_data()))

        await run_query(fake_transport)

        [(path, params)] = fake_transport.requests_to(SOURCE_A)
        assert path == "/query_range"
        assert params == {
            "query": ["up"],
            "start": ["1700000000"],
            "end": ["1700000300"],
            "step": ["60"],
        }

    @pytest.mark.asyncio
    async def test_parses_matrix(self, fake_transport):
        data = matrix_data(({"__name__": "up", "job": "node"}, samples(2)))
        fake_transport.add(SOURCE_A, "up", api_success(data, warnings=["w1"]))

        value, warnings = await run_query(fake_transport)

        assert isinstance(value, Matrix)
        assert warnings == ["w1"]
        [stream] = value.series
        assert stream.name == "up"
        assert [(p.timestamp, p.value) for p in stream.values] == [
            (1700000000000, 0.0),
            (1700000060000, 1.0),
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data,expected_type",
        [
            (
                {
                    "resultType": "vector",
                    "result": [{"metric": {"job": "x"}, "value": [1.5, "2"]}],
                },
                Vector,
            ),
            ({"resultType": "scalar", "result": [1.5, "NaN"]}, Scalar),
            ({"resultType": "string", "result": [1.5, "hello"]}, StringValue),
        ],
    )
    async def test_parses_other_result_types(self, fake_transport, data, expected_type):
        fake_transport.add(SOURCE_A, "up", api_success(data))

        value, _ = await run_query(fake_transport)

        assert isinstance(value, expected_type)

    @pytest.mark.asyncio
    async def test_api_error_envelope(self, fake_transport):
        fake_transport.add(SOURCE_A, "up", api_error("parse error at char 3"))

        with pytest.raises(QueryError) as exc_info:
            await run_query(fake_transport)

        assert exc_info.value.source == SOURCE_A
        assert exc_info.value.query == "up"
        assert "bad_data: parse error at char 3" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_json_error_status(self, fake_transport):
        fake_transport.add(
            SOURCE_A,
            "up",
            HttpResponse(status=502, content=b"<html>bad gateway</html>", reason="Bad Gateway"),
        )

        with pytest.raises(QueryError, match="HTTP status 502 Bad Gateway"):
            await run_query(fake_transport)

    @pytest.mark.asyncio
    async def test_invalid_json_success_status(self, fake_transport):
        fake_transport.add(SOURCE_A, "up", HttpResponse(status=200, content=b"{not json"))

        with pytest.raises(QueryError, match="invalid JSON"):
            await run_query(fake_transport)

    @pytest.mark.asyncio
    async def test_missing_data(self, fake_transport):
        fake_transport.add(
            SOURCE_A, "up", HttpResponse(status=200, content=b'{"status": "success"}')
        )

        with pytest.raises(QueryError, match="no data"):
            await run_query(fake_transport)

    @pytest.mark.asyncio
    async def test_unknown_result_type(self, fake_transport):
        fake_transport.add(
            SOURCE_A, "up", api_success({"resultType": "histogram", "result": []})
        )

        with pytest.raises(QueryError, match="unknown prometheus result type"):
            await run_query(fake_transport)

    @pytest.mark.asyncio
    async def test_transport_error_becomes_query_error(self, fake_transport):
        fake_transport.add(SOURCE_A, "up", TransportError("connection refused"))

        with pytest.raises(QueryError, match="connection refused") as exc_info:
            await run_query(fake_transport)

        assert isinstance(exc_info.value.__cause__, TransportError)


class TestMetadataAndLabels:
    """Test the metadata and label names endpoints."""

    @pytest.mark.asyncio
    async def test_metadata(self, fake_transport):
        metadata = {"up": [{"type": "gauge", "help": "Target is up", "unit": ""}]}
        fake_transport.add(SOURCE_A, "metadata", api_success(metadata))

        result = await PrometheusClient(SOURCE_A, fake_transport).metadata()

        assert result == metadata

    @pytest.mark.asyncio
    async def test_label_names_sends_matchers(self, fake_transport):
        fake_transport.add(
            SOURCE_A, "up", api_success(["__name__", "instance", "job"], warnings=["w"])
        )

        labels, warnings = await PrometheusClient(SOURCE_A, fake_transport).label_names(
            ["up"], WINDOW_START, WINDOW_END
        )

        assert labels == ["__name__", "instance", "job"]
        assert warnings == ["w"]
        [(path, params)] = fake_transport.requests_to(SOURCE_A)
        assert path == "/labels"
        assert params["match[]"] == ["up"]

    @pytest.mark.asyncio
    async def test_label_names_rejects_non_list(self, fake_transport):
        fake_transport.add(SOURCE_A, "up", api_success({"not": "a list"}))

        with pytest.raises(QueryError, match="unexpected label names result"):
            await PrometheusClient(SOURCE_A, fake_transport).label_names(
                ["up"], WINDOW_START, WINDOW_END
            )
