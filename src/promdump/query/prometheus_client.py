# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Minimal async client for the Prometheus HTTP API (v1).

Only the endpoints promdump needs are implemented: range queries, metric
metadata and label names. See https://prometheus.io/docs/prometheus/latest/querying/api/
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

import orjson

from promdump.common.exceptions import DataShapeError, QueryError, TransportError
from promdump.common.logging import PromDumpLoggerMixin
from promdump.common.models import TimeSeriesValue, parse_value
from promdump.transports.base_transport import HttpTransportProtocol, QueryParamsT

API_PREFIX = "/api/v1"


def format_time(t: datetime) -> str:
    """Format a timestamp as fractional unix seconds, as the API expects."""
    return _format_seconds(t.timestamp())


def format_step(step: timedelta) -> str:
    return _format_seconds(step.total_seconds())


def _format_seconds(seconds: float) -> str:
    if float(seconds).is_integer():
        return str(int(seconds))
    return repr(float(seconds))


@dataclass
class APIResponse:
    """Decoded `data` of a successful API call plus any warnings the server sent."""

    data: Any
    warnings: list[str] = field(default_factory=list)


class PrometheusClient(PromDumpLoggerMixin):
    """Client for a single Prometheus source.

    Args:
        url: Base URL of the Prometheus server (e.g. "http://prometheus:9090").
        transport: An opened HTTP transport.
    """

    def __init__(self, url: str, transport: HttpTransportProtocol, **kwargs) -> None:
        super().__init__(**kwargs)
        self.url = url
        self.transport = transport

    def _endpoint(self, path: str) -> str:
        return f"{self.url.rstrip('/')}{API_PREFIX}{path}"

    async def _get(
        self, path: str, params: QueryParamsT, query: str | None = None
    ) -> APIResponse:
        """Call an API endpoint and unwrap the response envelope.

        Raises:
            QueryError: On transport failure, an error status, or an undecodable body.
        """
        try:
            response = await self.transport.get(self._endpoint(path), params=params)
        except TransportError as e:
            raise QueryError(self.url, str(e), query=query) from e

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            if not response.ok:
                raise QueryError(
                    self.url,
                    f"server returned HTTP status {response.status} {response.reason}".rstrip(),
                    query=query,
                ) from e
            raise QueryError(
                self.url, f"invalid JSON in response: {e}", query=query
            ) from e

        if not isinstance(body, dict):
            raise QueryError(self.url, "unexpected response envelope", query=query)

        if body.get("status") == "error" or not response.ok:
            error_type = body.get("errorType") or f"HTTP {response.status}"
            message = body.get("error") or response.reason or "unknown error"
            raise QueryError(self.url, f"{error_type}: {message}", query=query)

        if "data" not in body:
            raise QueryError(self.url, "response has no data", query=query)

        return APIResponse(data=body["data"], warnings=list(body.get("warnings") or []))

    async def query_range(
        self, query: str, start: datetime, end: datetime, step: timedelta
    ) -> tuple[TimeSeriesValue, list[str]]:
        """Evaluate `query` over a time window.

        Returns:
            The parsed value and the warnings returned alongside it.

        Raises:
            QueryError: If the request fails or the result cannot be parsed.
        """
        params = [
            ("query", query),
            ("start", format_time(start)),
            ("end", format_time(end)),
            ("step", format_step(step)),
        ]
        response = await self._get("/query_range", params, query=query)
        if not isinstance(response.data, dict):
            raise QueryError(self.url, "unexpected query result", query=query)
        try:
            value = parse_value(response.data)
        except DataShapeError as e:
            raise QueryError(self.url, str(e), query=query) from e
        self.debug(
            lambda: f"Query {query!r} against {self.url} returned a {value.value_type}"
        )
        return value, response.warnings

    async def metadata(self) -> dict[str, list[dict[str, Any]]]:
        """Metadata of every metric the server knows about, keyed by metric name."""
        response = await self._get("/metadata", [])
        if not isinstance(response.data, dict):
            raise QueryError(self.url, "unexpected metadata result")
        return response.data

    async def label_names(
        self, matches: list[str], start: datetime, end: datetime
    ) -> tuple[list[str], list[str]]:
        """Label names of the series matching any of `matches` within the window.

        Returns:
            The label names and the warnings returned alongside them.
        """
        params = [("match[]", match) for match in matches]
        params += [("start", format_time(start)), ("end", format_time(end))]
        response = await self._get("/labels", params)
        if not isinstance(response.data, list):
            raise QueryError(self.url, "unexpected label names result")
        return [str(name) for name in response.data], response.warnings
