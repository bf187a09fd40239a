# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import time
from urllib.parse import urlencode, urlsplit, urlunsplit

import httpcore

from promdump.common.environment import Environment
from promdump.common.exceptions import TransportError
from promdump.transports.base_transport import (
    BaseHttpTransport,
    HttpResponse,
    QueryParamsT,
)

_HTTPCORE_ERRORS = (
    httpcore.TimeoutException,
    httpcore.NetworkError,
    httpcore.ProtocolError,
    httpcore.UnsupportedProtocol,
    httpcore.ProxyError,
)


def build_url(url: str, params: QueryParamsT | None) -> str:
    """Append url-encoded query parameters to `url`, keeping any it already has."""
    if not params:
        return url
    scheme, netloc, path, query, fragment = urlsplit(url)
    encoded = urlencode(list(params))
    query = f"{query}&{encoded}" if query else encoded
    return urlunsplit((scheme, netloc, path, query, fragment))


class HttpCoreTransport(BaseHttpTransport):
    """HTTP transport backed by an httpcore `AsyncConnectionPool`.

    Negotiates HTTP/2 where the server supports it and falls back to HTTP/1.1.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.pool: httpcore.AsyncConnectionPool | None = None

    async def open(self) -> None:
        if self.pool is not None:
            return
        self.pool = httpcore.AsyncConnectionPool(
            http1=True,
            http2=True,
            max_connections=Environment.HTTP.CONNECTION_LIMIT,
            ssl_context=self.create_ssl_context(),
        )
        self.debug("httpcore connection pool opened")

    async def close(self) -> None:
        if self.pool:
            await self.pool.aclose()
            self.pool = None
            self.debug("httpcore connection pool closed")

    async def get(self, url: str, params: QueryParamsT | None = None) -> HttpResponse:
        pool = self.pool
        if pool is None:
            raise TransportError("HTTP connection pool not initialized. Call open() first.")

        full_url = build_url(url, params)
        self.debug(lambda: f"Sending GET request to {full_url}")
        start_perf_ns = time.perf_counter_ns()
        try:
            response = await pool.request(
                "GET",
                full_url,
                headers=list(self.headers.items()),
                extensions={
                    "timeout": {
                        "connect": self.connect_timeout or None,
                        "read": self.timeout or None,
                        "write": self.timeout or None,
                        "pool": self.timeout or None,
                    }
                },
            )
        except _HTTPCORE_ERRORS as e:
            raise TransportError(f"GET {url} failed: {e!r}") from e

        reason = response.extensions.get("reason_phrase", b"")
        result = HttpResponse(
            status=response.status,
            reason=reason.decode("ascii", errors="replace"),
            content=response.content,
            headers={
                key.decode("latin-1"): value.decode("latin-1")
                for key, value in response.headers
            },
        )
        self.debug(
            lambda: f"GET {url} returned {result.status} in "
            f"{(time.perf_counter_ns() - start_perf_ns) / 1e9:.3f} seconds"
        )
        return result
