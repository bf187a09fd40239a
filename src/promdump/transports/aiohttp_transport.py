# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import asyncio
import time

import aiohttp

from promdump.common.environment import Environment
from promdump.common.exceptions import TransportError
from promdump.transports.base_transport import (
    BaseHttpTransport,
    HttpResponse,
    QueryParamsT,
)


class AioHttpTransport(BaseHttpTransport):
    """HTTP transport backed by an aiohttp `ClientSession`."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._session: aiohttp.ClientSession | None = None

    async def open(self) -> None:
        if self._session is not None:
            return
        connector = aiohttp.TCPConnector(
            limit=Environment.HTTP.CONNECTION_LIMIT,
            ssl=self.create_ssl_context(),
        )
        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(
                total=self.timeout or None, connect=self.connect_timeout or None
            ),
            headers=self.headers,
        )
        self.debug("aiohttp session opened")

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None
            self.debug("aiohttp session closed")

    async def get(self, url: str, params: QueryParamsT | None = None) -> HttpResponse:
        session = self._session
        if session is None or session.closed:
            raise TransportError("HTTP session not initialized. Call open() first.")

        self.debug(lambda: f"Sending GET request to {url}")
        start_perf_ns = time.perf_counter_ns()
        try:
            async with session.get(url, params=list(params or [])) as response:
                content = await response.read()
                result = HttpResponse(
                    status=response.status,
                    reason=response.reason or "",
                    content=content,
                    headers=dict(response.headers),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"GET {url} failed: {e!r}") from e

        self.debug(
            lambda: f"GET {url} returned {result.status} in "
            f"{(time.perf_counter_ns() - start_perf_ns) / 1e9:.3f} seconds"
        )
        return result
