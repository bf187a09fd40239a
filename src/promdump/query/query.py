# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Query fan-out over several Prometheus sources.

`product` runs every query against every source. Sources are queried
concurrently, one task per source; the queries of a source run one after the
other. The result is all-or-nothing: if any source fails, every error is
raised together in a `QueryMultiError` and no data is returned.
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from promdump.common.exceptions import QueryCancelledError, QueryError, QueryMultiError
from promdump.common.logging import PromDumpLogger
from promdump.common.models import (
    MultiQueryConfig,
    ProductQueryConfig,
    QueryConfig,
    TimeSeriesValue,
)
from promdump.query.prometheus_client import PrometheusClient
from promdump.transports.base_transport import HttpTransportProtocol

_logger = PromDumpLogger(__name__)

T = TypeVar("T")


async def run_cancellable(
    awaitable: Awaitable[T],
    cancel_event: asyncio.Event | None,
    url: str,
    query: str | None = None,
) -> T:
    """Await `awaitable`, abandoning it as soon as `cancel_event` is set.

    Raises:
        QueryCancelledError: If the event was set before the awaitable finished.
    """
    if cancel_event is None:
        return await awaitable
    if cancel_event.is_set():
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise QueryCancelledError(url, "cancelled", query=query)

    request_task = asyncio.ensure_future(awaitable)
    cancel_task = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait(
            {request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        cancel_task.cancel()

    if request_task.done():
        return request_task.result()

    request_task.cancel()
    try:
        await request_task
    except asyncio.CancelledError:
        pass
    raise QueryCancelledError(url, "cancelled", query=query)


async def single(
    url: str,
    query: QueryConfig,
    transport: HttpTransportProtocol,
    cancel_event: asyncio.Event | None = None,
) -> TimeSeriesValue:
    """Run one range query against one source.

    Warnings returned by the server are logged and otherwise ignored.

    Raises:
        QueryError: If the query fails.
    """
    client = PrometheusClient(url, transport)
    value, warnings = await run_cancellable(
        client.query_range(query.query, query.start, query.end, query.step),
        cancel_event,
        url,
        query.query,
    )
    for warning in warnings:
        _logger.warning(f"Prometheus API warning: {warning}")
    return value


async def multi(
    url: str,
    query: MultiQueryConfig,
    transport: HttpTransportProtocol,
    cancel_event: asyncio.Event | None = None,
) -> list[TimeSeriesValue]:
    """Run several queries against one source, in order.

    The first failing query aborts the remaining ones; no partial result is returned.

    Raises:
        QueryError: If any of the queries fails.
    """
    results: list[TimeSeriesValue] = []
    for query_config in query.query_configs():
        results.append(await single(url, query_config, transport, cancel_event))
    _logger.debug(lambda: f"Fetched {len(results)} value(s) from {url}")
    return results


async def product(
    query: ProductQueryConfig,
    transport: HttpTransportProtocol,
    cancel_event: asyncio.Event | None = None,
) -> list[TimeSeriesValue]:
    """Run every query against every source.

    One task is started per source. All tasks are awaited, even after one of
    them has failed, so nothing is left running when this returns.

    Args:
        query: The sources, queries and shared time window.
        transport: An opened HTTP transport shared by all tasks.
        cancel_event: Optional cancellation token; once set, in-flight queries
            fail with `QueryCancelledError`.

    Returns:
        The values of every source, each source's values in query order.

    Raises:
        QueryMultiError: If any source failed. Carries every error; all data is discarded.
    """
    multi_config = query.multi_query_config()
    _logger.debug(
        lambda: f"Running {len(query.queries)} query(ies) against {len(query.urls)} source(s)"
    )

    outcomes = await asyncio.gather(
        *(multi(url, multi_config, transport, cancel_event) for url in query.urls),
        return_exceptions=True,
    )

    errors: list[Exception] = []
    values: list[TimeSeriesValue] = []
    for url, outcome in zip(query.urls, outcomes, strict=True):
        if isinstance(outcome, asyncio.CancelledError):
            errors.append(QueryCancelledError(url, "cancelled"))
        elif isinstance(outcome, QueryError):
            errors.append(outcome)
        elif isinstance(outcome, Exception):
            errors.append(QueryError(url, repr(outcome)))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            values.extend(outcome)

    if errors:
        for error in errors:
            _logger.debug(lambda error=error: f"Source failed: {error}")
        raise QueryMultiError(errors)
    return values
