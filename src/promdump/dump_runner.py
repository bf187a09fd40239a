# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Run the `dump` and `metrics` commands end to end.

Output is only written once it has been fully produced, so a failing command
writes nothing.
"""

import asyncio
import contextlib
import signal
import sys
from collections.abc import Iterator
from datetime import datetime
from typing import BinaryIO

import orjson

from promdump.common.config import DumpConfig, MetricsConfig
from promdump.common.logging import PromDumpLogger
from promdump.common.models import MetricDump, TimeSeriesValue
from promdump.compressor import compress
from promdump.model.marshal import marshal
from promdump.query.metrics import metrics_with_labels
from promdump.query.query import product
from promdump.transports.base_transport import HttpTransportProtocol
from promdump.transports.transport_factory import create_http_transport

_logger = PromDumpLogger(__name__)


@contextlib.contextmanager
def _cancel_on_interrupt(cancel_event: asyncio.Event) -> Iterator[None]:
    """Set `cancel_event` on SIGINT for the duration of the block."""
    loop = asyncio.get_running_loop()
    installed = True
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except (NotImplementedError, ValueError, RuntimeError):
        # Signal handlers need the main thread and a unix event loop.
        installed = False
    try:
        yield
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)


def _write(data: bytes, output: str | None, sink: BinaryIO | None) -> None:
    if sink is not None:
        sink.write(data)
        sink.flush()
    elif output is not None:
        with open(output, "wb") as f:
            f.write(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    _logger.info(lambda: f"Wrote {len(data)} bytes to {output or 'stdout'}")


async def fetch_values(
    config: DumpConfig,
    queries: list[str],
    transport: HttpTransportProtocol | None = None,
    now: datetime | None = None,
) -> list[TimeSeriesValue]:
    """Run every query against every configured source."""
    query_config = config.product_query_config(queries, now)
    if transport is None:
        transport = create_http_transport(config.backend, config.client_cert)

    cancel_event = asyncio.Event()
    async with transport:
        with _cancel_on_interrupt(cancel_event):
            return await product(query_config, transport, cancel_event)


def run_dump(
    config: DumpConfig,
    queries: list[str],
    sink: BinaryIO | None = None,
    transport: HttpTransportProtocol | None = None,
    now: datetime | None = None,
) -> bytes:
    """Query, marshal, compress and write.

    Args:
        config: Options of the dump.
        queries: PromQL expressions, run in order against every source.
        sink: Binary stream to write to. Defaults to `config.output`, then stdout.
        transport: Transport to use instead of one built from `config.backend`.
        now: Reference time for the default time window.

    Returns:
        The bytes written.
    """
    values = asyncio.run(fetch_values(config, queries, transport, now))
    data = compress(marshal(values, config.layout, config.format), config.compress)
    _write(data, config.output, sink)
    return data


async def fetch_metrics(
    config: MetricsConfig, transport: HttpTransportProtocol | None = None
) -> list[MetricDump]:
    if transport is None:
        transport = create_http_transport(config.backend, config.client_cert)
    async with transport:
        return await metrics_with_labels(config.url, transport)


def run_metrics(
    config: MetricsConfig,
    sink: BinaryIO | None = None,
    transport: HttpTransportProtocol | None = None,
) -> bytes:
    """List the metrics of a source, with help text and label names, as JSON."""
    metrics = asyncio.run(fetch_metrics(config, transport))
    data = orjson.dumps([metric.model_dump() for metric in metrics])
    _write(data, config.output, sink)
    return data