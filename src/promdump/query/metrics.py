# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import datetime, timezone

from promdump.common.logging import PromDumpLogger
from promdump.common.models import MetricDump, MetricInfo
from promdump.query.prometheus_client import PrometheusClient
from promdump.transports.base_transport import HttpTransportProtocol

_logger = PromDumpLogger(__name__)

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


async def metrics_with_labels(
    url: str, transport: HttpTransportProtocol
) -> list[MetricDump]:
    """List every metric known to a source, with its help text and label names.

    A metric with several metadata entries is listed once per entry. Label
    names are looked up once per distinct metric, over all of the source's
    retained history.

    Raises:
        QueryError: If any of the API calls fails.
    """
    client = PrometheusClient(url, transport)
    metadata = await client.metadata()

    metrics = [
        MetricInfo(name=name, help=str(entry.get("help", "")))
        for name, entries in metadata.items()
        for entry in entries
    ]

    now = datetime.now(tz=timezone.utc)
    metric_labels: dict[str, list[str]] = {}
    for metric in metrics:
        if metric.name in metric_labels:
            continue
        labels, warnings = await client.label_names([metric.name], _EPOCH, now)
        for warning in warnings:
            _logger.warning(f"Prometheus API warning: {warning}")
        metric_labels[metric.name] = labels

    _logger.debug(
        lambda: f"Found {len(metrics)} metric(s), {len(metric_labels)} distinct, on {url}"
    )
    return [
        MetricDump(name=metric.name, help=metric.help, labels=metric_labels[metric.name])
        for metric in metrics
    ]
