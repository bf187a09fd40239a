# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from promdump.query.metrics import metrics_with_labels
from promdump.query.prometheus_client import (
    APIResponse,
    PrometheusClient,
    format_step,
    format_time,
)
from promdump.query.query import multi, product, run_cancellable, single

__all__ = [
    "APIResponse",
    "PrometheusClient",
    "format_step",
    "format_time",
    "metrics_with_labels",
    "multi",
    "product",
    "run_cancellable",
    "single",
]
