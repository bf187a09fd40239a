# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from promdump.common.models.base_models import (
    FrozenPromDumpModel,
    PromDumpBaseModel,
)
from promdump.common.models.query_models import (
    MetricDump,
    MetricInfo,
    MultiQueryConfig,
    ProductQueryConfig,
    QueryConfig,
    Timerange,
)
from promdump.common.models.timeseries_models import (
    METRIC_NAME_LABEL,
    Matrix,
    Sample,
    SamplePair,
    SampleStream,
    Scalar,
    StringValue,
    TimeSeriesValue,
    Vector,
    format_sample_value,
    parse_value,
)

__all__ = [
    "FrozenPromDumpModel",
    "METRIC_NAME_LABEL",
    "Matrix",
    "MetricDump",
    "MetricInfo",
    "MultiQueryConfig",
    "ProductQueryConfig",
    "PromDumpBaseModel",
    "QueryConfig",
    "Sample",
    "SamplePair",
    "SampleStream",
    "Scalar",
    "StringValue",
    "TimeSeriesValue",
    "Timerange",
    "Vector",
    "format_sample_value",
    "parse_value",
]
