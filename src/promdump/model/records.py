# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Per-sample records derived from Prometheus range query results.

A `SampleRecord` denormalizes one sample of one series: the metric name, the
remaining labels, the timestamp and the value. A `FlatRecord` merges the
labels into the top level of the record, next to the reserved keys.
"""

from collections.abc import Iterable

from pydantic import Field

from promdump.common.exceptions import DataShapeError
from promdump.common.models import FrozenPromDumpModel, Matrix, TimeSeriesValue

FlatRecord = dict[str, str | int | float]
"""A record with its labels merged into the top level."""

METRIC_KEY = "metric"
TIMESTAMP_KEY = "timestamp"
VALUE_KEY = "value"
RESERVED_KEYS = (METRIC_KEY, TIMESTAMP_KEY, VALUE_KEY)


class SampleRecord(FrozenPromDumpModel):
    """One sample of one series."""

    metric: str = Field(description="Metric name, empty if the series has none")
    labels: dict[str, str] = Field(
        default_factory=dict, description="Labels of the series, without the metric name"
    )
    timestamp: int = Field(description="Milliseconds since epoch")
    value: float


def value_to_sample_records(value: TimeSeriesValue) -> list[SampleRecord]:
    """Expand a matrix into one record per sample, in series then sample order.

    Raises:
        DataShapeError: If the value is not a matrix.
    """
    if not isinstance(value, Matrix):
        raise DataShapeError(
            f"not a prometheus matrix: got a {getattr(value, 'value_type', type(value).__name__)}"
        )

    records: list[SampleRecord] = []
    for stream in value.series:
        name = stream.name
        labels = stream.labels_without_name()
        for pair in stream.values:
            records.append(
                SampleRecord(
                    metric=name,
                    labels=labels,
                    timestamp=pair.timestamp,
                    value=pair.value,
                )
            )
    return records


def values_to_sample_records(values: Iterable[TimeSeriesValue]) -> list[SampleRecord]:
    """Concatenate the records of several values, preserving their order."""
    return [record for value in values for record in value_to_sample_records(value)]


def flatten_record(record: SampleRecord) -> FlatRecord:
    """Merge the labels of a record into its top level.

    The reserved keys are written first and the labels after them, so a label
    named like a reserved key replaces that key's value (keeping its position).
    """
    flat: FlatRecord = {
        METRIC_KEY: record.metric,
        TIMESTAMP_KEY: record.timestamp,
        VALUE_KEY: record.value,
    }
    flat.update(record.labels)
    return flat


def flatten_records(records: Iterable[SampleRecord]) -> list[FlatRecord]:
    return [flatten_record(record) for record in records]
