# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Models for the values returned by the Prometheus query API.

The wire format is documented at
https://prometheus.io/docs/prometheus/latest/querying/api/#expression-query-result-formats

Sample timestamps are converted from fractional unix seconds to integer
milliseconds since epoch; sample values from strings to floats.
"""

import math
from collections.abc import Sequence
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import Field, ValidationError
from typing_extensions import Self

from promdump.common.enums import PrometheusValueType
from promdump.common.exceptions import DataShapeError
from promdump.common.models.base_models import FrozenPromDumpModel

METRIC_NAME_LABEL = "__name__"
"""Label holding the metric name of a series."""

MILLIS_PER_SECOND = 1000


def format_sample_value(value: float) -> str:
    """Format a sample value the way Prometheus puts it on the wire.

    Finite values use the shortest digits that round-trip, in positional
    notation without an exponent: `1e21` is written as `"1000000000000000000000"`
    and `1.0` as `"1"`.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _millis_from_wire(timestamp: float | int | str) -> int:
    return round(float(timestamp) * MILLIS_PER_SECOND)


def _millis_to_wire(timestamp_ms: int) -> float:
    return timestamp_ms / MILLIS_PER_SECOND


class SamplePair(FrozenPromDumpModel):
    """A single (timestamp, value) sample."""

    timestamp: int = Field(description="Milliseconds since epoch")
    value: float = Field(description="Sample value")

    @classmethod
    def from_wire(cls, pair: Sequence[Any]) -> Self:
        """Parse a `[<unix seconds>, "<value>"]` pair."""
        timestamp, value = pair
        return cls(timestamp=_millis_from_wire(timestamp), value=float(value))

    def to_wire(self) -> list[Any]:
        return [_millis_to_wire(self.timestamp), format_sample_value(self.value)]


class SampleStream(FrozenPromDumpModel):
    """A series: a label set and its ordered samples."""

    metric: dict[str, str] = Field(
        default_factory=dict, description="Label set, including the metric name label"
    )
    values: list[SamplePair] = Field(default_factory=list)

    @property
    def name(self) -> str:
        """The metric name, or an empty string if the series has none."""
        return self.metric.get(METRIC_NAME_LABEL, "")

    def labels_without_name(self) -> dict[str, str]:
        """A copy of the label set with the metric name label removed."""
        return {k: v for k, v in self.metric.items() if k != METRIC_NAME_LABEL}

    def to_wire(self) -> dict[str, Any]:
        return {
            "metric": dict(self.metric),
            "values": [pair.to_wire() for pair in self.values],
        }


class Sample(FrozenPromDumpModel):
    """An instant sample: a label set and a single value."""

    metric: dict[str, str] = Field(default_factory=dict)
    value: SamplePair

    def to_wire(self) -> dict[str, Any]:
        return {"metric": dict(self.metric), "value": self.value.to_wire()}


class Matrix(FrozenPromDumpModel):
    """Result of a range query: an ordered list of series."""

    value_type: ClassVar[PrometheusValueType] = PrometheusValueType.MATRIX

    series: list[SampleStream] = Field(default_factory=list)

    def to_wire(self) -> list[dict[str, Any]]:
        return [stream.to_wire() for stream in self.series]


class Vector(FrozenPromDumpModel):
    """Result of an instant query over series selectors."""

    value_type: ClassVar[PrometheusValueType] = PrometheusValueType.VECTOR

    samples: list[Sample] = Field(default_factory=list)

    def to_wire(self) -> list[dict[str, Any]]:
        return [sample.to_wire() for sample in self.samples]


class Scalar(FrozenPromDumpModel):
    """A single numeric value."""

    value_type: ClassVar[PrometheusValueType] = PrometheusValueType.SCALAR

    value: SamplePair

    def to_wire(self) -> list[Any]:
        return self.value.to_wire()


class StringValue(FrozenPromDumpModel):
    """A single string value."""

    value_type: ClassVar[PrometheusValueType] = PrometheusValueType.STRING

    timestamp: int
    value: str

    def to_wire(self) -> list[Any]:
        return [_millis_to_wire(self.timestamp), self.value]


TimeSeriesValue = Matrix | Vector | Scalar | StringValue
"""The result of one query against one source."""


def parse_value(data: dict[str, Any]) -> TimeSeriesValue:
    """Parse the `data` object of a Prometheus query response.

    Raises:
        DataShapeError: If the result type is unknown or the result is malformed.
    """
    try:
        result_type = PrometheusValueType(data["resultType"])
    except (KeyError, ValueError) as e:
        raise DataShapeError(
            f"unknown prometheus result type: {data.get('resultType')!r}"
        ) from e

    result = data.get("result")
    try:
        match result_type:
            case PrometheusValueType.MATRIX:
                return Matrix(
                    series=[
                        SampleStream(
                            metric=stream.get("metric", {}),
                            values=[
                                SamplePair.from_wire(pair)
                                for pair in stream.get("values", [])
                            ],
                        )
                        for stream in result or []
                    ]
                )
            case PrometheusValueType.VECTOR:
                return Vector(
                    samples=[
                        Sample(
                            metric=sample.get("metric", {}),
                            value=SamplePair.from_wire(sample["value"]),
                        )
                        for sample in result or []
                    ]
                )
            case PrometheusValueType.SCALAR:
                return Scalar(value=SamplePair.from_wire(result))
            case PrometheusValueType.STRING:
                timestamp, value = result
                return StringValue(timestamp=_millis_from_wire(timestamp), value=value)
    except (TypeError, ValueError, KeyError, AttributeError, ValidationError) as e:
        raise DataShapeError(f"malformed {result_type} result: {e}") from e
