# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import datetime, timedelta

from pydantic import Field, model_validator
from typing_extensions import Self

from promdump.common.models.base_models import PromDumpBaseModel


class Timerange(PromDumpBaseModel):
    """Shared time window of a range query."""

    start: datetime = Field(description="Start of the window (inclusive)")
    end: datetime = Field(description="End of the window (inclusive)")
    step: timedelta = Field(description="Resolution step between samples")

    @model_validator(mode="after")
    def validate_window(self) -> Self:
        if self.end < self.start:
            raise ValueError(
                f"end ({self.end.isoformat()}) must not be before start ({self.start.isoformat()})"
            )
        if self.step <= timedelta(0):
            raise ValueError(f"step must be positive, got {self.step}")
        return self


class QueryConfig(Timerange):
    """A single PromQL expression evaluated over a time window."""

    query: str = Field(description="PromQL expression")


class MultiQueryConfig(Timerange):
    """Several PromQL expressions evaluated over the same time window."""

    queries: list[str] = Field(description="PromQL expressions, executed in order")

    def query_configs(self) -> list[QueryConfig]:
        """Split into one `QueryConfig` per expression, sharing this window."""
        return [
            QueryConfig(start=self.start, end=self.end, step=self.step, query=query)
            for query in self.queries
        ]


class ProductQueryConfig(MultiQueryConfig):
    """Every expression evaluated against every source."""

    urls: list[str] = Field(description="Base URLs of the Prometheus sources")

    def multi_query_config(self) -> MultiQueryConfig:
        return MultiQueryConfig(
            start=self.start, end=self.end, step=self.step, queries=self.queries
        )


class MetricInfo(PromDumpBaseModel):
    """Name and help text of a metric as reported by the metadata API."""

    name: str
    help: str


class MetricDump(MetricInfo):
    """Metric metadata together with the label names seen for it."""

    labels: list[str] = Field(default_factory=list)
