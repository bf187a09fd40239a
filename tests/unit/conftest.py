# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures for unit tests.

This file contains fixtures that are automatically discovered by pytest
and made available to test functions in the same directory and subdirectories.
"""

import pytest

from promdump.common.models import MultiQueryConfig, ProductQueryConfig, QueryConfig
from tests.harness import FakePrometheusTransport
from tests.harness.builders import (
    SOURCE_A,
    SOURCE_B,
    WINDOW_END,
    WINDOW_START,
    WINDOW_STEP,
)


@pytest.fixture
def fake_transport() -> FakePrometheusTransport:
    return FakePrometheusTransport()


@pytest.fixture
def query_config() -> QueryConfig:
    return QueryConfig(
        start=WINDOW_START, end=WINDOW_END, step=WINDOW_STEP, query="up"
    )


@pytest.fixture
def multi_query_config() -> MultiQueryConfig:
    return MultiQueryConfig(
        start=WINDOW_START,
        end=WINDOW_END,
        step=WINDOW_STEP,
        queries=["up", "rate(http_requests_total[5m])"],
    )


@pytest.fixture
def product_query_config(multi_query_config: MultiQueryConfig) -> ProductQueryConfig:
    return ProductQueryConfig(
        **multi_query_config.model_dump(), urls=[SOURCE_A, SOURCE_B]
    )
