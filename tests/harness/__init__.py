# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from tests.harness.fake_prometheus import (
    FakePrometheusTransport,
    api_error,
    api_success,
    matrix_data,
    samples,
)

__all__ = [
    "FakePrometheusTransport",
    "api_error",
    "api_success",
    "matrix_data",
    "samples",
]
