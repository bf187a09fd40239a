# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Dump time-series data from Prometheus sources as JSON or parquet."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("promdump")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"
