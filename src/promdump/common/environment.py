# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Environment-driven tuning knobs.

Values are read once at import time from ``PROMDUMP_*`` environment variables
and exposed as ``Environment.<GROUP>.<NAME>``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _HTTPSettings(BaseSettings):
    """HTTP client settings shared by every transport backend."""

    model_config = SettingsConfigDict(
        env_prefix="PROMDUMP_HTTP_",
        case_sensitive=False,
    )

    TIMEOUT: float = Field(
        default=300.0,
        ge=0.0,
        description="Total timeout in seconds for a single request to a Prometheus source",
    )
    CONNECT_TIMEOUT: float = Field(
        default=10.0,
        ge=0.0,
        description="Timeout in seconds for establishing a connection",
    )
    CONNECTION_LIMIT: int = Field(
        default=100,
        ge=1,
        description="Maximum number of concurrent connections held by a transport",
    )
    USER_AGENT: str = Field(
        default="promdump",
        description="User-Agent header sent with every request",
    )


class _LoggingSettings(BaseSettings):
    """Console logging settings."""

    model_config = SettingsConfigDict(
        env_prefix="PROMDUMP_LOGGING_",
        case_sensitive=False,
    )

    MAX_CONSOLE_MESSAGE_LENGTH: int = Field(
        default=2000,
        ge=1,
        description="Messages longer than this are truncated on the console",
    )


class _Environment:
    HTTP = _HTTPSettings()
    LOGGING = _LoggingSettings()


Environment = _Environment()
