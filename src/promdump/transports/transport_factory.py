# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from promdump.common.enums import HTTPBackend
from promdump.common.exceptions import ConfigurationError
from promdump.common.logging import PromDumpLogger
from promdump.transports.aiohttp_transport import AioHttpTransport
from promdump.transports.base_transport import BaseHttpTransport
from promdump.transports.httpcore_transport import HttpCoreTransport

_logger = PromDumpLogger(__name__)

_TRANSPORTS: dict[HTTPBackend, type[BaseHttpTransport]] = {
    HTTPBackend.AIOHTTP: AioHttpTransport,
    HTTPBackend.HTTPCORE: HttpCoreTransport,
}


def create_http_transport(
    backend: HTTPBackend | str = HTTPBackend.AIOHTTP,
    client_cert: str | None = None,
    **kwargs,
) -> BaseHttpTransport:
    """Create an (unopened) HTTP transport for the given backend.

    Args:
        backend: Name of the HTTP backend, case-insensitive.
        client_cert: Optional path to a PEM client certificate (with key).
        **kwargs: Passed to the transport constructor (e.g. `timeout`).

    Raises:
        ConfigurationError: If the backend is unknown.
    """
    try:
        backend = HTTPBackend(backend)
    except ValueError as e:
        raise ConfigurationError(
            f"unknown http backend: {backend} (expected one of: "
            f"{', '.join(b.value for b in HTTPBackend)})"
        ) from e

    _logger.debug(lambda: f"Using {backend} http backend")
    return _TRANSPORTS[backend](client_cert=client_cert, **kwargs)
