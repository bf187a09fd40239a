# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import ssl
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from types import TracebackType
from typing import Protocol, runtime_checkable

from typing_extensions import Self

from promdump.common.environment import Environment
from promdump.common.exceptions import ConfigurationError
from promdump.common.logging import PromDumpLoggerMixin

QueryParamsT = Sequence[tuple[str, str]]
"""Query parameters as ordered pairs, so repeated keys (e.g. `match[]`) are preserved."""


@dataclass
class HttpResponse:
    """A fully read HTTP response."""

    status: int
    content: bytes
    reason: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding, errors="replace")


@runtime_checkable
class HttpTransportProtocol(Protocol):
    """Protocol for the request/response HTTP transport used to talk to Prometheus."""

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    async def get(self, url: str, params: QueryParamsT | None = None) -> HttpResponse: ...

    async def close(self) -> None: ...


class BaseHttpTransport(PromDumpLoggerMixin, ABC):
    """Base class for the HTTP transport backends.

    Handles TLS setup (including an optional client certificate) and the common
    request headers. Subclasses open their connection pool in `open()` and
    release it in `close()`.
    """

    def __init__(
        self,
        client_cert: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.client_cert = client_cert
        self.timeout = timeout if timeout is not None else Environment.HTTP.TIMEOUT
        self.connect_timeout = (
            connect_timeout
            if connect_timeout is not None
            else Environment.HTTP.CONNECT_TIMEOUT
        )
        self.headers: dict[str, str] = {
            "User-Agent": Environment.HTTP.USER_AGENT,
            "Accept": "application/json",
        }

    def create_ssl_context(self) -> ssl.SSLContext:
        """Create the SSL context, loading the client certificate if one was given.

        The certificate file may contain the private key as well (PEM bundle).

        Raises:
            ConfigurationError: If the client certificate cannot be loaded.
        """
        ssl_context = ssl.create_default_context()
        if self.client_cert:
            try:
                ssl_context.load_cert_chain(self.client_cert)
            except (OSError, ssl.SSLError) as e:
                raise ConfigurationError(
                    f"failed to load client certificate {self.client_cert!r}: {e}"
                ) from e
            self.debug(lambda: f"Loaded client certificate {self.client_cert}")
        return ssl_context

    async def __aenter__(self) -> Self:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @abstractmethod
    async def open(self) -> None:
        """Open the underlying connection pool."""

    @abstractmethod
    async def close(self) -> None:
        """Close the underlying connection pool. Safe to call more than once."""

    @abstractmethod
    async def get(self, url: str, params: QueryParamsT | None = None) -> HttpResponse:
        """Send a GET request and read the whole response.

        Raises:
            TransportError: If the request could not be completed.
        """
