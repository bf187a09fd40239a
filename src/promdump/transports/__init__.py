# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from promdump.transports.aiohttp_transport import AioHttpTransport
from promdump.transports.base_transport import (
    BaseHttpTransport,
    HttpResponse,
    HttpTransportProtocol,
    QueryParamsT,
)
from promdump.transports.httpcore_transport import HttpCoreTransport
from promdump.transports.transport_factory import create_http_transport

__all__ = [
    "AioHttpTransport",
    "BaseHttpTransport",
    "HttpCoreTransport",
    "HttpResponse",
    "HttpTransportProtocol",
    "QueryParamsT",
    "create_http_transport",
]
