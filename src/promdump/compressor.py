# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import gzip
from collections.abc import Callable

from promdump.common.enums import Compression
from promdump.common.exceptions import ConfigurationError

CompressorT = Callable[[bytes], bytes]


def _none(data: bytes) -> bytes:
    return data


def _gzip(data: bytes) -> bytes:
    return gzip.compress(data)


_COMPRESSORS: dict[Compression, CompressorT] = {
    Compression.NONE: _none,
    Compression.GZIP: _gzip,
}


def compress(data: bytes, compression: Compression | str = Compression.NONE) -> bytes:
    """Compress marshaled bytes with the named algorithm.

    Raises:
        ConfigurationError: If the compression is unknown.
    """
    try:
        compression = Compression(compression)
    except ValueError as e:
        raise ConfigurationError(f"unknown compression: {compression}") from e
    return _COMPRESSORS[compression](data)
