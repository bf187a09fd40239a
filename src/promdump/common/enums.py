# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum

from typing_extensions import Self


class CaseInsensitiveStrEnum(str, Enum):
    """
    CaseInsensitiveStrEnum is a custom enumeration class that extends `str` and `Enum` to provide case-insensitive
    lookup functionality for its members.
    """

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}.{self.name}"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.value.lower() == other.lower()
        if isinstance(other, Enum):
            return self.value.lower() == other.value.lower()
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(self.value.lower())

    @classmethod
    def _missing_(cls, value) -> Self | None:
        """
        Handles cases where a value is not directly found in the enumeration.

        Returns:
            The matching enumeration member if a case-insensitive match is found
            for string values; otherwise, returns None.
        """
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class Layout(CaseInsensitiveStrEnum):
    """Logical shape of the output records."""

    RAW = "raw"
    """Native Prometheus values, passed through unchanged."""

    NESTED = "nested"
    """One record per sample, labels kept as a nested mapping."""

    FLAT = "flat"
    """One record per sample, labels merged into the top level of the record."""


class Format(CaseInsensitiveStrEnum):
    """Output encoding of the records."""

    JSON = "json"
    PARQUET = "parquet"


class Compression(CaseInsensitiveStrEnum):
    """Compression applied to the marshaled bytes before they are written."""

    NONE = "none"
    GZIP = "gzip"


class HTTPBackend(CaseInsensitiveStrEnum):
    """HTTP client implementation used to talk to Prometheus."""

    AIOHTTP = "aiohttp"
    HTTPCORE = "httpcore"


class PrometheusValueType(CaseInsensitiveStrEnum):
    """Result types of the Prometheus HTTP API.

    See: https://prometheus.io/docs/prometheus/latest/querying/api/#expression-query-result-formats
    """

    MATRIX = "matrix"
    VECTOR = "vector"
    SCALAR = "scalar"
    STRING = "string"


class ParquetFieldType(CaseInsensitiveStrEnum):
    """Logical column types produced by parquet schema synthesis."""

    TEXT = "text"
    """UTF-8 byte array, dictionary encoded."""

    INTEGER = "integer"
    """INT64, delta encodable."""

    FLOAT = "float"
    """DOUBLE."""
