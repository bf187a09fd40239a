# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


class PromDumpError(Exception):
    """Base class for all exceptions raised by promdump."""


class PromDumpMultiError(PromDumpError):
    """Exception raised when running multiple tasks and one or more fail."""

    def __init__(self, message: str | None, exceptions: list[Exception]) -> None:
        self.exceptions = exceptions

        err_strings = [str(e) for e in exceptions]
        if message:
            super().__init__(f"{message}: {'; '.join(err_strings)}")
        else:
            super().__init__("; ".join(err_strings))


class ConfigurationError(PromDumpError):
    """Exception raised when something fails to configure, or there is a configuration error."""


class QueryError(PromDumpError):
    """Exception raised when a query against a Prometheus source fails."""

    def __init__(self, source: str, message: str, query: str | None = None) -> None:
        self.source = source
        self.query = query
        if query is not None:
            super().__init__(f"{source}: query {query!r} failed: {message}")
        else:
            super().__init__(f"{source}: {message}")


class QueryCancelledError(QueryError):
    """Exception raised when a query is abandoned because the cancellation token was set."""


class QueryMultiError(PromDumpMultiError):
    """Exception raised when one or more sources of a fan-out query fail.

    All successfully fetched data is discarded when this is raised.
    """

    def __init__(self, exceptions: list[Exception]) -> None:
        self.sources = [e.source for e in exceptions if isinstance(e, QueryError)]
        super().__init__(f"{len(exceptions)} source(s) failed", exceptions)


class DataShapeError(PromDumpError):
    """Exception raised when a query result does not have the expected shape."""


class MarshalError(PromDumpError):
    """Generic marshaling error."""


class UnsupportedFormatError(MarshalError):
    """Exception raised when a layout cannot be encoded in the requested format."""


class SchemaError(MarshalError):
    """Generic schema error."""


class UnsupportedTypeError(SchemaError):
    """Exception raised when a record value has a type that has no parquet column type."""


class SchemaMismatchError(SchemaError):
    """Exception raised when a record does not match the schema the writer was bound to."""


class TransportError(PromDumpError):
    """Exception raised when an HTTP transport fails to complete a request."""
