# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Parquet schemas for the nested and flat record layouts.

The nested layout always has the same columns, so its schema is fixed. The
flat layout has one column per label, so its schema is synthesized from a
record. Only a single record is inspected; every other record written with
the schema is expected to have exactly the same keys and value types.
"""

import pyarrow as pa
from pydantic import Field

from promdump.common.enums import ParquetFieldType
from promdump.common.exceptions import UnsupportedTypeError
from promdump.common.models import FrozenPromDumpModel
from promdump.model.records import FlatRecord

_ARROW_TYPES: dict[ParquetFieldType, pa.DataType] = {
    ParquetFieldType.TEXT: pa.string(),
    ParquetFieldType.INTEGER: pa.int64(),
    ParquetFieldType.FLOAT: pa.float64(),
}

_PYTHON_TYPES: dict[ParquetFieldType, type] = {
    ParquetFieldType.TEXT: str,
    ParquetFieldType.INTEGER: int,
    ParquetFieldType.FLOAT: float,
}


class SchemaField(FrozenPromDumpModel):
    """A named column and its logical type."""

    name: str
    type: ParquetFieldType

    def matches(self, value: object) -> bool:
        """Whether `value` can be written to this column as is."""
        # bool is a subclass of int but has no column type.
        return type(value) is _PYTHON_TYPES[self.type]

    def to_arrow(self) -> pa.Field:
        return pa.field(self.name, _ARROW_TYPES[self.type], nullable=True)


class RecordSchema(FrozenPromDumpModel):
    """Ordered list of columns of a flat record."""

    fields: list[SchemaField] = Field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def text_columns(self) -> list[str]:
        """Columns written with dictionary encoding."""
        return [f.name for f in self.fields if f.type == ParquetFieldType.TEXT]

    @property
    def integer_columns(self) -> list[str]:
        """Columns that are candidates for delta encoding."""
        return [f.name for f in self.fields if f.type == ParquetFieldType.INTEGER]

    def to_arrow(self) -> pa.Schema:
        return pa.schema([f.to_arrow() for f in self.fields])


def parquet_type_for(value: object) -> ParquetFieldType:
    """Map a record value to its column type.

    Raises:
        UnsupportedTypeError: If the value is not a str, int or float.
    """
    if isinstance(value, bool):
        raise UnsupportedTypeError(
            f"unknown type {type(value).__name__} for parquet schema generation"
        )
    if isinstance(value, str):
        return ParquetFieldType.TEXT
    if isinstance(value, int):
        return ParquetFieldType.INTEGER
    if isinstance(value, float):
        return ParquetFieldType.FLOAT
    raise UnsupportedTypeError(
        f"unknown type {type(value).__name__} for parquet schema generation"
    )


def parquet_schema_for(record: FlatRecord) -> RecordSchema:
    """Synthesize a schema with one column per key of `record`, in key order.

    Raises:
        UnsupportedTypeError: If any value has no column type.
    """
    return RecordSchema(
        fields=[
            SchemaField(name=key, type=parquet_type_for(value))
            for key, value in record.items()
        ]
    )


NESTED_SCHEMA = pa.schema(
    [
        pa.field("metric", pa.string()),
        pa.field("labels", pa.map_(pa.string(), pa.string())),
        pa.field("timestamp", pa.int64()),
        pa.field("value", pa.float64()),
    ]
)
"""Fixed schema of the nested layout."""
