# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Render query results in one of the supported layout and format combinations.

+--------+-------------------------+-----------------------------------+
| layout | json                    | parquet                           |
+========+=========================+===================================+
| raw    | native Prometheus JSON  | not supported                     |
| nested | array of sample records | fixed schema                      |
| flat   | array of flat records   | schema synthesized from record 0  |
+--------+-------------------------+-----------------------------------+
"""

from collections.abc import Callable, Sequence

import orjson
import pyarrow as pa
import pyarrow.parquet as pq

from promdump.common.enums import Format, Layout
from promdump.common.exceptions import (
    ConfigurationError,
    SchemaMismatchError,
    UnsupportedFormatError,
)
from promdump.common.logging import PromDumpLogger
from promdump.common.models import TimeSeriesValue
from promdump.model.records import (
    FlatRecord,
    SampleRecord,
    flatten_records,
    values_to_sample_records,
)
from promdump.model.schema import NESTED_SCHEMA, RecordSchema, parquet_schema_for

_logger = PromDumpLogger(__name__)

MarshalFuncT = Callable[[Sequence[TimeSeriesValue]], bytes]


def _write_parquet(table: pa.Table, dictionary_columns: list[str]) -> bytes:
    sink = pa.BufferOutputStream()
    with pq.ParquetWriter(
        sink, table.schema, use_dictionary=dictionary_columns or False
    ) as writer:
        writer.write_table(table)
    return sink.getvalue().to_pybytes()


def check_record(schema: RecordSchema, record: FlatRecord, index: int) -> None:
    """Check that a record has exactly the keys and value types of `schema`.

    Raises:
        SchemaMismatchError: Naming the record index and the first deviation found.
    """
    names = schema.names
    if set(record) != set(names):
        extra = sorted(set(record) - set(names))
        missing = sorted(set(names) - set(record))
        raise SchemaMismatchError(
            f"record {index} does not match the parquet schema: "
            f"unexpected keys {extra}, missing keys {missing}"
        )
    for field in schema.fields:
        value = record[field.name]
        if not field.matches(value):
            raise SchemaMismatchError(
                f"record {index} does not match the parquet schema: "
                f"{field.name!r} is {type(value).__name__}, expected {field.type}"
            )


def flat_records_to_parquet(records: Sequence[FlatRecord]) -> bytes:
    """Write flat records with a schema synthesized from the first record.

    Raises:
        UnsupportedTypeError: If the first record has a value with no column type.
        SchemaMismatchError: If any record deviates from the synthesized schema.
    """
    schema = parquet_schema_for(records[0]) if records else RecordSchema()
    for index, record in enumerate(records):
        check_record(schema, record, index)

    arrow_schema = schema.to_arrow()
    table = pa.Table.from_pydict(
        {name: [record[name] for record in records] for name in schema.names},
        schema=arrow_schema,
    )
    _logger.debug(
        lambda: f"Writing {len(records)} flat record(s) with {len(schema.fields)} column(s)"
    )
    return _write_parquet(table, schema.text_columns)


def sample_records_to_parquet(records: Sequence[SampleRecord]) -> bytes:
    """Write sample records with the fixed nested schema."""
    table = pa.Table.from_pylist(
        [
            {
                "metric": record.metric,
                "labels": list(record.labels.items()),
                "timestamp": record.timestamp,
                "value": record.value,
            }
            for record in records
        ],
        schema=NESTED_SCHEMA,
    )
    return _write_parquet(table, ["metric"])


def _raw_json(values: Sequence[TimeSeriesValue]) -> bytes:
    return orjson.dumps([value.to_wire() for value in values])


def _raw_parquet(values: Sequence[TimeSeriesValue]) -> bytes:
    raise UnsupportedFormatError(
        "serializing raw prometheus values to parquet is not supported"
    )


def _nested_json(values: Sequence[TimeSeriesValue]) -> bytes:
    return orjson.dumps(
        [record.model_dump() for record in values_to_sample_records(values)]
    )


def _nested_parquet(values: Sequence[TimeSeriesValue]) -> bytes:
    return sample_records_to_parquet(values_to_sample_records(values))


def _flat_json(values: Sequence[TimeSeriesValue]) -> bytes:
    return orjson.dumps(flatten_records(values_to_sample_records(values)))


def _flat_parquet(values: Sequence[TimeSeriesValue]) -> bytes:
    return flat_records_to_parquet(flatten_records(values_to_sample_records(values)))


_MARSHALERS: dict[tuple[Layout, Format], MarshalFuncT] = {
    (Layout.RAW, Format.JSON): _raw_json,
    (Layout.RAW, Format.PARQUET): _raw_parquet,
    (Layout.NESTED, Format.JSON): _nested_json,
    (Layout.NESTED, Format.PARQUET): _nested_parquet,
    (Layout.FLAT, Format.JSON): _flat_json,
    (Layout.FLAT, Format.PARQUET): _flat_parquet,
}


def parse_layout(layout: Layout | str) -> Layout:
    try:
        return Layout(layout)
    except ValueError as e:
        raise ConfigurationError(f"unknown layout: {layout}") from e


def parse_format(format: Format | str) -> Format:
    try:
        return Format(format)
    except ValueError as e:
        raise ConfigurationError(f"unknown format: {format}") from e


def marshal(
    values: Sequence[TimeSeriesValue], layout: Layout | str, format: Format | str
) -> bytes:
    """Render `values` in the given layout and format.

    Args:
        values: Query results, in output order. Not modified.
        layout: raw, nested or flat (case-insensitive).
        format: json or parquet (case-insensitive).

    Raises:
        ConfigurationError: If the layout or format is unknown.
        UnsupportedFormatError: For raw values as parquet.
        DataShapeError: If a nested or flat layout is asked of a non-matrix value.
        SchemaError: If flat records cannot be written as parquet.
    """
    key = (parse_layout(layout), parse_format(format))
    _logger.debug(lambda: f"Marshaling {len(values)} value(s) as {key[0]} {key[1]}")
    return _MARSHALERS[key](values)
