# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from promdump.model.marshal import (
    check_record,
    flat_records_to_parquet,
    marshal,
    parse_format,
    parse_layout,
    sample_records_to_parquet,
)
from promdump.model.records import (
    RESERVED_KEYS,
    FlatRecord,
    SampleRecord,
    flatten_record,
    flatten_records,
    value_to_sample_records,
    values_to_sample_records,
)
from promdump.model.schema import (
    NESTED_SCHEMA,
    RecordSchema,
    SchemaField,
    parquet_schema_for,
    parquet_type_for,
)

__all__ = [
    "FlatRecord",
    "NESTED_SCHEMA",
    "RESERVED_KEYS",
    "RecordSchema",
    "SampleRecord",
    "SchemaField",
    "check_record",
    "flat_records_to_parquet",
    "flatten_record",
    "flatten_records",
    "marshal",
    "parquet_schema_for",
    "parquet_type_for",
    "parse_format",
    "parse_layout",
    "sample_records_to_parquet",
    "value_to_sample_records",
    "values_to_sample_records",
]
