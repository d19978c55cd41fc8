"""
Type definitions for the part-stream wire shapes.
"""

from typing import Literal

# Reserved key carrying the row ordinal in a row part
ROW_ORDINAL_KEY = "__row__"

# Name of the part holding the serialized table schema
SCHEMA_PART_NAME = "schema"

# Closed set of column type tags carried by the schema part
TypeTag = Literal[
    "STRING",
    "BYTES",
    "INTEGER",
    "FLOAT",
    "NUMERIC",
    "BIGNUMERIC",
    "BOOLEAN",
    "TIMESTAMP",
    "DATE",
    "TIME",
    "DATETIME",
    "GEOGRAPHY",
    "JSON",
    "RECORD",
    "INTERVAL",
    "RANGE",
]

WriteStrategyName = Literal["streaming", "dml"]

# Ordered column name -> type tag
TableSchema = dict[str, str]

# Column name -> string-encoded value (None for SQL NULL)
RowRecord = dict[str, str | None]


def row_part_name(ordinal: int) -> str:
    """Name of the part carrying the row with the given ordinal."""
    return f"row {ordinal}"
