"""
Schema codec.

Maps BigQuery schema fields to an ordered `{column name: type tag}` mapping
and serializes it as the payload of the schema part.
"""

import json
from collections.abc import Iterable
from typing import get_args

from google.cloud import bigquery

from ..exceptions import SchemaDecodeError
from ..types import TableSchema, TypeTag

TYPE_TAGS = frozenset(get_args(TypeTag))

# Standard SQL names reported by the API for some legacy types
TYPE_ALIASES = {
    "INT64": "INTEGER",
    "FLOAT64": "FLOAT",
    "BOOL": "BOOLEAN",
    "STRUCT": "RECORD",
    "DECIMAL": "NUMERIC",
    "BIGDECIMAL": "BIGNUMERIC",
}


def normalize_type_tag(type_tag: str) -> str:
    """
    Normalize a column type to its tag in the closed set.

    Raises:
        SchemaDecodeError: If the type is not recognized
    """
    tag = str(type_tag).upper()
    tag = TYPE_ALIASES.get(tag, tag)
    if tag not in TYPE_TAGS:
        raise SchemaDecodeError(f"Unrecognized column type: {type_tag}")
    return tag


def schema_from_fields(fields: Iterable[bigquery.SchemaField]) -> TableSchema:
    """Build a TableSchema from BigQuery schema fields, keeping field order."""
    return {field.name: normalize_type_tag(field.field_type) for field in fields}


def encode_schema(schema: TableSchema) -> bytes:
    """
    Serialize a schema as a UTF-8 JSON object.

    Type tags are normalized first, so aliases such as INT64 are written as
    their tag in the closed set.

    Raises:
        SchemaDecodeError: If a column uses an unknown type
    """
    normalized = {name: normalize_type_tag(type_tag) for name, type_tag in schema.items()}
    return json.dumps(normalized).encode("utf-8")


def decode_schema(payload: bytes) -> TableSchema:
    """
    Deserialize a schema part payload.

    Args:
        payload: UTF-8 JSON object mapping column names to type tags

    Returns:
        TableSchema with column order preserved

    Raises:
        SchemaDecodeError: If the payload is malformed or uses an unknown type tag
    """
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SchemaDecodeError(f"Malformed schema payload: {e}") from e

    if not isinstance(data, dict):
        raise SchemaDecodeError(f"Schema payload must be a JSON object, got {type(data).__name__}")

    schema: TableSchema = {}
    for name, type_tag in data.items():
        if not isinstance(type_tag, str):
            raise SchemaDecodeError(f"Type tag for column '{name}' must be a string")
        schema[name] = normalize_type_tag(type_tag)
    return schema
