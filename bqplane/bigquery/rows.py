"""
Row record encoding.

Rows travel as JSON objects of string values plus the reserved ordinal key.
"""

import base64
import datetime
import json
from typing import Any

from ..exceptions import RowIntegrityError
from ..types import ROW_ORDINAL_KEY, RowRecord, TableSchema


def to_wire_value(value: Any) -> str | None:
    """
    Render a query result value as its string representation.

    TIMESTAMP values (timezone-aware datetimes) become seconds since epoch.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            return str(value.timestamp())
        return value.isoformat()
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def build_row_record(ordinal: int, columns: list[str], values: tuple) -> RowRecord:
    """Pair result values with column names and tag the row with its ordinal."""
    record: RowRecord = {ROW_ORDINAL_KEY: str(ordinal)}
    for column, value in zip(columns, values):
        record[column] = to_wire_value(value)
    return record


def encode_row(record: RowRecord) -> bytes:
    return json.dumps(record).encode("utf-8")


def decode_row(payload: bytes) -> RowRecord:
    """
    Deserialize a row part payload.

    Raises:
        RowIntegrityError: If the payload is not a JSON object of string values
    """
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RowIntegrityError(f"Malformed row payload: {e}") from e

    if not isinstance(data, dict):
        raise RowIntegrityError("Row payload must be a JSON object")
    for key, value in data.items():
        if value is not None and not isinstance(value, str):
            raise RowIntegrityError(f"Value for column '{key}' must be a string or null")
    return data


def strip_ordinal(record: RowRecord) -> RowRecord:
    """Return the record without the reserved ordinal key."""
    return {key: value for key, value in record.items() if key != ROW_ORDINAL_KEY}


def check_columns(record: RowRecord, schema: TableSchema) -> None:
    """
    Ensure every key of the record is a schema column.

    Raises:
        RowIntegrityError: If the record has unknown columns
    """
    unknown = [key for key in record if key not in schema]
    if unknown:
        raise RowIntegrityError(f"Row has columns not present in the schema: {unknown}")


def to_json_row(record: RowRecord, schema: TableSchema) -> dict[str, Any]:
    """Convert a record to the JSON row accepted by streaming inserts."""
    row: dict[str, Any] = {}
    for column, value in record.items():
        type_tag = schema.get(column)
        if value is None:
            row[column] = None
        elif type_tag == "TIMESTAMP":
            row[column] = float(value)
        elif type_tag == "RECORD":
            row[column] = json.loads(value)
        else:
            row[column] = value
    return row
