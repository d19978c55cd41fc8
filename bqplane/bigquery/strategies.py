"""
Write strategies used by the BigQuery sink.

- streaming: one streaming insert per row, row errors become warnings
- dml: one INSERT job per row, a failed job aborts the transfer
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation

from google.api_core.exceptions import GoogleAPICallError
from google.auth.exceptions import GoogleAuthError
from sqlglot import exp

from ..exceptions import (
    AuthenticationFailure,
    ConfigurationError,
    RowInsertWarning,
    RowIntegrityError,
    WriteExecutionFailure,
)
from ..types import RowRecord, TableSchema
from .operations import run_query_job
from .rows import to_json_row
from .session import ClientSession

NUMERIC_TAGS = ("FLOAT", "NUMERIC", "BIGNUMERIC")
TYPED_LITERAL_TAGS = ("DATE", "TIME", "DATETIME", "JSON")


class WriteStrategy(ABC):
    """Persists single rows into the destination table."""

    name = ""

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def write_row(
        self, session: ClientSession, schema: TableSchema, row_name: str, record: RowRecord
    ) -> RowInsertWarning | None:
        """
        Write one row.

        Args:
            session: Client session of the sink
            schema: Schema of the transfer
            row_name: Name of the part the row came from
            record: Row values without the ordinal key

        Returns:
            A warning if the row was rejected without aborting the transfer
        """
        pass


class StreamingAppendStrategy(WriteStrategy):
    """Appends each row with a streaming insert call."""

    name = "streaming"

    def write_row(
        self, session: ClientSession, schema: TableSchema, row_name: str, record: RowRecord
    ) -> RowInsertWarning | None:
        try:
            errors = session.client.insert_rows_json(
                session.table_id, [to_json_row(record, schema)]
            )
        except GoogleAPICallError as e:
            raise WriteExecutionFailure(str(e)) from e
        except GoogleAuthError as e:
            raise AuthenticationFailure(f"Cannot authenticate streaming insert: {e}") from e

        if errors:
            warning = RowInsertWarning(row_name, errors)
            self.logger.warning(str(warning))
            return warning

        self.logger.debug(f"Streaming insert OK: {row_name}")
        return None


class AccumulatedDmlStrategy(WriteStrategy):
    """Inserts each row through an INSERT ... VALUES job."""

    name = "dml"

    def write_row(
        self, session: ClientSession, schema: TableSchema, row_name: str, record: RowRecord
    ) -> RowInsertWarning | None:
        statement = build_insert_statement(session.table_id, schema, record)
        # No dedup: a row delivered twice is inserted twice
        run_query_job(session.client, statement, WriteExecutionFailure)
        self.logger.debug(f"DML insert OK: {row_name}")
        return None


def _string_literal(value: str) -> str:
    return exp.Literal.string(value).sql(dialect="bigquery")


def _identifier(name: str) -> str:
    return exp.to_identifier(name, quoted=True).sql(dialect="bigquery")


def render_value(type_tag: str, value: str | None) -> str:
    """
    Render a string-encoded value as a BigQuery SQL expression.

    Raises:
        RowIntegrityError: If the value does not fit the column type
    """
    if value is None:
        return "NULL"
    if type_tag == "STRING":
        return _string_literal(value)

    try:
        if type_tag == "INTEGER":
            int(value)
            return value
        if type_tag in NUMERIC_TAGS:
            if not Decimal(value).is_finite():
                return f"CAST({_string_literal(value)} AS FLOAT64)"
            return value
        if type_tag == "TIMESTAMP":
            return f"TIMESTAMP_SECONDS({int(float(value))})"
    except (ValueError, InvalidOperation):
        raise RowIntegrityError(f"Value {value!r} is not a valid {type_tag}") from None

    if type_tag == "BOOLEAN":
        if value.lower() not in ("true", "false"):
            raise RowIntegrityError(f"Value {value!r} is not a valid BOOLEAN")
        return value.upper()
    if type_tag in TYPED_LITERAL_TAGS:
        return f"{type_tag} {_string_literal(value)}"
    if type_tag == "BYTES":
        return f"FROM_BASE64({_string_literal(value)})"
    return _string_literal(value)


def build_insert_statement(table_id: str, schema: TableSchema, record: RowRecord) -> str:
    """
    Build a positional INSERT statement for one row.

    Columns follow the schema order; columns absent from the record are NULL.
    """
    columns = ", ".join(_identifier(name) for name in schema)
    values = ", ".join(render_value(type_tag, record.get(name)) for name, type_tag in schema.items())
    return f"INSERT INTO `{table_id}` ({columns}) VALUES ({values})"


WRITE_STRATEGIES: dict[str, type[WriteStrategy]] = {
    StreamingAppendStrategy.name: StreamingAppendStrategy,
    AccumulatedDmlStrategy.name: AccumulatedDmlStrategy,
}


def create_write_strategy(name: str) -> WriteStrategy:
    """
    Create the write strategy registered under `name`.

    Raises:
        ConfigurationError: If no strategy has that name
    """
    strategy_class = WRITE_STRATEGIES.get(name.lower())
    if strategy_class is None:
        raise ConfigurationError(
            f"Unsupported write strategy: {name}. Supported: {list(WRITE_STRATEGIES)}"
        )
    return strategy_class()
