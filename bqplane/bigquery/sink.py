"""
BigQuery data sink.

Parts may arrive from several worker threads and the schema part may come
after some row parts. Rows seen before the schema are buffered in arrival
order and flushed once the schema is set; later rows are written directly.
"""

import logging
import threading
from collections import deque
from concurrent.futures import Executor

from ..exceptions import AuthenticationFailure, DuplicateSchemaError, RowInsertWarning, TransferError
from ..params import RequestParams
from ..spi.part import Part, StreamResult
from ..spi.sink import ParallelSink
from ..types import SCHEMA_PART_NAME, RowRecord, TableSchema
from .credentials import CredentialResolver
from .operations import table_exists
from .rows import check_columns, decode_row, strip_ordinal
from .schema import decode_schema
from .session import ClientSession, LazySession
from .strategies import StreamingAppendStrategy, WriteStrategy


class BigQueryDataSink(ParallelSink):
    """Writes a part stream into a BigQuery table."""

    def __init__(
        self,
        params: RequestParams,
        request_id: str,
        strategy: WriteStrategy | None = None,
        resolver: CredentialResolver | None = None,
        partition_size: int = 5,
        executor: Executor | None = None,
        max_workers: int = 4,
        probe_table: bool = True,
    ) -> None:
        super().__init__(
            request_id, partition_size=partition_size, executor=executor, max_workers=max_workers
        )
        self.params = params
        self.strategy = strategy or StreamingAppendStrategy()
        self.probe_table = probe_table

        # Guards the session, the schema slot and the row buffer
        self._lock = threading.Lock()
        self.session = LazySession(params, resolver, lock=self._lock)
        self._schema: TableSchema | None = None
        self._pending: deque[tuple[str, RowRecord]] = deque()
        self._probed = False

        self._stats_lock = threading.Lock()
        self.rows_written = 0
        self.warnings: list[RowInsertWarning] = []

        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def schema(self) -> TableSchema | None:
        return self._schema

    @property
    def pending_rows(self) -> int:
        with self._lock:
            return len(self._pending)

    def transfer_parts(self, parts: list[Part]) -> StreamResult:
        """
        Write one partition of parts.

        Args:
            parts: Schema and/or row parts, in any order

        Returns:
            Success, or a failure describing the first fatal error
        """
        try:
            session = self.session.get()
        except AuthenticationFailure as e:
            self.logger.error(f"Cannot initialize BigQuery for {self.request_id}: {e}")
            return StreamResult.not_authorized(str(e))

        self._probe_destination(session)

        for part in parts:
            try:
                self._process_part(session, part)
            except AuthenticationFailure as e:
                self.logger.error(f"Authentication failed writing {part.name}: {e}")
                return StreamResult.not_authorized(str(e))
            except TransferError as e:
                self.logger.error(f"Error writing {part.name} to {self.params.table_path}: {e}")
                return StreamResult.error(
                    f"Error writing data to table {self.params.table_path}: {e}"
                )
            except (OSError, ValueError) as e:
                self.logger.error(f"Cannot process the input part {part.name}: {e}")
                return StreamResult.error(f"Cannot process the input part {part.name}: {e}")
        return StreamResult.success()

    def complete(self) -> StreamResult:
        """Fail the transfer if rows are still waiting for a schema."""
        with self._lock:
            waiting = len(self._pending)
        if waiting:
            message = f"Transfer ended without a schema part; {waiting} rows were not written"
            self.logger.error(message)
            return StreamResult.error(message)

        self.logger.info(
            f"Transfer {self.request_id} complete: {self.rows_written} rows written, "
            f"{len(self.warnings)} rows rejected"
        )
        return StreamResult.success()

    def close(self) -> None:
        self.session.close()

    def _process_part(self, session: ClientSession, part: Part) -> None:
        with part.open_stream() as stream:
            payload = stream.read()

        if part.name == SCHEMA_PART_NAME:
            schema = decode_schema(payload)
            for row_name, record in self._set_schema(schema):
                self._write(session, schema, row_name, record)
            return

        record = strip_ordinal(decode_row(payload))
        schema = self._buffer_or_release(part.name, record)
        if schema is not None:
            self._write(session, schema, part.name, record)

    def _set_schema(self, schema: TableSchema) -> list[tuple[str, RowRecord]]:
        """Install the schema and drain the buffer in one step."""
        with self._lock:
            if self._schema is not None:
                raise DuplicateSchemaError("Schema already set for this transfer")
            self._schema = schema
            buffered = list(self._pending)
            self._pending.clear()

        self.logger.info(f"Schema set, flushing {len(buffered)} buffered rows")
        return buffered

    def _buffer_or_release(self, row_name: str, record: RowRecord) -> TableSchema | None:
        """Buffer the row while the schema is unknown, otherwise return the schema."""
        with self._lock:
            if self._schema is None:
                self._pending.append((row_name, record))
                return None
            return self._schema

    def _write(
        self, session: ClientSession, schema: TableSchema, row_name: str, record: RowRecord
    ) -> None:
        check_columns(record, schema)
        warning = self.strategy.write_row(session, schema, row_name, record)
        with self._stats_lock:
            if warning is None:
                self.rows_written += 1
            else:
                self.warnings.append(warning)

    def _probe_destination(self, session: ClientSession) -> None:
        """Log whether the destination table exists; never affects the transfer."""
        if not self.probe_table:
            return
        with self._lock:
            if self._probed:
                return
            self._probed = True

        if table_exists(session.client, session.table_id):
            self.logger.info(f"Table {self.params.table} exists")
        else:
            self.logger.warning(f"Table {self.params.table} does not exist")
