"""
BigQuery data source.

Runs the configured query and streams the result as a schema part
followed by one part per row.
"""

import logging
from collections.abc import Iterator

from ..exceptions import AuthenticationFailure, QueryExecutionFailure, TransferError
from ..params import RequestParams
from ..spi.part import BytesPart, Part, StreamResult
from ..spi.source import DataSource
from ..types import SCHEMA_PART_NAME, TableSchema, row_part_name
from .credentials import CredentialResolver
from .operations import run_query_job
from .parameters import substitute
from .rows import build_row_record, encode_row
from .schema import encode_schema, schema_from_fields
from .session import LazySession


class BigQueryDataSource(DataSource):
    """Reads a query result from BigQuery as a part stream."""

    def __init__(
        self,
        params: RequestParams,
        request_id: str,
        name: str | None = None,
        resolver: CredentialResolver | None = None,
        labels: dict[str, str] | None = None,
    ) -> None:
        self.params = params
        self.request_id = request_id
        self.name = name
        self.labels = labels or {}
        self.session = LazySession(params, resolver)
        self.logger = logging.getLogger(self.__class__.__name__)

    def open_part_stream(self) -> StreamResult:
        """
        Execute the query and return a lazy stream of parts.

        Returns:
            Success with an iterator of parts, or a failure carrying the error detail
        """
        self.logger.info(f"Opening part stream for {self.request_id}: project={self.params.project}")
        try:
            session = self.session.get()
            query = self.build_query()
            rows = run_query_job(session.client, query, QueryExecutionFailure, self.labels)
            schema = schema_from_fields(rows.schema)
        except AuthenticationFailure as e:
            self.logger.error(f"Authentication failed for {self.request_id}: {e}")
            return StreamResult.not_authorized(str(e))
        except TransferError as e:
            self.logger.error(f"Query failed for {self.request_id}: {e}")
            return StreamResult.error(str(e))

        self.logger.info(f"Query executed: rows = {rows.total_rows}")
        return StreamResult.success(self._parts(schema, rows))

    def build_query(self) -> str:
        """
        Build the executable query.

        `@@name` tokens are resolved against the destination address of the
        originating request. Without a query the whole table is selected.
        """
        template = self.params.query
        if not template:
            return f"SELECT * FROM `{self.params.table_path}`"

        request = self.params.request
        if request is None:
            return substitute(template, lambda name: None)
        return substitute(template, request.destination_data_address.get_string_property)

    def _parts(self, schema: TableSchema, rows) -> Iterator[Part]:
        yield BytesPart(SCHEMA_PART_NAME, encode_schema(schema))

        columns = list(schema)
        for ordinal, row in enumerate(rows):
            record = build_row_record(ordinal, columns, tuple(row.values()))
            yield BytesPart(row_part_name(ordinal), encode_row(record))

    def close(self) -> None:
        self.session.close()
