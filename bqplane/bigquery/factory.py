"""
Factories creating BigQuery sources and sinks for transfer requests.
"""

import logging
from concurrent.futures import Executor

from ..config import TransferSettings
from ..exceptions import TransferError
from ..params import RequestParamsProvider
from ..spi.address import BIGQUERY_DATA, DataFlowRequest
from ..spi.part import StreamResult
from .credentials import CredentialResolver
from .sink import BigQueryDataSink
from .source import BigQueryDataSource
from .strategies import create_write_strategy


class BigQueryDataSourceFactory:
    """Creates BigQueryDataSource instances for BigQuery source addresses."""

    def __init__(
        self,
        params_provider: RequestParamsProvider,
        settings: TransferSettings | None = None,
        resolver: CredentialResolver | None = None,
    ) -> None:
        self.params_provider = params_provider
        self.settings = settings or TransferSettings()
        self.resolver = resolver or CredentialResolver(self.settings.token_lifetime)
        self.logger = logging.getLogger(self.__class__.__name__)

    def can_handle(self, request: DataFlowRequest) -> bool:
        return request.source_data_address.type == BIGQUERY_DATA

    def validate_request(self, request: DataFlowRequest) -> StreamResult:
        try:
            self.create_source(request)
        except (TransferError, ValueError) as e:
            return StreamResult.error(f"Failed to build BigQueryDataSource: {e}")
        return StreamResult.success()

    def create_source(self, request: DataFlowRequest) -> BigQueryDataSource:
        return BigQueryDataSource(
            params=self.params_provider.provide_source_params(request),
            request_id=request.id,
            name=request.source_data_address.get_string_property("name"),
            resolver=self.resolver,
            labels=self.settings.job_labels,
        )


class BigQueryDataSinkFactory:
    """Creates BigQueryDataSink instances for BigQuery destination addresses."""

    def __init__(
        self,
        params_provider: RequestParamsProvider,
        settings: TransferSettings | None = None,
        resolver: CredentialResolver | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.params_provider = params_provider
        self.settings = settings or TransferSettings()
        self.resolver = resolver or CredentialResolver(self.settings.token_lifetime)
        self.executor = executor
        self.logger = logging.getLogger(self.__class__.__name__)

    def can_handle(self, request: DataFlowRequest) -> bool:
        return request.destination_data_address.type == BIGQUERY_DATA

    def validate_request(self, request: DataFlowRequest) -> StreamResult:
        try:
            self.create_sink(request)
        except (TransferError, ValueError) as e:
            return StreamResult.error(f"Failed to build BigQueryDataSink: {e}")
        return StreamResult.success()

    def create_sink(self, request: DataFlowRequest) -> BigQueryDataSink:
        return BigQueryDataSink(
            params=self.params_provider.provide_sink_params(request),
            request_id=request.id,
            strategy=create_write_strategy(self.settings.write_strategy),
            resolver=self.resolver,
            partition_size=self.settings.partition_size,
            executor=self.executor,
            max_workers=self.settings.max_workers,
            probe_table=self.settings.probe_table,
        )
