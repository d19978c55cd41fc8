"""
Factory registry for data sources and sinks.

This module provides a registry that holds source and sink factories and
picks the first one able to handle a transfer request.
"""

import logging
from typing import Any

from .bigquery import BigQueryDataSinkFactory, BigQueryDataSourceFactory, CredentialResolver
from .config import TransferSettings
from .params import RequestParamsProvider
from .spi.address import DataFlowRequest


class FactoryRegistry:
    """Registry for managing data source and sink factories."""

    def __init__(self):
        self._source_factories: list[Any] = []
        self._sink_factories: list[Any] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    def register_source_factory(self, factory: Any) -> None:
        """
        Register a data source factory.

        Args:
            factory: Object with `can_handle(request)` and `create_source(request)`
        """
        self._source_factories.append(factory)
        self.logger.debug(f"Registered source factory: {factory.__class__.__name__}")

    def register_sink_factory(self, factory: Any) -> None:
        """
        Register a data sink factory.

        Args:
            factory: Object with `can_handle(request)` and `create_sink(request)`
        """
        self._sink_factories.append(factory)
        self.logger.debug(f"Registered sink factory: {factory.__class__.__name__}")

    def source_factory_for(self, request: DataFlowRequest) -> Any | None:
        """Get the first source factory that can handle the request."""
        for factory in self._source_factories:
            if factory.can_handle(request):
                return factory
        return None

    def sink_factory_for(self, request: DataFlowRequest) -> Any | None:
        """Get the first sink factory that can handle the request."""
        for factory in self._sink_factories:
            if factory.can_handle(request):
                return factory
        return None

    def create_source(self, request: DataFlowRequest):
        """
        Create a data source for the request.

        Raises:
            ValueError: If no factory handles the source address type
        """
        factory = self.source_factory_for(request)
        if factory is None:
            raise ValueError(
                f"Unsupported source type: {request.source_data_address.type}. "
                f"Supported factories: {self.list_factories()}"
            )
        return factory.create_source(request)

    def create_sink(self, request: DataFlowRequest):
        """
        Create a data sink for the request.

        Raises:
            ValueError: If no factory handles the destination address type
        """
        factory = self.sink_factory_for(request)
        if factory is None:
            raise ValueError(
                f"Unsupported destination type: {request.destination_data_address.type}. "
                f"Supported factories: {self.list_factories()}"
            )
        return factory.create_sink(request)

    def list_factories(self) -> list[str]:
        """Get the class names of all registered factories."""
        return [
            factory.__class__.__name__
            for factory in self._source_factories + self._sink_factories
        ]


def register_bigquery(
    registry: FactoryRegistry,
    settings: TransferSettings | None = None,
    resolver: CredentialResolver | None = None,
) -> FactoryRegistry:
    """
    Register the BigQuery source and sink factories.

    Args:
        registry: Registry to extend
        settings: Transfer settings (defaults apply when omitted)
        resolver: Credential resolver shared by both factories

    Returns:
        The same registry, for chaining
    """
    settings = settings or TransferSettings()
    provider = RequestParamsProvider()
    registry.logger.info("BigQuery extension initialize")
    registry.register_source_factory(BigQueryDataSourceFactory(provider, settings, resolver))
    registry.register_sink_factory(BigQueryDataSinkFactory(provider, settings, resolver))
    return registry


def build_registry(
    settings: TransferSettings | None = None, resolver: CredentialResolver | None = None
) -> FactoryRegistry:
    """Create a registry with the BigQuery factories registered."""
    return register_bigquery(FactoryRegistry(), settings, resolver)
