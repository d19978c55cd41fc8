"""
bqplane

Moves tables between BigQuery and a generic transfer pipeline as a stream
of schema and row parts.
"""

from .bigquery import (
    BigQueryDataSink,
    BigQueryDataSinkFactory,
    BigQueryDataSource,
    BigQueryDataSourceFactory,
)
from .config import TransferSettings, load_settings
from .params import RequestParams, RequestParamsProvider
from .registry import FactoryRegistry, build_registry, register_bigquery
from .spi import DataAddress, DataFlowRequest, StreamResult
from .transfer import run_transfer

__all__ = [
    "BigQueryDataSource",
    "BigQueryDataSink",
    "BigQueryDataSourceFactory",
    "BigQueryDataSinkFactory",
    "TransferSettings",
    "load_settings",
    "RequestParams",
    "RequestParamsProvider",
    "FactoryRegistry",
    "build_registry",
    "register_bigquery",
    "DataAddress",
    "DataFlowRequest",
    "StreamResult",
    "run_transfer",
]
