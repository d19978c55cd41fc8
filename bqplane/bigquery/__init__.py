"""
BigQuery endpoints for the transfer pipeline.

This package provides:
- Credential resolution (impersonation, key file, default credentials)
- Query parameterization against the companion address
- The schema codec used by the schema part
- A query-backed data source and a data sink with two write strategies
"""

from .credentials import CredentialResolver
from .factory import BigQueryDataSinkFactory, BigQueryDataSourceFactory
from .parameters import find_parameters, substitute
from .schema import decode_schema, encode_schema
from .session import ClientSession, LazySession
from .sink import BigQueryDataSink
from .source import BigQueryDataSource
from .strategies import (
    AccumulatedDmlStrategy,
    StreamingAppendStrategy,
    WriteStrategy,
    create_write_strategy,
)

__all__ = [
    "CredentialResolver",
    "ClientSession",
    "LazySession",
    "substitute",
    "find_parameters",
    "encode_schema",
    "decode_schema",
    "BigQueryDataSource",
    "BigQueryDataSink",
    "BigQueryDataSourceFactory",
    "BigQueryDataSinkFactory",
    "WriteStrategy",
    "StreamingAppendStrategy",
    "AccumulatedDmlStrategy",
    "create_write_strategy",
]
