"""
Boundary types shared with the generic transfer pipeline.
"""

from .address import BIGQUERY_DATA, DataAddress, DataFlowRequest
from .part import SIZE_UNKNOWN, BytesPart, FailureReason, Part, StreamResult
from .sink import ParallelSink, partition
from .source import DataSource

__all__ = [
    "BIGQUERY_DATA",
    "DataAddress",
    "DataFlowRequest",
    "SIZE_UNKNOWN",
    "BytesPart",
    "FailureReason",
    "Part",
    "StreamResult",
    "DataSource",
    "ParallelSink",
    "partition",
]
