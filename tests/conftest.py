"""
Pytest configuration and shared fixtures for bqplane tests.
"""

import json

import pytest

from bqplane.params import RequestParams
from bqplane.spi.address import BIGQUERY_DATA, DataAddress, DataFlowRequest
from bqplane.spi.part import BytesPart
from fixtures.fake_bigquery import FakeBigQueryClient, FakeResolver


@pytest.fixture(autouse=True)
def clear_bqplane_env(monkeypatch):
    """Keep BQPLANE_* variables from the developer environment out of tests."""
    for name in (
        "BQPLANE_WRITE_STRATEGY",
        "BQPLANE_PARTITION_SIZE",
        "BQPLANE_MAX_WORKERS",
        "BQPLANE_TOKEN_LIFETIME",
        "BQPLANE_PROBE_TABLE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_request():
    """Build a BigQuery -> BigQuery transfer request."""

    def _make(source_properties=None, destination_properties=None, request_id="req-1"):
        source = {"project": "src-project", "dataset": "src_ds", "table": "src_table"}
        source.update(source_properties or {})
        destination = {"project": "dst-project", "dataset": "dst_ds", "table": "dst_table"}
        destination.update(destination_properties or {})
        return DataFlowRequest(
            id=request_id,
            source_data_address=DataAddress(type=BIGQUERY_DATA, properties=source),
            destination_data_address=DataAddress(type=BIGQUERY_DATA, properties=destination),
        )

    return _make


@pytest.fixture
def sink_params(make_request):
    """Destination parameters for dst-project.dst_ds.dst_table."""
    return RequestParams(
        project="dst-project", dataset="dst_ds", table="dst_table", request=make_request()
    )


@pytest.fixture
def sink_client():
    """Fake client for the destination with an existing table."""
    return FakeBigQueryClient(tables=["dst-project.dst_ds.dst_table"])


@pytest.fixture
def sink_resolver(sink_client):
    return FakeResolver(sink_client)


@pytest.fixture
def schema_part():
    """Build a schema part from an ordered mapping."""

    def _make(schema):
        return BytesPart("schema", json.dumps(schema).encode("utf-8"))

    return _make


@pytest.fixture
def row_part():
    """Build a row part with the reserved ordinal key."""

    def _make(ordinal, values):
        record = {"__row__": str(ordinal)}
        record.update(values)
        return BytesPart(f"row {ordinal}", json.dumps(record).encode("utf-8"))

    return _make
