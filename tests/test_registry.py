"""
Tests for the factory registry.
"""

import pytest

from bqplane.bigquery import BigQueryDataSink, BigQueryDataSource
from bqplane.bigquery.strategies import AccumulatedDmlStrategy
from bqplane.config import TransferSettings
from bqplane.registry import FactoryRegistry, build_registry
from bqplane.spi.address import DataAddress, DataFlowRequest
from fixtures.fake_bigquery import FakeResolver


class TestFactoryRegistry:
    def test_build_registry_lists_bigquery_factories(self):
        registry = build_registry(resolver=FakeResolver())
        assert registry.list_factories() == ["BigQueryDataSourceFactory", "BigQueryDataSinkFactory"]

    def test_creates_source_and_sink(self, make_request):
        settings = TransferSettings(write_strategy="dml", partition_size=3, probe_table=False)
        registry = build_registry(settings, resolver=FakeResolver())
        request = make_request()

        source = registry.create_source(request)
        sink = registry.create_sink(request)

        assert isinstance(source, BigQueryDataSource)
        assert source.params.table_path == "src-project.src_ds.src_table"
        assert isinstance(sink, BigQueryDataSink)
        assert isinstance(sink.strategy, AccumulatedDmlStrategy)
        assert sink.partition_size == 3
        assert sink.probe_table is False

    def test_unsupported_type(self):
        registry = build_registry(resolver=FakeResolver())
        request = DataFlowRequest(
            id="req-2",
            source_data_address=DataAddress(type="AmazonS3"),
            destination_data_address=DataAddress(type="BigQuery"),
        )

        with pytest.raises(ValueError, match="Unsupported source type: AmazonS3"):
            registry.create_source(request)

    def test_empty_registry(self, make_request):
        assert FactoryRegistry().sink_factory_for(make_request()) is None

    def test_validate_request_reports_missing_properties(self, make_request):
        registry = build_registry(resolver=FakeResolver())
        request = make_request(source_properties={"table": ""})

        result = registry.source_factory_for(request).validate_request(request)

        assert result.failed
        assert result.failure_detail.startswith("Failed to build BigQueryDataSource")
