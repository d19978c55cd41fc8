"""
End-to-end transfers from a fake BigQuery source into a fake BigQuery sink.
"""

from concurrent.futures import ThreadPoolExecutor

from google.auth.exceptions import RefreshError

from bqplane.config import TransferSettings
from bqplane.exceptions import AuthenticationFailure
from bqplane.registry import build_registry
from bqplane.spi.address import DataAddress, DataFlowRequest
from bqplane.spi.part import FailureReason
from bqplane.transfer import run_transfer
from fixtures.fake_bigquery import FakeBigQueryClient, FakeResolver


def make_clients():
    source_client = FakeBigQueryClient(
        schema=[("id", "INTEGER"), ("name", "STRING")],
        rows=[(1, "ada"), (2, None), (3, "grace")],
    )
    sink_client = FakeBigQueryClient(tables=["dst-project.dst_ds.dst_table"])
    return source_client, sink_client


def make_resolver(source_client, sink_client):
    return FakeResolver(
        clients_by_project={"src-project": source_client, "dst-project": sink_client}
    )


class TestRunTransfer:
    def test_streaming_transfer(self, make_request):
        source_client, sink_client = make_clients()
        settings = TransferSettings(partition_size=2)
        registry = build_registry(settings, make_resolver(source_client, sink_client))

        result = run_transfer(make_request(), settings, registry)

        assert result.succeeded
        assert source_client.queries == ["SELECT * FROM `src-project.src_ds.src_table`"]
        assert sorted(sink_client.inserted, key=lambda row: row["id"]) == [
            {"id": "1", "name": "ada"},
            {"id": "2", "name": None},
            {"id": "3", "name": "grace"},
        ]
        assert source_client.closed

    def test_dml_transfer_with_parameterized_query(self, make_request):
        source_client, sink_client = make_clients()
        settings = TransferSettings(write_strategy="dml", partition_size=1)
        registry = build_registry(settings, make_resolver(source_client, sink_client))
        request = make_request(
            source_properties={"query": "SELECT * FROM t WHERE region = '@@region'"},
            destination_properties={"region": "eu"},
        )

        result = run_transfer(request, settings, registry)

        assert result.succeeded
        assert source_client.queries == ["SELECT * FROM t WHERE region = 'eu'"]
        assert sorted(sink_client.queries) == [
            "INSERT INTO `dst-project.dst_ds.dst_table` (`id`, `name`) VALUES (1, 'ada')",
            "INSERT INTO `dst-project.dst_ds.dst_table` (`id`, `name`) VALUES (2, NULL)",
            "INSERT INTO `dst-project.dst_ds.dst_table` (`id`, `name`) VALUES (3, 'grace')",
        ]

    def test_shared_executor(self, make_request):
        source_client, sink_client = make_clients()
        settings = TransferSettings(partition_size=1)
        registry = build_registry(settings, make_resolver(source_client, sink_client))

        with ThreadPoolExecutor(max_workers=3) as executor:
            registry.sink_factory_for(make_request()).executor = executor
            result = run_transfer(make_request(), settings, registry)

        assert result.succeeded
        assert len(sink_client.inserted) == 3

    def test_source_query_failure(self, make_request):
        source_client = FakeBigQueryClient(failing_queries={1: "Syntax error"})
        sink_client = FakeBigQueryClient()
        settings = TransferSettings()
        registry = build_registry(settings, make_resolver(source_client, sink_client))

        result = run_transfer(make_request(), settings, registry)

        assert result.failed
        assert "Syntax error" in result.failure_detail
        assert sink_client.insert_calls == 0

    def test_authentication_failure(self, make_request):
        settings = TransferSettings()
        resolver = FakeResolver(error=AuthenticationFailure("no credentials"))

        result = run_transfer(make_request(), settings, build_registry(settings, resolver))

        assert result.failure_reason is FailureReason.NOT_AUTHORIZED
        assert "no credentials" in result.failure_detail

    def test_impersonation_refused_at_query_time(self, make_request):
        source_client = FakeBigQueryClient(
            auth_error=RefreshError("Unable to acquire impersonated credentials: PERMISSION_DENIED")
        )
        sink_client = FakeBigQueryClient()
        settings = TransferSettings()
        registry = build_registry(settings, make_resolver(source_client, sink_client))
        request = make_request(source_properties={"serviceAccountName": "reader@src-project"})

        result = run_transfer(request, settings, registry)

        assert result.failure_reason is FailureReason.NOT_AUTHORIZED
        assert "PERMISSION_DENIED" in result.failure_detail
        assert source_client.closed

    def test_unsupported_destination(self, make_request):
        source = make_request().source_data_address
        request = DataFlowRequest(
            id="req-3",
            source_data_address=source,
            destination_data_address=DataAddress(type="AzureStorage"),
        )
        settings = TransferSettings()

        result = run_transfer(request, settings, build_registry(settings, FakeResolver()))

        assert result.failed
        assert "Unsupported destination type: AzureStorage" in result.failure_detail
