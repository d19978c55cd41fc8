"""
Tests for the parallel sink base class.
"""

import threading

import pytest

from bqplane.spi.part import BytesPart, StreamResult
from bqplane.spi.sink import ParallelSink, partition
from bqplane.spi.source import DataSource


class StaticSource(DataSource):
    def __init__(self, parts=None, result=None):
        self.parts = parts or []
        self.result = result
        self.closed = False

    def open_part_stream(self):
        if self.result is not None:
            return self.result
        return StreamResult.success(iter(self.parts))

    def close(self):
        self.closed = True


class RecordingSink(ParallelSink):
    """Sink remembering which thread handled which part."""

    def __init__(self, fail_on=None, **kwargs):
        super().__init__("req-1", **kwargs)
        self.fail_on = fail_on
        self.seen = []
        self.threads = set()
        self._lock = threading.Lock()

    def transfer_parts(self, parts):
        with self._lock:
            self.seen.extend(part.name for part in parts)
            self.threads.add(threading.get_ident())
        for part in parts:
            if part.name == self.fail_on:
                return StreamResult.error(f"failed on {part.name}")
        return StreamResult.success()


def make_parts(count):
    return [BytesPart(f"row {i}", b"{}") for i in range(count)]


class TestPartition:
    def test_partition_sizes(self):
        chunks = list(partition(make_parts(7), 3))
        assert [len(chunk) for chunk in chunks] == [3, 3, 1]

    def test_partition_empty(self):
        assert list(partition([], 3)) == []


class TestParallelSink:
    def test_all_parts_delivered(self):
        sink = RecordingSink(partition_size=2, max_workers=3)
        source = StaticSource(make_parts(9))

        result = sink.transfer(source)

        assert result.succeeded
        assert sorted(sink.seen) == sorted(f"row {i}" for i in range(9))
        assert source.closed

    def test_first_failure_is_reported(self):
        sink = RecordingSink(fail_on="row 4", partition_size=2)

        result = sink.transfer(StaticSource(make_parts(6)))

        assert result.failed
        assert result.failure_detail == "failed on row 4"

    def test_source_failure_is_returned(self):
        sink = RecordingSink()
        failure = StreamResult.error("query failed")

        assert sink.transfer(StaticSource(result=failure)) is failure
        assert sink.seen == []

    def test_exception_in_worker_becomes_failure(self):
        class ExplodingSink(RecordingSink):
            def transfer_parts(self, parts):
                raise RuntimeError("boom")

        result = ExplodingSink().transfer(StaticSource(make_parts(1)))

        assert result.failed
        assert "boom" in result.failure_detail

    def test_invalid_partition_size(self):
        with pytest.raises(ValueError, match="Partition size must be positive"):
            RecordingSink(partition_size=0)

    def test_exception_while_opening_stream_becomes_failure(self):
        class BrokenSource(StaticSource):
            def open_part_stream(self):
                raise RuntimeError("token refresh failed")

        sink = RecordingSink()
        source = BrokenSource()

        result = sink.transfer(source)

        assert result.failed
        assert "token refresh failed" in result.failure_detail
        assert source.closed
        assert sink.seen == []

    def test_close_hook_runs_after_transfer(self):
        class ClosingSink(RecordingSink):
            closed = False

            def close(self):
                self.closed = True

        sink = ClosingSink()

        assert sink.transfer(StaticSource(make_parts(2))).succeeded
        assert sink.closed
