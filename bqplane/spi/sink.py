"""
Parallel sink base class.

Splits a part stream into fixed-size partitions and hands each partition to
a worker thread, so a concrete sink sees its parts from several threads at
once and in no guaranteed order.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from concurrent.futures import Executor, ThreadPoolExecutor
from itertools import islice

from .part import Part, StreamResult
from .source import DataSource


def partition(parts: Iterable[Part], size: int) -> Iterator[list[Part]]:
    """Yield consecutive lists of at most `size` parts."""
    iterator = iter(parts)
    while True:
        chunk = list(islice(iterator, size))
        if not chunk:
            return
        yield chunk


class ParallelSink(ABC):
    """
    Sink that transfers partitions of parts concurrently.

    Subclasses implement `transfer_parts`, which may be called from several
    worker threads at the same time.
    """

    def __init__(
        self,
        request_id: str,
        partition_size: int = 5,
        executor: Executor | None = None,
        max_workers: int = 4,
    ) -> None:
        if partition_size <= 0:
            raise ValueError("Partition size must be positive")
        self.request_id = request_id
        self.partition_size = partition_size
        self.max_workers = max_workers
        self._executor = executor
        self.logger = logging.getLogger(self.__class__.__name__)

    def transfer(self, source: DataSource) -> StreamResult:
        """
        Pull every part from `source` and deliver them through `transfer_parts`.

        Args:
            source: Data source to read from

        Returns:
            Success if every partition succeeded, otherwise the first failure
        """
        try:
            opened = source.open_part_stream()
        except Exception as e:
            self.logger.error(f"Cannot open part stream for {self.request_id}: {e}")
            source.close()
            self.close()
            return StreamResult.error(f"Error opening part stream: {e}")
        if opened.failed:
            self.logger.error(f"Cannot open part stream for {self.request_id}: {opened.failure_detail}")
            source.close()
            self.close()
            return opened

        executor = self._executor
        owns_executor = executor is None
        if owns_executor:
            executor = ThreadPoolExecutor(max_workers=self.max_workers)

        try:
            futures = [
                executor.submit(self.transfer_parts, chunk)
                for chunk in partition(opened.content, self.partition_size)
            ]
            results = [future.result() for future in futures]
        except Exception as e:
            self.logger.error(f"Transfer {self.request_id} failed: {e}")
            return StreamResult.error(f"Error transferring data: {e}")
        finally:
            if owns_executor:
                executor.shutdown(wait=True)
            source.close()
            self.close()

        for result in results:
            if result.failed:
                return result
        return self.complete()

    def complete(self) -> StreamResult:
        """Hook called once every partition succeeded."""
        return StreamResult.success()

    def close(self) -> None:
        """Release resources held by the sink; called once the transfer ends."""
        pass

    @abstractmethod
    def transfer_parts(self, parts: list[Part]) -> StreamResult:
        """Transfer one partition of parts."""
        pass
