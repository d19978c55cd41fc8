"""
Data source base class.
"""

from abc import ABC, abstractmethod

from .part import StreamResult


class DataSource(ABC):
    """Produces a finite, non-restartable stream of parts."""

    @abstractmethod
    def open_part_stream(self) -> StreamResult:
        """Open the part stream; the result content is an iterator of parts."""
        pass

    def close(self) -> None:
        """Release any resources held by the source."""
        pass
