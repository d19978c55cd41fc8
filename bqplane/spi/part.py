"""
Parts and stream results.

A part is one named unit of a transfer. Its content is read exactly once
by the receiving endpoint.
"""

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, BinaryIO

SIZE_UNKNOWN = -1


class Part(ABC):
    """A named byte stream produced by a data source."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def size(self) -> int:
        """Content length in bytes, or SIZE_UNKNOWN."""
        return SIZE_UNKNOWN

    @abstractmethod
    def open_stream(self) -> BinaryIO:
        """Open the content for a single read-through."""
        pass


class BytesPart(Part):
    """In-memory part backed by a byte payload."""

    def __init__(self, name: str, content: bytes) -> None:
        self._name = name
        self._content = content

    @property
    def name(self) -> str:
        return self._name

    def open_stream(self) -> BinaryIO:
        return io.BytesIO(self._content)

    def __repr__(self) -> str:
        return f"BytesPart(name={self._name!r})"


class FailureReason(Enum):
    """Why a stream operation failed."""

    GENERAL_ERROR = "general_error"
    NOT_FOUND = "not_found"
    NOT_AUTHORIZED = "not_authorized"


@dataclass(frozen=True)
class StreamResult:
    """Outcome of opening or transferring a part stream."""

    succeeded: bool
    content: Any = None
    failure_reason: FailureReason | None = None
    failure_detail: str | None = None

    @property
    def failed(self) -> bool:
        return not self.succeeded

    @classmethod
    def success(cls, content: Any = None) -> "StreamResult":
        return cls(succeeded=True, content=content)

    @classmethod
    def error(cls, message: str) -> "StreamResult":
        return cls(
            succeeded=False,
            failure_reason=FailureReason.GENERAL_ERROR,
            failure_detail=message,
        )

    @classmethod
    def not_found(cls, message: str) -> "StreamResult":
        return cls(succeeded=False, failure_reason=FailureReason.NOT_FOUND, failure_detail=message)

    @classmethod
    def not_authorized(cls, message: str) -> "StreamResult":
        return cls(
            succeeded=False, failure_reason=FailureReason.NOT_AUTHORIZED, failure_detail=message
        )
