"""
File Content.

Tagged union for the three content states of a File:

    ABSENT  -> nothing loaded or produced yet
    BUFFER  -> fully materialized bytes
    STREAM  -> open, single-pass read stream

Branches in File operate on ``Content.kind`` instead of inspecting
the runtime type of the stored value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pipefile.domain.interfaces.streams import IReadStream

from .exceptions import InvalidContentError


class ContentKind(Enum):
    """Content state of a File."""
    ABSENT = "absent"
    BUFFER = "buffer"
    STREAM = "stream"


@dataclass(frozen=True)
class Content:
    """
    Immutable content value.

    Exactly one of the three kinds holds. ``buffer`` is set only for
    BUFFER, ``stream`` only for STREAM.
    """
    kind: ContentKind
    buffer: Optional[bytes] = None
    stream: Optional[IReadStream] = None

    def __post_init__(self):
        """Validate that the payload matches the kind."""
        if self.kind is ContentKind.BUFFER and self.buffer is None:
            raise InvalidContentError("BUFFER content requires bytes")
        if self.kind is ContentKind.STREAM and self.stream is None:
            raise InvalidContentError("STREAM content requires a read stream")
        if self.kind is ContentKind.ABSENT and (self.buffer is not None or self.stream is not None):
            raise InvalidContentError("ABSENT content cannot carry a payload")

    @classmethod
    def absent(cls) -> "Content":
        return cls(kind=ContentKind.ABSENT)

    @classmethod
    def from_buffer(cls, data: bytes) -> "Content":
        return cls(kind=ContentKind.BUFFER, buffer=bytes(data))

    @classmethod
    def from_stream(cls, stream: IReadStream) -> "Content":
        return cls(kind=ContentKind.STREAM, stream=stream)

    @classmethod
    def coerce(cls, value: Any) -> "Content":
        """
        Normalize a value passed to File.set_content.

        - Content: unchanged
        - falsy (None, "", b""): absent
        - str: UTF-8 encoded buffer
        - bytes / bytearray / memoryview: buffer
        - IReadStream: stream
        - async iterable of bytes: stream (wrapped)

        Raises:
            InvalidContentError: For any other value
        """
        if isinstance(value, Content):
            return value
        if isinstance(value, IReadStream):
            return cls.from_stream(value)
        if not value:
            return cls.absent()
        if isinstance(value, str):
            return cls.from_buffer(value.encode("utf-8"))
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_buffer(bytes(value))
        if hasattr(value, "__aiter__"):
            # Imported here to keep the domain free of infrastructure at import time
            from pipefile.infrastructure.streams.read_streams import IterableReadStream
            return cls.from_stream(IterableReadStream(value))
        raise InvalidContentError(f"Unsupported content type: {type(value).__name__}")

    @property
    def size(self) -> Optional[int]:
        """Byte size when resident, None otherwise."""
        if self.kind is ContentKind.BUFFER:
            return len(self.buffer)
        return None

    def __repr__(self) -> str:
        if self.kind is ContentKind.BUFFER:
            return f"Content(buffer, {len(self.buffer)} bytes)"
        return f"Content({self.kind.value})"


__all__ = [
    "ContentKind",
    "Content",
]
