"""
Stream Interfaces.

Abstractions for the byte streams a File reads from and drains into.
Implementations live in pipefile.infrastructure.streams.

- IReadStream: single-pass async source of bytes
- IByteSink: async destination of bytes
- IWriteStream: sink backed by a file write that can finish or abort
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional


ErrorHandler = Callable[[BaseException], None]
FinishCallback = Callable[[], None]


class IByteSink(ABC):
    """
    Async byte destination.

    ``write`` may be called any number of times; ``end`` writes an optional
    final chunk and closes the sink.
    """

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """Write one chunk."""
        pass

    @abstractmethod
    async def end(self, data: Optional[bytes] = None) -> None:
        """Write an optional last chunk and close the sink."""
        pass


class IReadStream(ABC):
    """
    Single-pass async byte source.

    Once drained (or failed), ``consumed`` is True and the stream cannot
    be piped again.
    """

    @property
    @abstractmethod
    def consumed(self) -> bool:
        """True once the stream reached EOF, failed, or was closed."""
        pass

    @abstractmethod
    def on_error(self, handler: Optional[ErrorHandler]) -> "IReadStream":
        """Attach the handler that receives read errors."""
        pass

    @abstractmethod
    async def read_chunk(self) -> bytes:
        """Return the next chunk, or b"" at end of stream."""
        pass

    @abstractmethod
    async def pipe(self, sink: IByteSink, end: bool = True) -> IByteSink:
        """
        Drain every chunk into ``sink`` in order.

        Args:
            sink: Destination
            end: Close the sink when the stream ends

        Returns:
            The sink

        Raises:
            StreamConsumedError: If the stream was already drained
            FileReadError: On read failure when no handler is attached
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release the underlying resource."""
        pass


class IWriteStream(IByteSink):
    """
    Sink writing to a destination path.

    Reports completion through ``finished`` and finish callbacks, and
    failure through ``error`` and the attached error handler.
    """

    @property
    @abstractmethod
    def path(self) -> str:
        """Final path written (may differ from the requested one)."""
        pass

    @property
    @abstractmethod
    def finished(self) -> bool:
        """True once all bytes are flushed and the file is in place."""
        pass

    @property
    @abstractmethod
    def error(self) -> Optional[BaseException]:
        """Error that stopped the write, if any."""
        pass

    @property
    @abstractmethod
    def bytes_written(self) -> int:
        """Number of bytes accepted so far."""
        pass

    @abstractmethod
    def on_finish(self, callback: FinishCallback) -> "IWriteStream":
        """Register a callback fired once when the write finishes."""
        pass

    @abstractmethod
    def on_error(self, handler: Optional[ErrorHandler]) -> "IWriteStream":
        """Attach the handler that receives write errors."""
        pass

    @abstractmethod
    async def abort(self) -> None:
        """Stop the write and remove partial output."""
        pass
