"""
Read Stream Implementations.

- LazyFileReadStream: reads a path through aiofiles, opened on first chunk
- IterableReadStream: adapts any async iterable of bytes
"""

import logging
from typing import Any, AsyncIterable, AsyncIterator, Optional

import aiofiles

from pipefile.config import DEFAULT_CHUNK_SIZE
from pipefile.domain.interfaces.streams import ErrorHandler
from pipefile.domain.models.file.exceptions import FileReadError

from .base import BaseReadStream

logger = logging.getLogger(__name__)


class LazyFileReadStream(BaseReadStream):
    """
    Lazy, single-pass read of a file on disk.

    The OS file is not opened at construction, only when the first chunk
    is requested, and it is closed at EOF or on the first error.

    Usage:
        stream = LazyFileReadStream("data.csv", error_handler=print)
        await stream.pipe(sink)
    """

    def __init__(
        self,
        path: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        error_handler: Optional[ErrorHandler] = None,
    ):
        super().__init__(error_handler)
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive: {chunk_size}")
        self._path = str(path)
        self._chunk_size = chunk_size
        self._handle = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def opened(self) -> bool:
        return self._handle is not None or self._consumed

    async def _anext_chunk(self) -> bytes:
        try:
            if self._handle is None:
                self._handle = await aiofiles.open(self._path, "rb")
                logger.debug(f"Opened lazy read of {self._path}")
            return await self._handle.read(self._chunk_size)
        except OSError as e:
            raise FileReadError(
                f"Cannot read {self._path}: {e}",
                path=self._path,
                cause=e,
            ) from e

    async def _arelease(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            await handle.close()

    def __repr__(self) -> str:
        return f"LazyFileReadStream({self._path!r})"


class IterableReadStream(BaseReadStream):
    """
    Read stream over an async iterable of bytes.

    Text chunks are UTF-8 encoded. Failures of the underlying iterator are
    reported as FileReadError so they reach the same error channel as
    disk reads.
    """

    def __init__(self, source: AsyncIterable[Any], error_handler: Optional[ErrorHandler] = None):
        super().__init__(error_handler)
        self._source = source
        self._iterator: Optional[AsyncIterator[Any]] = None

    async def _anext_chunk(self) -> bytes:
        if self._iterator is None:
            self._iterator = self._source.__aiter__()

        # An empty chunk is not end of stream
        chunk = b""
        while not chunk:
            try:
                chunk = await self._iterator.__anext__()
            except StopAsyncIteration:
                return b""
            except FileReadError:
                raise
            except Exception as e:
                raise FileReadError(f"Source stream failed: {e}", cause=e) from e

            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            elif isinstance(chunk, (bytearray, memoryview)):
                chunk = bytes(chunk)
            elif not isinstance(chunk, bytes):
                raise FileReadError(f"Stream produced {type(chunk).__name__}, expected bytes")
        return chunk

    async def _arelease(self) -> None:
        aclose = getattr(self._iterator, "aclose", None)
        if aclose is not None:
            await aclose()

    def __repr__(self) -> str:
        return f"IterableReadStream({type(self._source).__name__})"


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "LazyFileReadStream",
    "IterableReadStream",
]
