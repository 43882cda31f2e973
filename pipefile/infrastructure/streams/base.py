"""
Stream Base Classes.

Shared behaviour for read and write stream implementations:
- BaseReadStream: single-pass pipe loop, error-handler routing
- BaseWriteStream: open-on-first-write, finish callbacks, abort/cleanup

Subclasses only provide the raw I/O steps.
"""

import logging
from abc import abstractmethod
from typing import List, Optional

from pipefile.domain.interfaces.streams import (
    ErrorHandler,
    FinishCallback,
    IByteSink,
    IReadStream,
    IWriteStream,
)
from pipefile.domain.models.file.exceptions import (
    FileReadError,
    FileWriteError,
    StreamConsumedError,
)

logger = logging.getLogger(__name__)


class BaseReadStream(IReadStream):
    """
    Single-pass read stream skeleton.

    Subclasses implement ``_anext_chunk`` (return b"" at EOF, raise
    FileReadError on failure) and ``_arelease``.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None):
        self._error_handler = error_handler
        self._consumed = False
        self._piping = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def on_error(self, handler: Optional[ErrorHandler]) -> "BaseReadStream":
        self._error_handler = handler
        return self

    @abstractmethod
    async def _anext_chunk(self) -> bytes:
        pass

    @abstractmethod
    async def _arelease(self) -> None:
        pass

    async def read_chunk(self) -> bytes:
        if self._consumed:
            return b""
        try:
            chunk = await self._anext_chunk()
        except FileReadError:
            await self.aclose()
            raise
        if not chunk:
            await self.aclose()
        return chunk

    async def pipe(self, sink: IByteSink, end: bool = True) -> IByteSink:
        if self._consumed or self._piping:
            raise StreamConsumedError(f"{self!r} has already been drained")

        self._piping = True
        try:
            while True:
                chunk = await self.read_chunk()
                if not chunk:
                    break
                await sink.write(chunk)
                if getattr(sink, "error", None) is not None:
                    # Destination failed and its handler consumed the error: unpipe
                    logger.debug(f"Sink failed, stopped piping {self!r}")
                    await self.aclose()
                    return sink
        except FileReadError as e:
            if self._error_handler is None:
                raise
            logger.warning(f"Read error routed to handler: {e}")
            self._error_handler(e)
            return sink
        except BaseException:
            # Sink raised or task cancelled: a half-drained stream never resumes
            await self.aclose()
            raise
        finally:
            self._piping = False

        if end:
            await sink.end()
        return sink

    async def aclose(self) -> None:
        if self._consumed:
            return
        self._consumed = True
        await self._arelease()


class BaseWriteStream(IWriteStream):
    """
    Write stream skeleton.

    Lifecycle:
        idle -> open (first write/end) -> finished | failed | aborted

    Subclasses implement ``_aopen``, ``_awrite``, ``_acommit`` and
    ``_adiscard``. Any OSError raised by them becomes a FileWriteError
    routed to the error handler, or raised when none is attached.
    """

    def __init__(self, path: str, error_handler: Optional[ErrorHandler] = None):
        self._requested_path = str(path)
        self._final_path: Optional[str] = None
        self._error_handler = error_handler
        self._opened = False
        self._closed = False
        self._finished = False
        self._error: Optional[BaseException] = None
        self._bytes_written = 0
        self._finish_callbacks: List[FinishCallback] = []

    @property
    def requested_path(self) -> str:
        return self._requested_path

    @property
    def path(self) -> str:
        return self._final_path or self._requested_path

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def bytes_written(self) -> int:
        return self._bytes_written

    def on_finish(self, callback: FinishCallback) -> "BaseWriteStream":
        self._finish_callbacks.append(callback)
        return self

    def on_error(self, handler: Optional[ErrorHandler]) -> "BaseWriteStream":
        self._error_handler = handler
        return self

    @abstractmethod
    async def _aopen(self) -> None:
        """Claim the destination. Must set ``self._final_path``."""
        pass

    @abstractmethod
    async def _awrite(self, data: bytes) -> None:
        pass

    @abstractmethod
    async def _acommit(self) -> None:
        """Flush and move the output into its final place."""
        pass

    @abstractmethod
    async def _adiscard(self) -> None:
        """Remove partial output created by this stream (never a pre-existing file)."""
        pass

    async def write(self, data: bytes) -> None:
        if self._error is not None:
            return
        if self._closed:
            raise FileWriteError(f"Write after end: {self.path}", path=self.path)
        if not data:
            return
        try:
            if not self._opened:
                await self._aopen()
                self._opened = True
            await self._awrite(bytes(data))
        except OSError as e:
            await self._afail(e)
            return
        self._bytes_written += len(data)

    async def end(self, data: Optional[bytes] = None) -> None:
        if self._error is not None or self._closed:
            return
        if data:
            await self.write(data)
            if self._error is not None:
                return
        try:
            if not self._opened:
                # Empty content still produces an (empty) file
                await self._aopen()
                self._opened = True
            await self._acommit()
        except OSError as e:
            await self._afail(e)
            return

        self._closed = True
        self._finished = True
        logger.debug(f"Wrote {self._bytes_written} bytes to {self.path}")
        for callback in self._finish_callbacks:
            callback()

    async def abort(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._opened and not self._finished:
            logger.warning(f"Aborting write to {self.path}")
            await self._adiscard()

    async def _afail(self, cause: OSError) -> None:
        error = FileWriteError(
            f"Cannot write {self.path}: {cause}",
            path=self.path,
            cause=cause,
        )
        self._error = error
        self._closed = True
        await self._adiscard()

        if self._error_handler is None:
            raise error from cause
        logger.warning(f"Write error routed to handler: {error}")
        self._error_handler(error)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r}, finished={self._finished})"
