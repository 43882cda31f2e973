"""
pipefile Testing Fixtures

Test doubles for code that passes Files between pipeline stages.

Architecture Decision:
- These helpers are part of pipefile (not just tests) because users need
  them to test their own stages against the same sink/stream contracts.
"""

import errno
from typing import AsyncIterator, Iterable, List, Optional, Tuple

from pipefile.domain.interfaces.streams import ErrorHandler, IByteSink
from pipefile.domain.models.file.exceptions import FileReadError
from pipefile.infrastructure.streams.base import BaseReadStream


class RecordingSink(IByteSink):
    """
    Sink recording every call in order.

    ``events`` holds ("write", data) and ("end", data) tuples so tests can
    assert ordering and that the sink was closed exactly once.
    """

    def __init__(self):
        self.events: List[Tuple[str, Optional[bytes]]] = []

    @property
    def data(self) -> bytes:
        return b"".join(chunk for _, chunk in self.events if chunk)

    @property
    def end_count(self) -> int:
        return sum(1 for kind, _ in self.events if kind == "end")

    @property
    def ended(self) -> bool:
        return self.end_count > 0

    async def write(self, data: bytes) -> None:
        self.events.append(("write", bytes(data)))

    async def end(self, data: Optional[bytes] = None) -> None:
        self.events.append(("end", bytes(data) if data else None))


class FailingReadStream(BaseReadStream):
    """
    Read stream yielding some chunks, then failing like a broken disk.
    """

    def __init__(
        self,
        chunks: Iterable[bytes] = (),
        path: str = "broken.bin",
        error_handler: Optional[ErrorHandler] = None,
    ):
        super().__init__(error_handler)
        self._chunks = list(chunks)
        self._path = path
        self.released = False

    async def _anext_chunk(self) -> bytes:
        if self._chunks:
            return self._chunks.pop(0)
        cause = OSError(errno.EIO, "Input/output error", self._path)
        raise FileReadError(f"Cannot read {self._path}: {cause}", path=self._path, cause=cause)

    async def _arelease(self) -> None:
        self.released = True


async def async_chunks(*chunks: bytes) -> AsyncIterator[bytes]:
    """Async generator over the given chunks."""
    for chunk in chunks:
        yield chunk
