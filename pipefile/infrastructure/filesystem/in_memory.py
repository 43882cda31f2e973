"""
In-Memory Filesystem.

Dict-backed implementation of IFileSystem for testing and dry runs.
Does not touch the disk.

Design Principles:
- Provides full interface implementation for testing
- Same write rules as the disk implementation (force, ``{#}`` pattern)
- Tracks all opens for verification in tests

Usage:
    from pipefile.infrastructure.filesystem import InMemoryFileSystem

    fs = InMemoryFileSystem({"/in/a.txt": b"hello"})
    file = File(path="/in/a.txt", filesystem=fs)
    await file.materialize()

    assert fs.read_count == 1
"""

import errno
from typing import AsyncIterator, Dict, List, Optional

from pipefile.domain.interfaces.filesystem import IFileSystem
from pipefile.domain.interfaces.streams import ErrorHandler
from pipefile.domain.models.file.exceptions import FileReadError
from pipefile.domain.models.file.value_objects import WriteOptions
from pipefile.infrastructure.streams.base import BaseWriteStream
from pipefile.infrastructure.streams.read_streams import DEFAULT_CHUNK_SIZE, IterableReadStream
from pipefile.infrastructure.streams.unique_write import UNIQUE_PATTERN, resolve_unique_path


class InMemoryWriteStream(BaseWriteStream):
    """Write stream storing its bytes in an InMemoryFileSystem on finish."""

    def __init__(
        self,
        filesystem: "InMemoryFileSystem",
        path: str,
        options: WriteOptions,
        error_handler: Optional[ErrorHandler] = None,
    ):
        super().__init__(path, error_handler)
        self._filesystem = filesystem
        self._options = options
        self._chunks: List[bytes] = []

    async def _aopen(self) -> None:
        if UNIQUE_PATTERN in self._requested_path:
            self._final_path = resolve_unique_path(self._requested_path, exists=self._filesystem.exists)
        else:
            self._final_path = self._requested_path
            if not self._options.force and self._filesystem.exists(self._final_path):
                raise FileExistsError(errno.EEXIST, "File exists", self._final_path)
        if self._final_path in self._filesystem.read_only:
            raise PermissionError(errno.EACCES, "Permission denied", self._final_path)
        # Reserve the name so concurrent unique writes pick another one
        self._filesystem.reserved.add(self._final_path)

    async def _awrite(self, data: bytes) -> None:
        self._chunks.append(data)

    async def _acommit(self) -> None:
        self._filesystem.files[self._final_path] = b"".join(self._chunks)
        self._filesystem.reserved.discard(self._final_path)
        self._chunks.clear()

    async def _adiscard(self) -> None:
        self._chunks.clear()
        if self._final_path is not None:
            self._filesystem.reserved.discard(self._final_path)


class InMemoryFileSystem(IFileSystem):
    """
    In-memory mock implementation of IFileSystem.

    Attributes:
        files: Mapping of path -> bytes
        read_only: Paths whose writes fail with PermissionError
        read_count: Number of read streams opened
        write_count: Number of write streams opened
    """

    def __init__(self, files: Optional[Dict[str, bytes]] = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.files: Dict[str, bytes] = dict(files or {})
        self.read_only = set()
        self.reserved = set()
        self.read_count = 0
        self.write_count = 0
        self._chunk_size = chunk_size

    def open_read(self, path: str, error_handler: Optional[ErrorHandler] = None) -> IterableReadStream:
        self.read_count += 1
        return IterableReadStream(self._iter_chunks(path), error_handler=error_handler)

    def open_unique_write(
        self,
        path: str,
        options: WriteOptions,
        error_handler: Optional[ErrorHandler] = None,
    ) -> InMemoryWriteStream:
        self.write_count += 1
        return InMemoryWriteStream(self, path, options, error_handler)

    async def _iter_chunks(self, path: str) -> AsyncIterator[bytes]:
        if path not in self.files:
            raise FileReadError(f"Cannot read {path}: no such file", path=path)
        data = self.files[path]
        for offset in range(0, len(data), self._chunk_size):
            yield data[offset:offset + self._chunk_size]

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.reserved

    def clear(self) -> None:
        """Helper method for testing - not in interface."""
        self.files.clear()
        self.reserved.clear()
        self.read_count = 0
        self.write_count = 0
