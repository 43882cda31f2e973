"""
Local Filesystem.

IFileSystem implementation doing real disk I/O through aiofiles.
"""

from typing import Optional

from pipefile.domain.interfaces.filesystem import IFileSystem
from pipefile.domain.interfaces.streams import ErrorHandler
from pipefile.domain.models.file.value_objects import WriteOptions
from pipefile.infrastructure.streams.read_streams import DEFAULT_CHUNK_SIZE, LazyFileReadStream
from pipefile.infrastructure.streams.unique_write import UniqueFileWriteStream


class AsyncLocalFileSystem(IFileSystem):
    """
    Disk-backed collaborator for File.

    Usage:
        fs = AsyncLocalFileSystem(chunk_size=16 * 1024)
        file = File(path="out/report.txt", filesystem=fs)
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._chunk_size = chunk_size

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def open_read(self, path: str, error_handler: Optional[ErrorHandler] = None) -> LazyFileReadStream:
        return LazyFileReadStream(path, chunk_size=self._chunk_size, error_handler=error_handler)

    def open_unique_write(
        self,
        path: str,
        options: WriteOptions,
        error_handler: Optional[ErrorHandler] = None,
    ) -> UniqueFileWriteStream:
        return UniqueFileWriteStream(path, options=options, error_handler=error_handler)

    def __repr__(self) -> str:
        return f"AsyncLocalFileSystem(chunk_size={self._chunk_size})"
