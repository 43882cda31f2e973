"""
Filesystem Interface.

Port for the two I/O collaborators a File depends on:
- a lazy, single-pass read of a path
- a collision-avoiding write to a path
"""

from abc import ABC, abstractmethod
from typing import Optional

from pipefile.domain.interfaces.streams import ErrorHandler, IReadStream, IWriteStream
from pipefile.domain.models.file.value_objects import WriteOptions


class IFileSystem(ABC):
    """
    Filesystem collaborator interface.

    Implementations:
    - AsyncLocalFileSystem: real disk I/O through aiofiles
    - InMemoryFileSystem: dict-backed, for tests and dry runs
    """

    @abstractmethod
    def open_read(self, path: str, error_handler: Optional[ErrorHandler] = None) -> IReadStream:
        """
        Return a lazy read stream for ``path``.

        Nothing is opened until the first chunk is requested.
        """
        pass

    @abstractmethod
    def open_unique_write(
        self,
        path: str,
        options: WriteOptions,
        error_handler: Optional[ErrorHandler] = None,
    ) -> IWriteStream:
        """
        Return a write stream for ``path``.

        The stream must not overwrite an existing file unless
        ``options.force`` is set.
        """
        pass
