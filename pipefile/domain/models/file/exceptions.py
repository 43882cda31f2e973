"""
File Exceptions.

Custom exceptions for the File domain model.
Follows exception hierarchy pattern for precise error handling.

Hierarchy:
    PipeFileError
    ├── FileConstructionError
    ├── InvalidPathError
    ├── InvalidContentError
    ├── FileIOError
    │   ├── FileReadError
    │   └── FileWriteError
    └── FileStateError
        └── StreamConsumedError
"""

from typing import Optional


class PipeFileError(Exception):
    """
    Base exception for pipefile errors.

    All pipefile exceptions inherit from this.
    Allows catching all pipefile errors with one handler.
    """
    pass


class FileConstructionError(PipeFileError):
    """
    File built without any resolvable destination path.

    Raised when neither ``path`` nor an existing destination is given.
    """
    pass


class InvalidPathError(PipeFileError):
    """
    Invalid path for a PathDescriptor.

    Raised when the path is empty or not a string / PathLike.
    """
    pass


class InvalidContentError(PipeFileError):
    """
    Content value cannot be normalized.

    Accepted values: str, bytes-like, read streams, async iterables
    of bytes, or anything falsy (absent).
    """
    pass


class FileIOError(PipeFileError):
    """
    Base exception for filesystem I/O failures.

    Carries the path involved and the underlying OS error.
    """

    def __init__(self, message: str, path: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.path = path
        self.cause = cause


class FileReadError(FileIOError):
    """
    Underlying read failed (missing file, permission denied, bad chunk).
    """
    pass


class FileWriteError(FileIOError):
    """
    Underlying write failed.

    Covers permission denied, disk full and collisions with an
    existing file when the write is not forced.
    """
    pass


class FileStateError(PipeFileError):
    """
    Operation not allowed in the current content state.
    """
    pass


class StreamConsumedError(FileStateError):
    """
    Single-pass stream drained a second time.

    Streams are never reopened; materialize the File first when the
    content is needed more than once.
    """
    pass


__all__ = [
    "PipeFileError",
    "FileConstructionError",
    "InvalidPathError",
    "InvalidContentError",
    "FileIOError",
    "FileReadError",
    "FileWriteError",
    "FileStateError",
    "StreamConsumedError",
]
