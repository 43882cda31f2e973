"""
File Domain Models Package.

A File is a handle whose content is absent, a resident buffer, or a live
read stream, and which can be drained into any sink or persisted once to
a destination path.

Package Structure:
- exceptions.py: All pipefile exceptions
- value_objects.py: PathDescriptor, WriteOptions (immutable)
- content.py: ContentKind, Content (tagged union of the three states)
- entities.py: File

Usage:
    from pipefile.domain.models.file import File

    file = File(path="out/data.txt", content="data")
    await file.persist()

    lazy = File(path="in/big.bin")
    data = await lazy.materialize()
"""

# Exceptions
from .exceptions import (
    PipeFileError,
    FileConstructionError,
    InvalidPathError,
    InvalidContentError,
    FileIOError,
    FileReadError,
    FileWriteError,
    FileStateError,
    StreamConsumedError,
)

# Value Objects
from .value_objects import (
    PathDescriptor,
    WriteOptions,
)

# Content
from .content import (
    ContentKind,
    Content,
)

# Entities
from .entities import (
    File,
)


__all__ = [
    # Value Objects
    "PathDescriptor",
    "WriteOptions",
    "ContentKind",
    "Content",
    # Entities
    "File",
    # Errors
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
