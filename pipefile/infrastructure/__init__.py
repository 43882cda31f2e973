"""
Infrastructure Layer.

Concrete stream and filesystem implementations of the domain interfaces.
"""

from pipefile.infrastructure.filesystem import (
    AsyncLocalFileSystem,
    InMemoryFileSystem,
)
from pipefile.infrastructure.streams import (
    AccumulatingSink,
    IterableReadStream,
    LazyFileReadStream,
    UniqueFileWriteStream,
)


__all__ = [
    "AsyncLocalFileSystem",
    "InMemoryFileSystem",
    "AccumulatingSink",
    "IterableReadStream",
    "LazyFileReadStream",
    "UniqueFileWriteStream",
]
