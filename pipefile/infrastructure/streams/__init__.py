"""
Stream implementations for the File collaborators.
"""

from .base import BaseReadStream, BaseWriteStream
from .read_streams import DEFAULT_CHUNK_SIZE, IterableReadStream, LazyFileReadStream
from .sinks import AccumulatingSink
from .unique_write import (
    UNIQUE_PATTERN,
    UniqueFileWriteStream,
    compute_temp_path,
    resolve_unique_path,
)


__all__ = [
    "BaseReadStream",
    "BaseWriteStream",
    "DEFAULT_CHUNK_SIZE",
    "IterableReadStream",
    "LazyFileReadStream",
    "AccumulatingSink",
    "UNIQUE_PATTERN",
    "UniqueFileWriteStream",
    "compute_temp_path",
    "resolve_unique_path",
]
