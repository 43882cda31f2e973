"""
Filesystem collaborators.

Implementations:
- AsyncLocalFileSystem: disk I/O through aiofiles
- InMemoryFileSystem: dict-backed, for tests and dry runs
"""

from .local import AsyncLocalFileSystem
from .in_memory import InMemoryFileSystem, InMemoryWriteStream


__all__ = [
    "AsyncLocalFileSystem",
    "InMemoryFileSystem",
    "InMemoryWriteStream",
]
