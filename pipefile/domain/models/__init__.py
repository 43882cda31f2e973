"""
Domain Models.
"""

from .file import (
    Content,
    ContentKind,
    File,
    PathDescriptor,
    WriteOptions,
)


__all__ = [
    "Content",
    "ContentKind",
    "File",
    "PathDescriptor",
    "WriteOptions",
]
