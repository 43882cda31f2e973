"""
Domain Interfaces.

Abstract collaborators of the File entity.
"""

from .streams import (
    ErrorHandler,
    FinishCallback,
    IByteSink,
    IReadStream,
    IWriteStream,
)
from .filesystem import IFileSystem


__all__ = [
    "ErrorHandler",
    "FinishCallback",
    "IByteSink",
    "IReadStream",
    "IWriteStream",
    "IFileSystem",
]
