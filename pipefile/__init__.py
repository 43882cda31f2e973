"""
pipefile - Lazy File Handles for Build Pipelines

A File carries a destination path and content that is absent, a resident
buffer, or a live read stream. Pipeline stages pass the same object along;
bytes are read from disk only when a stage drains or materializes them,
and written once to a collision-avoiding destination.

Architecture follows:
- Domain model (File, Content, PathDescriptor) with no I/O at import
- Interface-based collaborators (IFileSystem, IReadStream, IByteSink)
- aiofiles-backed infrastructure for real disk I/O
"""

__version__ = "0.1.0"

# Configuration
from pipefile.config import (
    PipeFileConfig,
    configure_logging,
    get_config,
    reset_config,
    set_config,
)

# Domain Models
from pipefile.domain.models.file import (
    Content,
    ContentKind,
    File,
    PathDescriptor,
    WriteOptions,
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

# Domain Interfaces
from pipefile.domain.interfaces import (
    IByteSink,
    IFileSystem,
    IReadStream,
    IWriteStream,
)

# Infrastructure
from pipefile.infrastructure import (
    AccumulatingSink,
    AsyncLocalFileSystem,
    InMemoryFileSystem,
    IterableReadStream,
    LazyFileReadStream,
    UniqueFileWriteStream,
)

# Application
from pipefile.application import FileFactory


__all__ = [
    "__version__",
    # Config
    "PipeFileConfig",
    "configure_logging",
    "get_config",
    "reset_config",
    "set_config",
    # Models
    "Content",
    "ContentKind",
    "File",
    "PathDescriptor",
    "WriteOptions",
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
    # Interfaces
    "IByteSink",
    "IFileSystem",
    "IReadStream",
    "IWriteStream",
    # Infrastructure
    "AccumulatingSink",
    "AsyncLocalFileSystem",
    "InMemoryFileSystem",
    "IterableReadStream",
    "LazyFileReadStream",
    "UniqueFileWriteStream",
    # Application
    "FileFactory",
]
