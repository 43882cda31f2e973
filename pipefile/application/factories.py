"""
Application Factories.

Builds Files bound to one configuration and one filesystem collaborator,
so every stage of a pipeline reads and writes through the same I/O.

Usage:
    factory = FileFactory.for_testing()
    file = factory.create(path="/in/a.txt")
    copy = factory.clone(file, path="/out/a.txt")
"""

import logging
from typing import Any, Optional

from pipefile.config import PipeFileConfig, get_config
from pipefile.domain.interfaces.filesystem import IFileSystem
from pipefile.domain.models.file import File
from pipefile.infrastructure.filesystem import AsyncLocalFileSystem, InMemoryFileSystem

logger = logging.getLogger(__name__)


class FileFactory:
    """
    Factory for File instances sharing config and filesystem.

    Dependency Injection:
    - config defaults to the global config (get_config)
    - filesystem defaults to AsyncLocalFileSystem with the config's chunk size
    """

    def __init__(
        self,
        config: Optional[PipeFileConfig] = None,
        filesystem: Optional[IFileSystem] = None,
    ):
        self._config = config or get_config()
        self._filesystem = filesystem or AsyncLocalFileSystem(chunk_size=self._config.chunk_size)

    @classmethod
    def for_testing(cls, files: Optional[dict] = None) -> "FileFactory":
        """Factory over an InMemoryFileSystem with test config."""
        config = PipeFileConfig.for_testing()
        return cls(
            config=config,
            filesystem=InMemoryFileSystem(files, chunk_size=config.chunk_size),
        )

    @property
    def config(self) -> PipeFileConfig:
        return self._config

    @property
    def filesystem(self) -> IFileSystem:
        return self._filesystem

    def create(self, path: Any = None, **kwargs: Any) -> File:
        """Create a File bound to this factory's config and filesystem."""
        kwargs.setdefault("config", self._config)
        kwargs.setdefault("filesystem", self._filesystem)
        return File(path=path, **kwargs)

    def from_descriptor(self, descriptor: Any, **overrides: Any) -> File:
        """Build from a mapping descriptor, bound to this factory."""
        overrides.setdefault("config", self._config)
        overrides.setdefault("filesystem", self._filesystem)
        return File.from_descriptor(descriptor, **overrides)

    def clone(self, file: File, **overrides: Any) -> File:
        """
        Copy a File (id, destination, content, handler, dependencies).

        The clone keeps the original's filesystem unless overridden.
        """
        clone = File.from_descriptor(file, **overrides)
        logger.debug(f"Cloned {file!r} -> {clone!r}")
        return clone
