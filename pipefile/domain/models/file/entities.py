"""
File Entity.

A handle for a file whose content may not be loaded yet. The same object
travels between pipeline stages whether its content is absent, a resident
buffer, or a live read stream; disk I/O happens only when a stage needs
the bytes.

Content state machine:

    ABSENT --read()/read_into()--> STREAM --materialize()--> BUFFER
    ABSENT --materialize()-----------------------------------> BUFFER
    any    --set_content(value)--> kind of value

The only implicit transition is ABSENT -> STREAM on read, and it fires at
most once: a STREAM or BUFFER is never re-promoted.

Usage:
    file = File(path="build/app.js", content="console.log(1)")
    file.set_destination("dist/app.js").add_dependencies(["src/app.ts"])
    await file.persist()

    lazy = File(path="assets/logo.svg").on_error(report)
    await lazy.read_into(sink)  # opens assets/logo.svg now
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Callable, Hashable, Optional, Set

from pipefile.config import PipeFileConfig, get_config
from pipefile.domain.interfaces.streams import ErrorHandler, IByteSink, IWriteStream

from .content import Content, ContentKind
from .exceptions import FileConstructionError, InvalidPathError
from .value_objects import PathDescriptor, PathLike, WriteOptions

if TYPE_CHECKING:
    from pipefile.domain.interfaces.filesystem import IFileSystem

logger = logging.getLogger(__name__)


class File:
    """
    File handle with tri-state content.

    Attributes:
        id: Opaque caller-assigned identifier (not validated, not unique)
        source: Destination at construction time; never changes
        destination: Current write target (see set_destination)
        content: Current Content value
        dependencies: Live set of opaque dependency tags

    Errors:
        I/O failures of lazy reads and writes started by this File go to
        the handler registered with ``on_error``. Without a handler they
        are raised from the awaited call (FileReadError / FileWriteError).
    """

    def __init__(
        self,
        path: Optional[PathLike] = None,
        content: Any = None,
        id: Any = None,
        dependencies: Any = None,
        error_handler: Optional[ErrorHandler] = None,
        filesystem: Optional["IFileSystem"] = None,
        config: Optional[PipeFileConfig] = None,
    ):
        if path is None or path == "":
            raise FileConstructionError("File requires a destination path")

        self.id = id
        self._config = config or get_config()
        self._filesystem = filesystem
        self._error_handler = error_handler
        self._dependencies: Set[Hashable] = set()
        self._content = Content.absent()
        self._lazy_stream = None

        try:
            self._destination = PathDescriptor.from_path(path)
        except InvalidPathError as e:
            raise FileConstructionError(f"Invalid destination path: {e}") from e
        # Frozen descriptor: sharing it is a point-in-time snapshot
        self._source = self._destination

        self.set_content(content)
        if dependencies:
            self.add_dependencies(dependencies)

    @classmethod
    def from_descriptor(cls, descriptor: Any = None, **overrides: Any) -> "File":
        """
        Build a File from a mapping or clone a File-like object.

        A mapping may hold ``id``, ``path``, ``content``, ``dependencies``,
        ``error_handler`` (and ``destination`` when ``path`` is missing).
        A File-like object (anything with ``destination``) is cloned: its
        id, destination path, content, error handler, filesystem and a copy
        of its dependency set are inherited. Keyword overrides win.

        A cloned stream content is shared with the original; it can still
        be drained only once.

        Raises:
            FileConstructionError: If no path can be resolved
        """
        if descriptor is None:
            fields = {}
        elif isinstance(descriptor, Mapping):
            fields = dict(descriptor)
            destination = fields.pop("destination", None)
            if fields.get("path") is None and destination is not None:
                fields["path"] = getattr(destination, "path", destination)
        else:
            destination = getattr(descriptor, "destination", None)
            fields = {
                "id": getattr(descriptor, "id", None),
                "path": getattr(destination, "path", None),
                "content": getattr(descriptor, "content", None),
                "dependencies": set(getattr(descriptor, "dependencies", None) or ()),
                "error_handler": getattr(descriptor, "error_handler", None),
                "filesystem": getattr(descriptor, "filesystem", None),
                "config": getattr(descriptor, "config", None),
            }
        fields.update(overrides)
        return cls(**fields)

    # ═══════════════════════════════════════════════════════════════
    # Accessors
    # ═══════════════════════════════════════════════════════════════

    @property
    def source(self) -> PathDescriptor:
        return self._source

    @property
    def destination(self) -> PathDescriptor:
        return self._destination

    @property
    def content(self) -> Content:
        return self._content

    @property
    def dependencies(self) -> Set[Hashable]:
        return self._dependencies

    @property
    def error_handler(self) -> Optional[ErrorHandler]:
        return self._error_handler

    @property
    def config(self) -> PipeFileConfig:
        return self._config

    @property
    def filesystem(self) -> "IFileSystem":
        """Filesystem collaborator; local disk unless one was injected."""
        if self._filesystem is None:
            from pipefile.infrastructure.filesystem.local import AsyncLocalFileSystem
            self._filesystem = AsyncLocalFileSystem(chunk_size=self._config.chunk_size)
        return self._filesystem

    # ═══════════════════════════════════════════════════════════════
    # State predicates
    # ═══════════════════════════════════════════════════════════════

    def is_buffer(self) -> bool:
        return self._content.kind is ContentKind.BUFFER

    def is_stream(self) -> bool:
        return self._content.kind is ContentKind.STREAM

    def is_absent(self) -> bool:
        return self._content.kind is ContentKind.ABSENT

    is_null = is_absent

    # ═══════════════════════════════════════════════════════════════
    # Mutators
    # ═══════════════════════════════════════════════════════════════

    def set_content(self, value: Any) -> "File":
        """
        Replace the content.

        str becomes UTF-8 bytes, falsy values become absent, bytes and
        streams are stored as they are.
        """
        self._content = Content.coerce(value)
        return self

    def set_destination(self, path: PathLike) -> "File":
        """Point the File at a new write target. ``source`` is unaffected."""
        self._destination = PathDescriptor.from_path(path)
        return self

    def get_destination(self) -> PathDescriptor:
        return self._destination

    def on_error(self, handler: Optional[ErrorHandler]) -> "File":
        """
        Register the handler for I/O errors of lazy reads and writes.

        Also applies to a lazy read this File already opened.
        """
        self._error_handler = handler
        if self._lazy_stream is not None and self._content.stream is self._lazy_stream:
            self._lazy_stream.on_error(handler)
        return self

    def add_dependencies(self, tags: Any) -> "File":
        """
        Add one tag or an iterable of tags.

        Strings and bytes count as a single tag.
        """
        if isinstance(tags, (str, bytes)) or not isinstance(tags, Iterable):
            self._dependencies.add(tags)
        else:
            self._dependencies.update(tags)
        return self

    def clear_dependencies(self) -> "File":
        self._dependencies.clear()
        return self

    # ═══════════════════════════════════════════════════════════════
    # I/O
    # ═══════════════════════════════════════════════════════════════

    def read(self) -> "File":
        """
        Promote absent content to a lazy read of ``source.path``.

        No-op when the content is already a stream or a buffer. The OS
        file is opened only when the first chunk is pulled.
        """
        if self._content.kind is ContentKind.ABSENT:
            stream = self.filesystem.open_read(self._source.path, self._error_handler)
            self._lazy_stream = stream
            self._content = Content.from_stream(stream)
            logger.debug(f"Promoted {self._source.path} to lazy stream")
        return self

    async def read_into(self, sink: IByteSink, end: bool = True) -> IByteSink:
        """
        Drain the content into ``sink``, whatever its state.

        Args:
            sink: Destination
            end: Close the sink after this File's bytes. Pass False to
                concatenate several Files into one sink.

        Returns:
            The sink

        Raises:
            StreamConsumedError: If the stream content was already drained
            FileReadError: On read failure when no handler is registered
        """
        content = self._content
        if content.kind is ContentKind.ABSENT:
            content = self.read()._content

        if content.kind is ContentKind.BUFFER:
            if end:
                await sink.end(content.buffer)
            else:
                await sink.write(content.buffer)
            return sink

        return await content.stream.pipe(sink, end=end)

    async def materialize(self, callback: Optional[Callable[[bytes], None]] = None) -> Optional[bytes]:
        """
        Load the whole content into memory.

        A buffer is returned as is, without I/O. Otherwise the content is
        drained, stored as a buffer and returned. ``callback`` receives the
        same bytes.

        Returns:
            The buffer, or None when a read error was passed to the
            registered handler (content is left unchanged)
        """
        if self._content.kind is ContentKind.BUFFER:
            buffer = self._content.buffer
        else:
            from pipefile.infrastructure.streams.sinks import AccumulatingSink

            sink = AccumulatingSink()
            await self.read_into(sink, end=True)
            if not sink.ended:
                logger.warning(f"Materialization of {self._source.path} interrupted by a handled error")
                return None
            # Stored directly: empty content is still a BUFFER once materialized
            self._content = Content.from_buffer(sink.value)
            buffer = self._content.buffer
            logger.debug(f"Materialized {len(buffer)} bytes for {self._destination.path}")

        if callback is not None:
            callback(buffer)
        return buffer

    async def persist(self, options: Any = None, callback: Optional[Callable[[], None]] = None) -> IWriteStream:
        """
        Write the content to ``destination.path``.

        Args:
            options: WriteOptions or mapping (``force``, ``create_dirs``,
                extra collaborator options). A callable is taken as
                ``callback``. ``force`` defaults to config.default_force.
            callback: Called with no arguments once the write finished

        Returns:
            The write stream (final ``path``, ``bytes_written``,
            ``finished``, ``error``)

        Raises:
            FileWriteError: On write failure when no handler is registered
            FileReadError: On read failure when no handler is registered
        """
        if callable(options) and callback is None:
            callback, options = options, None

        write_options = WriteOptions.coerce(
            options,
            default_force=self._config.default_force,
            default_create_dirs=self._config.create_dirs,
        )
        save = self.filesystem.open_unique_write(
            self._destination.path,
            write_options,
            self._error_handler,
        )
        if callback is not None:
            save.on_finish(callback)

        try:
            await self.read_into(save, end=True)
        finally:
            if not save.finished:
                await save.abort()
        return save

    # ═══════════════════════════════════════════════════════════════
    # Introspection
    # ═══════════════════════════════════════════════════════════════

    def to_dict(self) -> dict:
        """Summary for logging and debugging (content bytes excluded)."""
        return {
            "id": self.id,
            "source": self._source.to_dict(),
            "destination": self._destination.to_dict(),
            "content": self._content.kind.value,
            "size": self._content.size,
            "dependencies": sorted(repr(tag) for tag in self._dependencies),
        }

    def __repr__(self) -> str:
        return f"File(id={self.id!r}, destination={self._destination.path!r}, content={self._content.kind.value})"


__all__ = ["File"]
