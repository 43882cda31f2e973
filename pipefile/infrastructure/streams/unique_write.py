"""
Unique Write Stream.

Writes a File's bytes to disk without clobbering existing files unless
forced.

Write modes:
1. Path contains ``{#}``: the token is replaced by the smallest counter
   whose path can be created exclusively (report-{#}.txt -> report-0.txt,
   report-1.txt, ...).
2. force=True: write to a unique temp file beside the target, then
   ``os.replace`` it into place (atomic overwrite).
3. force=False: create the target exclusively ("xb"). An existing file
   fails the write and keeps its bytes.
"""

import asyncio
import logging
import os
import uuid
from typing import Callable, Optional

import aiofiles
import aiofiles.os

from pipefile.domain.interfaces.streams import ErrorHandler
from pipefile.domain.models.file.value_objects import WriteOptions

from .base import BaseWriteStream

logger = logging.getLogger(__name__)


UNIQUE_PATTERN = "{#}"
MAX_UNIQUE_ATTEMPTS = 10000


def resolve_unique_path(
    path: str,
    exists: Callable[[str], bool] = os.path.exists,
    start: int = 0,
) -> str:
    """
    Replace ``{#}`` in path with the first counter giving a free path.

    Paths without the token are returned unchanged. This only looks;
    writers still claim the name with an exclusive create.

    Raises:
        FileExistsError: If no free name is found within MAX_UNIQUE_ATTEMPTS
    """
    if UNIQUE_PATTERN not in path:
        return path
    for counter in range(start, start + MAX_UNIQUE_ATTEMPTS):
        candidate = path.replace(UNIQUE_PATTERN, str(counter))
        if not exists(candidate):
            return candidate
    raise FileExistsError(f"No free name for pattern {path}")


def compute_temp_path(path: str, suffix: Optional[str] = None) -> str:
    """Temp path beside ``path``: <path>.<suffix>.tmp"""
    suffix = suffix or uuid.uuid4().hex[:8]
    return f"{path}.{suffix}.tmp"


class UniqueFileWriteStream(BaseWriteStream):
    """
    Collision-avoiding write stream backed by aiofiles.

    The destination is claimed on the first write (or on ``end`` for
    empty content). Partial output is removed on failure or abort; a file
    that existed before this stream is never removed.
    """

    def __init__(
        self,
        path: str,
        options: Optional[WriteOptions] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        super().__init__(path, error_handler)
        self._options = options or WriteOptions()
        self._handle = None
        self._temp_path: Optional[str] = None
        self._created_path: Optional[str] = None

    @property
    def options(self) -> WriteOptions:
        return self._options

    async def _aensure_parent(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory and self._options.create_dirs:
            await aiofiles.os.makedirs(directory, exist_ok=True)

    async def _aopen(self) -> None:
        requested = self._requested_path

        if UNIQUE_PATTERN in requested:
            await self._aclaim_unique(requested)
            return

        await self._aensure_parent(requested)
        self._final_path = requested
        if self._options.force:
            self._temp_path = compute_temp_path(requested)
            self._handle = await aiofiles.open(self._temp_path, "wb")
            self._created_path = self._temp_path
        else:
            self._handle = await aiofiles.open(requested, "xb")
            self._created_path = requested
        logger.debug(f"Opened write to {requested} (force={self._options.force})")

    async def _aclaim_unique(self, pattern: str) -> None:
        for counter in range(MAX_UNIQUE_ATTEMPTS):
            candidate = pattern.replace(UNIQUE_PATTERN, str(counter))
            await self._aensure_parent(candidate)
            try:
                self._handle = await aiofiles.open(candidate, "xb")
            except FileExistsError:
                continue
            self._final_path = candidate
            self._created_path = candidate
            logger.debug(f"Claimed unique path {candidate}")
            return
        raise FileExistsError(f"No free name for pattern {pattern}")

    async def _awrite(self, data: bytes) -> None:
        await self._handle.write(data)

    async def _acommit(self) -> None:
        handle, self._handle = self._handle, None
        await handle.close()
        if self._temp_path is not None:
            # os.replace overwrites atomically, also on Windows
            await asyncio.to_thread(os.replace, self._temp_path, self._final_path)
            self._temp_path = None
        self._created_path = None

    async def _adiscard(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            try:
                await handle.close()
            except OSError as e:
                logger.debug(f"Ignoring close failure while discarding {self.path}: {e}")
        if self._created_path is not None:
            try:
                await aiofiles.os.remove(self._created_path)
            except FileNotFoundError:
                pass
            self._created_path = None
            self._temp_path = None


__all__ = [
    "UNIQUE_PATTERN",
    "UniqueFileWriteStream",
    "resolve_unique_path",
    "compute_temp_path",
]
