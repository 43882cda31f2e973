"""
In-memory byte sinks.
"""

from typing import List, Optional

from pipefile.domain.interfaces.streams import IByteSink
from pipefile.domain.models.file.exceptions import FileStateError


class AccumulatingSink(IByteSink):
    """
    Collects chunks in arrival order and joins them on ``end``.

    Used by File.materialize to turn any content into a buffer.
    """

    def __init__(self):
        self._chunks: List[bytes] = []
        self._value: Optional[bytes] = None

    @property
    def ended(self) -> bool:
        return self._value is not None

    @property
    def value(self) -> Optional[bytes]:
        """Joined content, None until the sink has ended."""
        return self._value

    async def write(self, data: bytes) -> None:
        if self.ended:
            raise FileStateError("Write after end on AccumulatingSink")
        if data:
            self._chunks.append(bytes(data))

    async def end(self, data: Optional[bytes] = None) -> None:
        if self.ended:
            return
        if data:
            self._chunks.append(bytes(data))
        self._value = b"".join(self._chunks)
        self._chunks.clear()


__all__ = ["AccumulatingSink"]
