"""
pipefile Testing Utilities.
"""

from .fixtures import FailingReadStream, RecordingSink, async_chunks


__all__ = [
    "FailingReadStream",
    "RecordingSink",
    "async_chunks",
]
