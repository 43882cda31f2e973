"""
Application Layer.
"""

from .factories import FileFactory


__all__ = ["FileFactory"]
