"""
File Value Objects.

Immutable value objects for the File domain model.

Value Objects:
- PathDescriptor: path with its derived base name and directory
- WriteOptions: options for the unique-write collaborator
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Union

from .exceptions import InvalidPathError


PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class PathDescriptor:
    """
    Full path plus its base name and containing directory.

    The derived fields are computed together in ``from_path`` so they can
    never disagree with ``path``. Replacing a destination means building
    a new descriptor.

    Examples:
        >>> d = PathDescriptor.from_path("/tmp/out/report.txt")
        >>> d.basename
        'report.txt'
        >>> d.dirname
        '/tmp/out'
    """
    path: str
    basename: str
    dirname: str

    @classmethod
    def from_path(cls, path: PathLike) -> "PathDescriptor":
        """
        Derive a descriptor from a path string.

        Args:
            path: File path (str or os.PathLike)

        Returns:
            New PathDescriptor

        Raises:
            InvalidPathError: If path is empty or not path-like
        """
        try:
            value = os.fspath(path)
        except TypeError as e:
            raise InvalidPathError(f"Path must be str or PathLike, got {type(path)}") from e
        if isinstance(value, bytes):
            raise InvalidPathError("Path must be text, got bytes")
        if not value:
            raise InvalidPathError("Path cannot be empty")
        return cls(
            path=value,
            basename=os.path.basename(value),
            dirname=os.path.dirname(value),
        )

    @property
    def extension(self) -> str:
        """File extension including the dot, or empty string."""
        return os.path.splitext(self.basename)[1]

    def to_dict(self) -> Dict[str, str]:
        """Serialize to dictionary."""
        return {
            "path": self.path,
            "basename": self.basename,
            "dirname": self.dirname,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "PathDescriptor":
        """Deserialize from dictionary (derived fields are recomputed)."""
        return cls.from_path(data["path"])

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class WriteOptions:
    """
    Options passed to the unique-write collaborator.

    Attributes:
        force: Overwrite an existing destination. Defaults to True so
            re-running a pipeline is idempotent; pass False to refuse
            clobbering existing files.
        create_dirs: Create missing parent directories
        extra: Collaborator-specific options, passed through untouched
    """
    force: bool = True
    create_dirs: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def coerce(
        cls,
        options: Union["WriteOptions", Mapping[str, Any], None],
        default_force: bool = True,
        default_create_dirs: bool = True,
    ) -> "WriteOptions":
        """
        Normalize user options.

        Unknown keys of a mapping land in ``extra``. A missing ``force``
        falls back to ``default_force``.
        """
        if isinstance(options, cls):
            return options
        if options is None:
            return cls(force=default_force, create_dirs=default_create_dirs)
        if not isinstance(options, Mapping):
            raise TypeError(f"options must be WriteOptions or a mapping, got {type(options)}")

        data = dict(options)
        force = data.pop("force", None)
        create_dirs = data.pop("create_dirs", None)
        return cls(
            force=default_force if force is None else bool(force),
            create_dirs=default_create_dirs if create_dirs is None else bool(create_dirs),
            extra=data,
        )

    def with_force(self, force: bool) -> "WriteOptions":
        """Return a copy with a different force flag."""
        return replace(self, force=force)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "force": self.force,
            "create_dirs": self.create_dirs,
            **self.extra,
        }


__all__ = [
    "PathDescriptor",
    "WriteOptions",
]
