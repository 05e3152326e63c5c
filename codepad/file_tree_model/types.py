"""Domain datatypes for filesystem-backed file tree entries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileEntry:
    """Leaf node for a regular file (or anything that is not a directory)."""

    path: Path
    file_size: int | None = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return False

    @property
    def children(self) -> tuple["FileTreeEntry", ...]:
        return ()


@dataclass(frozen=True)
class DirectoryEntry:
    """Directory node with eagerly populated children in listing order."""

    path: Path
    children: tuple["FileTreeEntry", ...] = ()

    @property
    def name(self) -> str:
        # The filesystem root has an empty name; show the path instead.
        return self.path.name or str(self.path)

    @property
    def is_dir(self) -> bool:
        return True


FileTreeEntry = DirectoryEntry | FileEntry


__all__ = [
    "FileEntry",
    "DirectoryEntry",
    "FileTreeEntry",
]
