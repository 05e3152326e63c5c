"""Domain model for the project directory tree.

This package contains non-UI tree primitives:
- file/directory entry datatypes with nested children
- filesystem scanning/build helpers
"""

from __future__ import annotations

from .types import DirectoryEntry, FileEntry, FileTreeEntry
from .fs import (
    DirectoryChild,
    build_file_tree,
    iter_tree,
    list_directory_children,
)

__all__ = [
    "DirectoryEntry",
    "FileEntry",
    "FileTreeEntry",
    "DirectoryChild",
    "list_directory_children",
    "build_file_tree",
    "iter_tree",
]
