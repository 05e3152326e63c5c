"""Filesystem scanning and domain-tree construction.

The tree is built eagerly, once, and mirrors ``os.scandir`` enumeration
order at every level. Nothing is filtered: hidden files and ignored paths
show up like any other entry.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .types import DirectoryEntry, FileEntry, FileTreeEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryChild:
    """One directory-listing record."""

    name: str
    path: Path
    is_dir: bool
    file_size: int | None


def list_directory_children(directory: Path) -> tuple[list[DirectoryChild], Exception | None]:
    """List every child of ``directory`` in enumeration order.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory cannot be scanned, in which case ``children`` is empty.
    Symlinks are followed: a link to a directory is a directory child, and a
    dangling link is a file child without a size.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False

                file_size: int | None = None
                if not is_dir:
                    try:
                        file_size = int(child.stat().st_size)
                    except OSError:
                        pass

                children.append(
                    DirectoryChild(
                        name=child.name,
                        path=Path(child.path),
                        is_dir=is_dir,
                        file_size=file_size,
                    )
                )
    except OSError as exc:
        return [], exc
    return children, None


def build_file_tree(root: Path) -> DirectoryEntry:
    """Build the complete domain file tree rooted at ``root``.

    A directory whose real path is already open on the way down (a symlink
    back to an ancestor) is kept as a childless node.
    """
    root = root.resolve()

    def build_children(directory: Path, ancestors: frozenset[str]) -> tuple[FileTreeEntry, ...]:
        children, scan_error = list_directory_children(directory)
        if scan_error is not None:
            logger.debug("cannot list %s: %s", directory, scan_error)
            return ()

        nodes: list[FileTreeEntry] = []
        for child in children:
            if not child.is_dir:
                nodes.append(FileEntry(path=child.path, file_size=child.file_size))
                continue
            real = os.path.realpath(child.path)
            if real in ancestors:
                logger.debug("not descending into %s: cycles back to %s", child.path, real)
                nodes.append(DirectoryEntry(path=child.path))
                continue
            nodes.append(DirectoryEntry(path=child.path, children=build_children(child.path, ancestors | {real})))
        return tuple(nodes)

    return DirectoryEntry(path=root, children=build_children(root, frozenset({os.path.realpath(root)})))


def iter_tree(entry: FileTreeEntry) -> Iterator[tuple[FileTreeEntry, int]]:
    """Yield ``(entry, depth)`` pairs depth-first, starting with ``entry`` at depth 0."""
    stack: list[tuple[FileTreeEntry, int]] = [(entry, 0)]
    while stack:
        current, depth = stack.pop()
        yield current, depth
        for child in reversed(current.children):
            stack.append((child, depth + 1))


__all__ = [
    "DirectoryChild",
    "list_directory_children",
    "build_file_tree",
    "iter_tree",
]
