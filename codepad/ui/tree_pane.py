"""Mirror a domain file tree into a ``QTreeWidget``."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QTreeWidget, QTreeWidgetItem

from ..file_tree_model import FileTreeEntry, iter_tree

ENTRY_ROLE = Qt.ItemDataRole.UserRole


def tooltip_for_entry(entry: FileTreeEntry) -> str:
    if entry.is_dir or entry.file_size is None:
        return str(entry.path)
    return f"{entry.path}\n{entry.file_size} bytes"


def populate_tree(widget: QTreeWidget, root: FileTreeEntry) -> QTreeWidgetItem:
    """Replace the widget contents with ``root`` and its descendants."""
    widget.clear()
    # parents[d] is the most recent item at depth d; preorder keeps it valid.
    parents: list[QTreeWidgetItem] = []
    for entry, depth in iter_tree(root):
        item = QTreeWidgetItem([entry.name])
        item.setData(0, ENTRY_ROLE, entry)
        item.setToolTip(0, tooltip_for_entry(entry))
        del parents[depth:]
        if depth == 0:
            widget.addTopLevelItem(item)
        else:
            parents[depth - 1].addChild(item)
        parents.append(item)
    root_item = widget.topLevelItem(0)
    root_item.setExpanded(True)
    return root_item


def entry_for_item(item: QTreeWidgetItem | None) -> FileTreeEntry | None:
    if item is None:
        return None
    return item.data(0, ENTRY_ROLE)
