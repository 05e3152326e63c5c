"""Main editor window: directory tree, code view, and the File/Git menus.

The window holds no business logic. Each menu item forwards to exactly one
``EditorActions`` method; the window only mirrors the buffer into the code
view and copies the view text back before a save.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent, QFont, QFontDatabase, QKeySequence
from PySide6.QtWidgets import QMainWindow, QPlainTextEdit, QSplitter, QTreeWidget, QTreeWidgetItem

from ..actions import EditorActions
from ..buffer import EditorBuffer
from ..file_tree_model import FileTreeEntry
from ..runtime import config
from ..source_pane import style_colors
from .highlighter import PygmentsHighlighter
from .prompter import APP_TITLE, QtPrompter
from .tree_pane import entry_for_item, populate_tree

logger = logging.getLogger(__name__)

_BLOCK_SEPARATOR = "\u2029"


class MainWindow(QMainWindow):
    def __init__(self, root: Path, tree: FileTreeEntry, style: str) -> None:
        super().__init__()
        self.root = root
        self.setWindowTitle(f"{APP_TITLE} - {root}")
        self.resize(*config.load_window_size())

        self.editor = QPlainTextEdit()
        self.editor.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.editor.setFont(font)
        self.highlighter = PygmentsHighlighter(self.editor, style)
        self._apply_style_colors()

        self.tree = QTreeWidget()
        self.tree.setHeaderHidden(True)
        populate_tree(self.tree, tree)
        self.tree.currentItemChanged.connect(self._on_current_item_changed)

        self.splitter = QSplitter(Qt.Orientation.Horizontal)
        self.splitter.addWidget(self.tree)
        self.splitter.addWidget(self.editor)
        self.splitter.setStretchFactor(1, 1)
        self._restore_splitter()
        self.setCentralWidget(self.splitter)

        self.editor_actions = EditorActions(
            root,
            EditorBuffer(),
            QtPrompter(self),
            on_buffer_loaded=self._show_buffer,
            on_buffer_saved=self._on_buffer_saved,
            collect_view_text=self._collect_view_text,
        )
        self._build_menus()

    # -- construction ------------------------------------------------------

    def _apply_style_colors(self) -> None:
        background, foreground = style_colors(self.highlighter.style)
        self.editor.setStyleSheet(f"QPlainTextEdit {{ background-color: {background}; color: {foreground}; }}")

    def _restore_splitter(self) -> None:
        width = self.width()
        left = int(width * config.load_left_pane_percent() / 100.0)
        self.splitter.setSizes([left, max(1, width - left)])

    def _add_action(self, menu, text: str, slot, shortcut: QKeySequence.StandardKey | None = None) -> QAction:
        action = QAction(text, self)
        if shortcut is not None:
            action.setShortcut(QKeySequence(shortcut))
        action.triggered.connect(lambda _checked=False: slot())
        menu.addAction(action)
        return action

    def _build_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        self._add_action(file_menu, "Open File", self.editor_actions.open_file, QKeySequence.StandardKey.Open)
        self._add_action(file_menu, "Save File", self.editor_actions.save_file, QKeySequence.StandardKey.Save)
        self._add_action(file_menu, "Save As...", self.editor_actions.save_file_as, QKeySequence.StandardKey.SaveAs)
        file_menu.addSeparator()
        self._add_action(file_menu, "Exit", self.close, QKeySequence.StandardKey.Quit)

        git_menu = menu_bar.addMenu("&Git")
        self._add_action(git_menu, "Commit", self.editor_actions.commit)
        self._add_action(git_menu, "Push", self.editor_actions.push)
        self._add_action(git_menu, "Pull", self.editor_actions.pull)
        git_menu.addSeparator()
        self._add_action(git_menu, "Set Remote", self.editor_actions.set_remote)

    # -- buffer/view sync --------------------------------------------------

    def _show_buffer(self, buffer: EditorBuffer) -> None:
        logger.debug("showing %s in %s mode", buffer.path, buffer.mode.value)
        self.highlighter.set_mode(buffer.mode)
        self.editor.setPlainText(buffer.view_text())
        self.editor.document().setModified(False)
        if buffer.path is not None:
            self.setWindowTitle(f"{APP_TITLE} - {buffer.path}")

    def _collect_view_text(self) -> str | None:
        document = self.editor.document()
        if not document.isModified():
            return None
        # toPlainText() would also turn non-breaking spaces into spaces.
        return document.toRawText().replace(_BLOCK_SEPARATOR, "\n")

    def _on_buffer_saved(self, buffer: EditorBuffer) -> None:
        self.editor.document().setModified(False)
        self.highlighter.set_mode(buffer.mode)
        self.setWindowTitle(f"{APP_TITLE} - {buffer.path}")

    def _on_current_item_changed(self, current: QTreeWidgetItem | None, _previous: QTreeWidgetItem | None) -> None:
        self.editor_actions.select_entry(entry_for_item(current))

    # -- lifecycle ---------------------------------------------------------

    def closeEvent(self, event: QCloseEvent) -> None:
        sizes = self.splitter.sizes()
        config.save_left_pane_percent(sum(sizes), sizes[0] if sizes else 0)
        config.save_window_size(self.width(), self.height())
        super().closeEvent(event)
