"""Modal dialogs implementing the ``Prompter`` interface with Qt widgets."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import QFileDialog, QInputDialog, QLineEdit, QMessageBox, QWidget

APP_TITLE = "codepad"


class QtPrompter:
    """Blocking dialogs parented to ``parent`` (``None`` for startup dialogs)."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self.parent = parent

    def _ask(self, title: str, label: str, echo: QLineEdit.EchoMode) -> str | None:
        text, accepted = QInputDialog.getText(self.parent, title, label, echo)
        return text if accepted else None

    def ask_text(self, title: str, label: str) -> str | None:
        return self._ask(title, label, QLineEdit.EchoMode.Normal)

    def ask_secret(self, title: str, label: str) -> str | None:
        return self._ask(title, label, QLineEdit.EchoMode.Password)

    def confirm(self, title: str, question: str) -> bool:
        answer = QMessageBox.question(
            self.parent,
            title,
            question,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return answer == QMessageBox.StandardButton.Yes

    def ask_open_path(self, title: str, start_dir: Path) -> Path | None:
        path, _selected_filter = QFileDialog.getOpenFileName(self.parent, title, str(start_dir))
        return Path(path) if path else None

    def ask_save_path(self, title: str, start_dir: Path) -> Path | None:
        path, _selected_filter = QFileDialog.getSaveFileName(self.parent, title, str(start_dir))
        return Path(path) if path else None

    def ask_directory(self, title: str, start_dir: Path | None = None) -> Path | None:
        start = str(start_dir) if start_dir is not None else ""
        path = QFileDialog.getExistingDirectory(self.parent, title, start)
        return Path(path) if path else None

    def notify(self, message: str) -> None:
        QMessageBox.information(self.parent, APP_TITLE, message)
