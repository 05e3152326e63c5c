"""Qt application bootstrap for ``run_editor``.

Resolves the project directory (asking for one when none was given),
scans it, shows the main window, and opens or offers to create the git
repository before entering the event loop.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from ..file_tree_model import build_file_tree
from ..ui.prompter import APP_TITLE, QtPrompter
from ..ui.window import MainWindow
from . import config

logger = logging.getLogger(__name__)


def choose_project_directory(prompter: QtPrompter) -> Path | None:
    """Show the startup directory picker; ``None`` means the user declined."""
    return prompter.ask_directory("Select Project Directory", config.load_last_directory())


def run_editor(path: Path | None, style: str | None = None) -> int:
    """Run the editor on ``path`` and return the Qt exit status."""
    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName(APP_TITLE)

    if path is None:
        startup_prompter = QtPrompter()
        path = choose_project_directory(startup_prompter)
        if path is None:
            startup_prompter.notify("No project directory selected. Exiting.")
            return 0

    root = path.resolve()
    config.save_last_directory(root)
    resolved_style = style or config.load_style_name()
    if style:
        config.save_style_name(style)

    logger.info("scanning %s", root)
    tree = build_file_tree(root)
    window = MainWindow(root, tree, resolved_style)
    window.show()
    window.editor_actions.open_or_init_repository()
    return app.exec()
