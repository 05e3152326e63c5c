"""PySide6 presentation shell: main window, dialogs, tree widget, highlighter."""
