"""Single editable text buffer with an optional associated file path.

Loading a file replaces the buffer unconditionally; there is no dirty
tracking. A failed load leaves the previous text, path, and mode intact.

``text`` holds the file content exactly as decoded, line endings included.
The code view works with ``\\n`` only, so ``view_text``/``set_view_text``
translate to and from the file's newline style.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .source_pane import SyntaxMode, read_text, syntax_mode_for_path, write_text

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


class NoAssociatedPath(Exception):
    """Raised by ``EditorBuffer.save`` when no file is associated yet."""


def detect_newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


class EditorBuffer:
    """Text currently shown in the code view plus the file it belongs to."""

    def __init__(self, text: str = "", path: Path | None = None, encoding: str = DEFAULT_ENCODING) -> None:
        self.text = text
        self.path = path
        self.encoding = encoding
        self.newline = detect_newline(text)
        self.mode = syntax_mode_for_path(path) if path is not None else SyntaxMode.PLAIN

    def load(self, path: Path) -> None:
        """Replace the buffer with the full contents of ``path``.

        Raises ``OSError`` on read failure without touching the current state.
        """
        text, encoding = read_text(path)
        self.text = text
        self.path = path
        self.encoding = encoding
        self.newline = detect_newline(text)
        self.mode = syntax_mode_for_path(path)
        logger.debug("loaded %s (%d chars, %s, mode=%s)", path, len(text), encoding, self.mode.value)

    def view_text(self) -> str:
        """Text for the code view, with the file's newlines shown as ``\\n``."""
        if self.newline == "\n":
            return self.text
        return self.text.replace(self.newline, "\n")

    def set_view_text(self, text: str) -> None:
        """Take edited view text back, restoring the file's newline style."""
        if self.newline != "\n":
            text = text.replace("\n", self.newline)
        self.text = text

    def save(self) -> Path:
        """Write the buffer to its associated path and return that path.

        Text that the loaded encoding cannot represent is written as UTF-8
        instead, and the buffer keeps UTF-8 from then on.
        """
        if self.path is None:
            raise NoAssociatedPath("no file is associated with the buffer")
        try:
            write_text(self.path, self.text, self.encoding)
        except UnicodeEncodeError:
            logger.warning("%s cannot hold the edited text; saving %s as %s", self.encoding, self.path, DEFAULT_ENCODING)
            self.encoding = DEFAULT_ENCODING
            write_text(self.path, self.text, self.encoding)
        logger.debug("saved %s (%d chars, %s)", self.path, len(self.text), self.encoding)
        return self.path

    def save_as(self, path: Path) -> Path:
        """Associate ``path`` with the buffer, then write to it."""
        self.path = path
        self.mode = syntax_mode_for_path(path)
        return self.save()
