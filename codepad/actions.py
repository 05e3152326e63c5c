"""Menu-level actions: selection bridge, persistence, and git operations.

Actions talk to the user only through a ``Prompter`` so they stay free of
any widget toolkit. Each action is "attempt once, report outcome": failures
are caught here, logged with a traceback, and shown as a blocking notice.
Cancelling any prompt quietly ends the action.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from .buffer import EditorBuffer
from .file_tree_model import FileTreeEntry
from .vcs import GitCredentials, GitError, GitRepository, find_repository, init_repository

logger = logging.getLogger(__name__)

NOT_INITIALIZED_MESSAGE = "Git is not initialized."


class Prompter(Protocol):
    """User-interaction surface required by :class:`EditorActions`.

    Every ``ask_*`` method returns ``None`` when the user cancels.
    """

    def ask_text(self, title: str, label: str) -> str | None: ...

    def ask_secret(self, title: str, label: str) -> str | None: ...

    def confirm(self, title: str, question: str) -> bool: ...

    def ask_open_path(self, title: str, start_dir: Path) -> Path | None: ...

    def ask_save_path(self, title: str, start_dir: Path) -> Path | None: ...

    def notify(self, message: str) -> None: ...


class EditorActions:
    """Owns the buffer and the optional repository handle for one project root."""

    def __init__(
        self,
        root: Path,
        buffer: EditorBuffer,
        prompter: Prompter,
        on_buffer_loaded: Callable[[EditorBuffer], None] | None = None,
        on_buffer_saved: Callable[[EditorBuffer], None] | None = None,
        collect_view_text: Callable[[], str | None] | None = None,
        find_repository_fn: Callable[[Path], GitRepository | None] = find_repository,
        init_repository_fn: Callable[[Path], GitRepository] = init_repository,
    ) -> None:
        self.root = root
        self.buffer = buffer
        self.prompter = prompter
        self.repository: GitRepository | None = None
        self._on_buffer_loaded = on_buffer_loaded
        self._on_buffer_saved = on_buffer_saved
        self._collect_view_text = collect_view_text
        self._find_repository = find_repository_fn
        self._init_repository = init_repository_fn

    # -- files -------------------------------------------------------------

    def select_entry(self, entry: FileTreeEntry | None) -> bool:
        """Load the selected tree node when it is a regular file.

        Returns whether the buffer was replaced.
        """
        if entry is None or entry.is_dir or not entry.path.is_file():
            return False
        return self.load_path(entry.path)

    def open_file(self) -> bool:
        path = self.prompter.ask_open_path("Open File", self.root)
        if path is None:
            return False
        return self.load_path(path)

    def load_path(self, path: Path) -> bool:
        try:
            self.buffer.load(path)
        except OSError as exc:
            logger.exception("failed to open %s", path)
            self.prompter.notify(f"Error opening file: {exc}")
            return False
        if self._on_buffer_loaded is not None:
            self._on_buffer_loaded(self.buffer)
        return True

    def _sync_from_view(self) -> None:
        # ``None`` means the view is unedited and the buffer text is current.
        if self._collect_view_text is None:
            return
        text = self._collect_view_text()
        if text is not None:
            self.buffer.set_view_text(text)

    def save_file(self) -> bool:
        """Save to the associated path, prompting for one when absent."""
        if self.buffer.path is None:
            return self.save_file_as()
        self._sync_from_view()
        return self._write(self.buffer.save)

    def save_file_as(self) -> bool:
        start_dir = self.buffer.path.parent if self.buffer.path is not None else self.root
        path = self.prompter.ask_save_path("Save File", start_dir)
        if path is None:
            return False
        self._sync_from_view()
        return self._write(lambda: self.buffer.save_as(path))

    def _write(self, save: Callable[[], Path]) -> bool:
        try:
            path = save()
        except OSError as exc:
            logger.exception("failed to save %s", self.buffer.path)
            self.prompter.notify(f"Error saving file: {exc}")
            return False
        logger.info("saved %s", path)
        if self._on_buffer_saved is not None:
            self._on_buffer_saved(self.buffer)
        self.prompter.notify("File saved successfully.")
        return True

    # -- git ---------------------------------------------------------------

    def open_or_init_repository(self) -> GitRepository | None:
        """Open ``<root>/.git`` or, with the user's consent, create it."""
        repository = self._find_repository(self.root)
        if repository is not None:
            logger.info("opened repository at %s", self.root)
            self.repository = repository
            return repository

        if not self.prompter.confirm("Git Init", "No Git repository found. Initialize a new repository?"):
            return None
        try:
            repository = self._init_repository(self.root)
        except GitError as exc:
            logger.exception("git init failed in %s", self.root)
            self.prompter.notify(f"Error initializing repository: {exc}")
            return None
        self.repository = repository
        self.prompter.notify("Initialized empty Git repository.")
        return repository

    def _require_repository(self) -> GitRepository | None:
        if self.repository is None:
            self.prompter.notify(NOT_INITIALIZED_MESSAGE)
        return self.repository

    def commit(self) -> bool:
        """Stage everything under the root and commit with a prompted message."""
        repository = self._require_repository()
        if repository is None:
            return False
        message = self.prompter.ask_text("Commit", "Enter commit message:")
        if message is None or not message.strip():
            return False
        try:
            repository.stage_all()
            repository.commit(message)
        except GitError as exc:
            logger.exception("git commit failed")
            self.prompter.notify(f"Git commit error: {exc}")
            return False
        self.prompter.notify("Changes committed.")
        return True

    def _ask_credentials(self) -> GitCredentials | None:
        username = self.prompter.ask_text("Credentials", "Username:")
        if username is None:
            return None
        password = self.prompter.ask_secret("Credentials", "Password or Token:")
        if password is None:
            return None
        return GitCredentials(username=username, password=password)

    def push(self) -> bool:
        repository = self._require_repository()
        if repository is None:
            return False
        credentials = self._ask_credentials()
        if credentials is None:
            return False
        try:
            repository.push(credentials)
        except GitError as exc:
            logger.exception("git push failed")
            self.prompter.notify(f"Git push error: {exc}")
            return False
        self.prompter.notify("Changes pushed to remote repository.")
        return True

    def pull(self) -> bool:
        """Pull into the working tree; the directory tree is not refreshed."""
        repository = self._require_repository()
        if repository is None:
            return False
        credentials = self._ask_credentials()
        if credentials is None:
            return False
        try:
            repository.pull(credentials)
        except GitError as exc:
            logger.exception("git pull failed")
            self.prompter.notify(f"Git pull error: {exc}")
            return False
        self.prompter.notify("Pulled latest changes from remote.")
        return True

    def set_remote(self) -> bool:
        repository = self._require_repository()
        if repository is None:
            return False
        url = self.prompter.ask_text("Set Remote", "Enter remote repository URL (HTTPS):")
        if url is None or not url.strip():
            return False
        try:
            repository.set_remote(url.strip())
        except GitError as exc:
            logger.exception("setting remote failed")
            self.prompter.notify(f"Error setting remote: {exc}")
            return False
        self.prompter.notify("Connected to remote repository.")
        return True
