"""Thin synchronous adapter over the ``git`` executable.

Every operation is one blocking ``git`` invocation run with
``subprocess.run``. Failures surface as ``GitError``
carrying git's own diagnostic text.

Credentials for push/pull are handed to git through a one-shot credential
helper that reads them from the child environment, so they never appear on
the command line and are never stored.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"
GIT_TIMEOUT_SECONDS = 120.0

_USERNAME_ENV = "CODEPAD_GIT_USERNAME"
_PASSWORD_ENV = "CODEPAD_GIT_PASSWORD"
_CREDENTIAL_HELPER = (
    "!f() { test \"$1\" = get && "
    f"printf 'username=%s\\npassword=%s\\n' \"${_USERNAME_ENV}\" \"${_PASSWORD_ENV}\"; }}; f"
)


class GitError(Exception):
    """A git invocation failed or could not be started."""


@dataclass(frozen=True)
class GitCredentials:
    """Username plus password/token for one network call."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"GitCredentials(username={self.username!r}, password='***')"


def _failure_text(proc: subprocess.CompletedProcess[str]) -> str:
    text = (proc.stderr or "").strip() or (proc.stdout or "").strip()
    return text or f"git exited with status {proc.returncode}"


def run_git(
    cwd: Path,
    args: list[str],
    env: dict[str, str] | None = None,
    timeout_seconds: float = GIT_TIMEOUT_SECONDS,
) -> subprocess.CompletedProcess[str]:
    """Run ``git -C cwd *args`` and return the completed process.

    Raises ``GitError`` when git is missing, times out, or exits non-zero.
    """
    child_env = os.environ.copy()
    child_env["GIT_TERMINAL_PROMPT"] = "0"
    if env:
        child_env.update(env)

    logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
    try:
        proc = subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
            env=child_env,
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not found on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise GitError(f"git timed out after {timeout_seconds:g}s") from exc

    if proc.returncode != 0:
        raise GitError(_failure_text(proc))
    return proc


class GitRepository:
    """Handle to a working tree rooted at ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def __repr__(self) -> str:
        return f"GitRepository({str(self.root)!r})"

    def _git(self, *args: str, env: dict[str, str] | None = None) -> str:
        return run_git(self.root, list(args), env=env).stdout

    def stage_all(self) -> None:
        """Stage every change (additions, edits, deletions) under the root."""
        self._git("add", "-A", "--", ".")

    def commit(self, message: str) -> None:
        self._git("commit", "-m", message)

    def current_branch(self) -> str:
        """Name of the checked-out branch (also valid before the first commit)."""
        return self._git("symbolic-ref", "--short", "HEAD").strip()

    def remote_url(self, name: str = DEFAULT_REMOTE) -> str | None:
        try:
            url = self._git("config", "--get", f"remote.{name}.url").strip()
        except GitError:
            return None
        return url or None

    def set_remote(self, url: str, name: str = DEFAULT_REMOTE) -> None:
        """Point remote ``name`` at ``url``, creating the remote if needed."""
        if self.remote_url(name) is None:
            self._git("remote", "add", name, url)
        else:
            self._git("remote", "set-url", name, url)

    def _credential_args(self) -> list[str]:
        # The empty value clears helpers inherited from user/system config.
        return ["-c", "credential.helper=", "-c", f"credential.helper={_CREDENTIAL_HELPER}"]

    def _credential_env(self, credentials: GitCredentials) -> dict[str, str]:
        return {_USERNAME_ENV: credentials.username, _PASSWORD_ENV: credentials.password}

    def push(self, credentials: GitCredentials, remote: str = DEFAULT_REMOTE) -> None:
        """Push the current branch to the same-named branch on ``remote``."""
        self._git(
            *self._credential_args(),
            "push",
            remote,
            "HEAD",
            env=self._credential_env(credentials),
        )

    def pull(self, credentials: GitCredentials, remote: str = DEFAULT_REMOTE) -> None:
        """Fetch and merge the current branch's counterpart from ``remote``."""
        branch = self.current_branch()
        self._git(
            *self._credential_args(),
            "pull",
            "--no-rebase",
            "--no-edit",
            remote,
            branch,
            env=self._credential_env(credentials),
        )


def find_repository(root: Path) -> GitRepository | None:
    """Return a handle when ``root`` holds usable repository metadata.

    Only ``<root>/.git`` is considered; parent repositories are ignored, also
    when git itself would fall back to one because ``<root>/.git`` is invalid.
    """
    if not (root / ".git").exists():
        return None
    try:
        toplevel = run_git(root, ["rev-parse", "--show-toplevel"]).stdout.strip()
    except GitError as exc:
        logger.warning("ignoring unusable repository metadata at %s: %s", root, exc)
        return None
    if not toplevel or Path(toplevel).resolve() != root.resolve():
        logger.warning("ignoring unusable repository metadata at %s: git resolved %s", root, toplevel or "no work tree")
        return None
    return GitRepository(root)


def init_repository(root: Path) -> GitRepository:
    run_git(root, ["init"])
    return GitRepository(root)


__all__ = [
    "DEFAULT_REMOTE",
    "GIT_TIMEOUT_SECONDS",
    "GitCredentials",
    "GitError",
    "GitRepository",
    "find_repository",
    "init_repository",
    "run_git",
]
