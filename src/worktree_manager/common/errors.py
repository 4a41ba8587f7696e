"""Errors raised by worktree operations."""

from __future__ import annotations

from pathlib import Path


class WorktreeError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(WorktreeError):
    """Raised when the environment configuration cannot be parsed."""


class RepositoryNotFoundError(WorktreeError):
    """Raised when a repository has no .git marker under the repos root."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Repository not found at {path}")
        self.path = path


class WorktreeNotFoundError(WorktreeError):
    """Raised when a worktree directory does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Worktree doesn't exist: {path}")
        self.path = path


class GitCommandError(WorktreeError):
    """Raised when git fails where no fallback makes sense."""

    def __init__(self, command: str, stderr: str) -> None:
        detail = stderr.strip() or "no error output"
        super().__init__(f"git {command} failed: {detail}")
        self.command = command
        self.stderr = stderr
