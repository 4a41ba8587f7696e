"""Resolve a repository name to its main checkout and worktree storage."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from worktree_manager.common.config import WorktreeConfig
from worktree_manager.common.errors import RepositoryNotFoundError
from worktree_manager.common.validate import validate_repo_name


class Repository(NamedTuple):
    """A main repository and the directory its worktrees live in."""

    name: str
    main_path: Path
    worktree_base: Path

    def worktree_path(self, branch: str) -> Path:
        """Get the full path for a branch's worktree."""
        return self.worktree_base / branch

    @property
    def exists(self) -> bool:
        return (self.main_path / ".git").exists()


def locate_repository(name: str, config: WorktreeConfig) -> Repository:
    """Build repository paths without checking that the repo exists."""
    validate_repo_name(name)
    return Repository(
        name=name,
        main_path=config.repos_root / name,
        worktree_base=config.worktree_base_dir / name,
    )


def resolve_repository(name: str | None, config: WorktreeConfig) -> Repository:
    """Resolve name (or the configured default) and verify it is a git repo."""
    repo = locate_repository(name or config.default_repo, config)
    if not repo.exists:
        raise RepositoryNotFoundError(repo.main_path)
    return repo
