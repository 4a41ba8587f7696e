"""Remove a single branch worktree."""

from __future__ import annotations

from pathlib import Path

import click

from worktree_manager.common import (
    Git,
    WorktreeNotFoundError,
    style_error,
    style_info,
    style_success,
    validate_branch_name,
)
from worktree_manager.wt.cleanup import leave_if_inside
from worktree_manager.wt.locator import Repository


def remove_worktree(
    repo: Repository,
    branch: str,
    git: Git,
    *,
    force: bool = False,
    cwd: Path | None = None,
) -> bool:
    """Remove the worktree at <worktree_base>/<branch>. Returns True on success.

    Git failures are reported as-is; there is no filesystem fallback here.
    """
    validate_branch_name(branch)
    worktree_path = repo.worktree_path(branch)
    if not worktree_path.is_dir():
        raise WorktreeNotFoundError(worktree_path)

    leave_if_inside(worktree_path, repo, cwd or Path.cwd())

    click.echo(style_info(f"Removing worktree: {worktree_path}"))
    result = git.worktree_remove(worktree_path, force=force)
    if not result.ok:
        click.echo(style_error(f"Failed to remove: {result.stderr.strip()}"), err=True)
        return False

    click.echo(style_success(f"Removed worktree '{branch}'"))
    return True
