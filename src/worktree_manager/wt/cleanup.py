"""Remove worktrees whose branches are gone locally and on the remote."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

import click

from worktree_manager.common import (
    Confirm,
    Git,
    WorktreeConfig,
    confirm_prompt,
    is_inside,
    output_cd,
    style_dim,
    style_info,
    style_success,
    style_warn,
)
from worktree_manager.wt.locator import Repository
from worktree_manager.wt.worktrees import WorktreeInfo, is_main_worktree, list_worktrees

logger = logging.getLogger(__name__)


def is_orphaned(info: WorktreeInfo, git: Git, remote: str) -> bool:
    """A worktree is orphaned when its branch is missing locally and on remote.

    Detached and bare entries are never orphaned.
    """
    if not info.branch or info.is_bare:
        return False
    if git.local_branch_exists(info.branch):
        return False
    return not git.remote_branch_exists(info.branch, remote)


def find_orphans(repo: Repository, git: Git, remote: str = "origin") -> list[WorktreeInfo]:
    """Scan worktrees (excluding the main checkout) for orphans, in listing order."""
    return [
        info
        for info in list_worktrees(git)
        if not is_main_worktree(info, repo.main_path) and is_orphaned(info, git, remote)
    ]


def leave_if_inside(path: Path, repo: Repository, cwd: Path) -> Path:
    """Step out to the main repo when cwd is inside path. Returns the new cwd."""
    if not is_inside(cwd, path):
        return cwd
    click.echo(style_info("Currently in this worktree, switching to main repo first..."))
    os.chdir(repo.main_path)
    output_cd(repo.main_path)
    return repo.main_path


def remove_orphans(
    repo: Repository,
    orphans: list[WorktreeInfo],
    git: Git,
    *,
    cwd: Path | None = None,
) -> int:
    """Force-remove each orphan, falling back to rmtree + prune. Returns count removed."""
    if cwd is None:
        cwd = Path.cwd()

    removed = 0
    for info in orphans:
        cwd = leave_if_inside(info.path, repo, cwd)

        click.echo(f"Removing worktree: {info.branch} ({info.path})")
        result = git.worktree_remove(info.path, force=True)
        if result.ok:
            removed += 1
            continue

        logger.debug("worktree remove failed: %s", result.stderr.strip())
        click.echo(style_warn("  Failed to remove worktree, trying to force cleanup..."))
        shutil.rmtree(info.path, ignore_errors=True)
        git.worktree_prune()
        if info.path.exists():
            click.echo(style_warn(f"  Could not delete {info.path}"), err=True)
        else:
            removed += 1

    return removed


def cleanup_orphans(
    repo: Repository,
    git: Git,
    config: WorktreeConfig,
    *,
    confirm: Confirm = confirm_prompt,
    cwd: Path | None = None,
) -> int | None:
    """Prune, fetch, find orphaned worktrees and remove them after one confirmation.

    Returns the number of worktrees removed (0 when there was nothing to do),
    or None if the user declined. Raises GitCommandError if git cannot list
    the worktrees.
    """
    click.echo(style_info("Checking worktrees for deleted branches..."))

    git.worktree_prune()

    click.echo(style_info(f"Fetching latest from {config.remote}..."))
    fetch = git.fetch_prune(config.remote)
    if not fetch.ok:
        # Continue with whatever remote refs we already have
        logger.debug("fetch failed: %s", fetch.stderr.strip())
        click.echo(
            style_warn(f"Fetch from {config.remote} failed; remote branches may be stale")
        )

    orphans = find_orphans(repo, git, config.remote)

    if not orphans:
        click.echo(
            style_success("No orphaned worktrees found. All worktrees have valid branches.")
        )
        return 0

    click.echo("")
    for info in orphans:
        click.echo(f"Found orphaned worktree: {info.branch}")
        click.echo(style_dim(f"  Path: {info.path}"))

    click.echo("")
    click.echo(f"Found {len(orphans)} orphaned worktree(s).")
    if not confirm("Remove all orphaned worktrees?"):
        click.echo(style_dim("Cancelled."))
        return None

    removed = remove_orphans(repo, orphans, git, cwd=cwd)
    click.echo("")
    click.echo(style_success(f"Removed {removed} orphaned worktree(s)."))
    return removed
