"""Switch to a branch's worktree, creating it on confirmation."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

import click

from worktree_manager.common import (
    BranchLocation,
    Confirm,
    Git,
    WorktreeConfig,
    confirm_prompt,
    style_dim,
    style_error,
    style_info,
    style_success,
    validate_branch_name,
)
from worktree_manager.wt.locator import Repository


class SwitchResult(NamedTuple):
    """Where to switch to, and whether the worktree was just created."""

    path: Path
    created: bool


def describe_branch(branch: str, location: BranchLocation, config: WorktreeConfig) -> str:
    """Explain what creating a worktree for branch will do."""
    if location is BranchLocation.LOCAL:
        return f"Branch '{branch}' exists locally."
    if location is BranchLocation.REMOTE:
        return f"Branch '{branch}' exists on {config.remote}."
    return (
        f"Branch '{branch}' does not exist "
        f"(will create new branch from {config.base_branch})."
    )


def create_worktree(
    repo: Repository,
    branch: str,
    location: BranchLocation,
    git: Git,
    config: WorktreeConfig,
) -> Path | None:
    """Create the worktree for branch. Returns path on success, None on failure."""
    worktree_path = repo.worktree_path(branch)

    # Ensure worktrees directory exists
    repo.worktree_base.mkdir(parents=True, exist_ok=True)

    if location is BranchLocation.MISSING:
        click.echo(
            style_info(
                f"Creating worktree with new branch '{branch}' from {config.base_branch}..."
            )
        )
        result = git.worktree_add(
            worktree_path, branch, new_branch=True, base=config.base_branch
        )
    else:
        click.echo(style_info(f"Creating worktree for existing branch '{branch}'..."))
        result = git.worktree_add(worktree_path, branch)

    if not result.ok:
        click.echo(
            style_error(f"Error creating worktree: {result.stderr.strip()}"), err=True
        )
        return None

    click.echo(style_success(f"Worktree created at {worktree_path}"))
    return worktree_path


def switch_or_create(
    repo: Repository,
    branch: str,
    git: Git,
    config: WorktreeConfig,
    *,
    confirm: Confirm = confirm_prompt,
) -> SwitchResult | None:
    """Return the worktree path for branch, creating the worktree if needed.

    An existing directory at <worktree_base>/<branch> is used as-is without
    consulting git. Otherwise the user is asked before anything is created.
    Returns None when the user declines or git fails.
    """
    validate_branch_name(branch)
    worktree_path = repo.worktree_path(branch)

    if worktree_path.is_dir():
        click.echo(style_info(f"Switching to worktree: {worktree_path}"))
        return SwitchResult(worktree_path, created=False)

    click.echo(f"Worktree for branch '{branch}' doesn't exist at:")
    click.echo(style_dim(f"  {worktree_path}"))

    location = git.locate_branch(branch, config.remote)
    click.echo(describe_branch(branch, location, config))

    if not confirm("Create worktree?"):
        click.echo(style_dim("Cancelled."))
        return None

    new_path = create_worktree(repo, branch, location, git, config)
    if new_path is None:
        return None
    return SwitchResult(new_path, created=True)
