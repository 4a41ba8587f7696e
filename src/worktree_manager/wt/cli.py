"""Git worktree manager: switch, create, list, remove and clean up worktrees."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import NoReturn

import click

from worktree_manager.common import (
    Git,
    WorktreeConfig,
    WorktreeError,
    fuzzy_select,
    output_cd,
    style_dim,
    style_error,
)
from worktree_manager.common.logging_config import setup_logging
from worktree_manager.wt.cleanup import cleanup_orphans
from worktree_manager.wt.locator import Repository, resolve_repository
from worktree_manager.wt.notify import notify_post_create
from worktree_manager.wt.remove import remove_worktree
from worktree_manager.wt.report import report_config
from worktree_manager.wt.switch import switch_or_create
from worktree_manager.wt.worktrees import echo_worktrees, is_main_worktree, list_worktrees

REPO_FLAG = "--repo="


class WorktreeGroup(click.Group):
    """Group that accepts --repo=NAME anywhere and treats unknown commands as branches."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        # Group options must precede the subcommand; hoist --repo=NAME there
        repo_args = [a for a in args if a.startswith(REPO_FLAG)]
        rest = [a for a in args if not a.startswith(REPO_FLAG)]
        return super().parse_args(ctx, [*repo_args, *rest])

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            switch = self.get_command(ctx, "switch")
            if switch is not None:
                return switch.name, switch, args
        return super().resolve_command(ctx, args)


@dataclass
class WorktreeState:
    """Per-invocation state shared with subcommands via ctx.obj."""

    repo_name: str | None
    config: WorktreeConfig | None = None

    def get_config(self) -> WorktreeConfig:
        if self.config is None:
            self.config = WorktreeConfig.from_env()
        return self.config


def fail(msg: str) -> NoReturn:
    click.echo(style_error(msg), err=True)
    sys.exit(1)


def require_repo(state: WorktreeState) -> tuple[WorktreeConfig, Repository, Git]:
    """Resolve config and repository or exit with error."""
    try:
        config = state.get_config()
        repo = resolve_repository(state.repo_name, config)
    except WorktreeError as e:
        fail(str(e))
    return config, repo, Git(repo.main_path)


# CLI Commands


@click.group(cls=WorktreeGroup, invoke_without_command=True)
@click.option(
    "--repo",
    "repo_name",
    metavar="NAME",
    help="Repository under WORKTREE_REPOS_ROOT (default: WORKTREE_DEFAULT_REPO)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every git command")
@click.version_option(package_name="worktree-manager")
@click.pass_context
def cli(ctx: click.Context, repo_name: str | None, *, verbose: bool) -> None:
    """Git worktree manager for repositories under a common root.

    Worktrees live at WORKTREE_BASE_DIR/<repo>/<branch>.

    EXAMPLES:
        worktree feature-x           # Switch to (or create) worktree for feature-x
        worktree ls                  # List worktrees
        worktree rm feature-x        # Remove worktree for feature-x
        worktree cleanup             # Remove worktrees for deleted branches
        worktree config              # Show current configuration
        worktree --repo=other ls     # Work on another repository

    ALIASES:
        worktree sw = worktree switch
        worktree ls = worktree list
        worktree rm = worktree remove
    """
    setup_logging(verbose=verbose)
    preset = ctx.obj if isinstance(ctx.obj, WorktreeConfig) else None
    state = WorktreeState(repo_name=repo_name, config=preset)
    ctx.obj = state

    if ctx.invoked_subcommand is None:
        _, repo, git = require_repo(state)
        click.echo(ctx.get_help())
        click.echo("")
        click.echo(f"Current worktrees for {repo.name}:")
        try:
            echo_worktrees(git)
        except WorktreeError as e:
            fail(str(e))
        sys.exit(1)


@cli.command("list")
@click.pass_obj
def list_cmd(state: WorktreeState) -> None:
    """List all worktrees.

    EXAMPLES:
        worktree list
        worktree ls
    """
    _, _, git = require_repo(state)
    try:
        echo_worktrees(git)
    except WorktreeError as e:
        fail(str(e))


@cli.command("switch")
@click.argument("branch", required=False)
@click.pass_obj
def switch_cmd(state: WorktreeState, branch: str | None) -> None:
    """Switch to a branch's worktree, creating it if needed.

    Without BRANCH, shows interactive picker of existing worktrees.

    EXAMPLES:
        worktree switch feature-x   # Switch to or create worktree
        worktree feature-x          # Same (switch is the fallback command)
        worktree switch             # Interactive: pick worktree
    """
    config, repo, git = require_repo(state)

    if branch is None:
        _pick_worktree(repo, git)
        return

    try:
        result = switch_or_create(repo, branch, git, config)
    except WorktreeError as e:
        fail(str(e))

    if result is None:
        sys.exit(1)

    output_cd(result.path)
    if result.created:
        click.echo("")
        notify_post_create(config, repo.name, branch, result.path)


def _pick_worktree(repo: Repository, git: Git) -> None:
    try:
        listed = list_worktrees(git)
    except WorktreeError as e:
        fail(str(e))
    worktrees = [
        wt for wt in listed if not wt.is_bare and not is_main_worktree(wt, repo.main_path)
    ]
    if not worktrees:
        fail("No worktrees found.")

    options: list[str] = []
    for wt in worktrees:
        branch_info = f"[{wt.branch}]" if wt.branch else "[detached]"
        options.append(f"{wt.name} {branch_info}")

    index = fuzzy_select(options, "Select worktree")
    if index is None:
        click.echo(style_dim("Cancelled."))
        return

    output_cd(worktrees[index].path)


@cli.command()
@click.argument("branch", required=False)
@click.option("-f", "--force", is_flag=True, help="Force remove even if dirty")
@click.pass_obj
def remove(state: WorktreeState, branch: str | None, *, force: bool) -> None:
    """Remove a branch's worktree.

    EXAMPLES:
        worktree remove feature-x   # Remove worktree for feature-x
        worktree rm feature-x -f    # Force remove with uncommitted changes
    """
    _, repo, git = require_repo(state)

    if not branch:
        fail("Usage: worktree rm <branch-name>")

    try:
        removed = remove_worktree(repo, branch, git, force=force)
    except WorktreeError as e:
        fail(str(e))

    if not removed:
        sys.exit(1)


@cli.command()
@click.pass_obj
def cleanup(state: WorktreeState) -> None:
    """Remove worktrees whose branches were deleted.

    Fetches from the remote first, then lists worktrees whose branch exists
    neither locally nor on the remote and removes them after one confirmation.

    EXAMPLES:
        worktree cleanup
    """
    config, repo, git = require_repo(state)
    try:
        removed = cleanup_orphans(repo, git, config)
    except WorktreeError as e:
        fail(str(e))
    if removed is None:
        sys.exit(1)


@cli.command("config")
@click.pass_obj
def config_cmd(state: WorktreeState) -> None:
    """Show current configuration."""
    config, repo, _ = require_repo(state)
    report_config(config, repo)


# Short aliases for frequently used commands
cli.add_command(switch_cmd, name="sw")
cli.add_command(list_cmd, name="ls")
cli.add_command(remove, name="rm")
