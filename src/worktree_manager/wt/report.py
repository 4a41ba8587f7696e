"""Print the resolved configuration for a repository."""

from __future__ import annotations

import click

from worktree_manager.common import (
    WorktreeConfig,
    echo_indented,
    style_dim,
    style_error,
    style_success,
    style_warn,
)
from worktree_manager.common.config import (
    ENV_BASE_BRANCH,
    ENV_BASE_DIR,
    ENV_DEFAULT_REPO,
    ENV_POST_CREATE_HOOK,
    ENV_POST_CREATE_MSG,
    ENV_POST_CREATE_MSGS,
    ENV_REMOTE,
    ENV_REPOS_ROOT,
)
from worktree_manager.wt.locator import Repository
from worktree_manager.wt.notify import (
    PostCreateSource,
    post_create_message,
    select_post_create_source,
)


def _heading(text: str) -> None:
    click.echo(click.style(text, bold=True))


def describe_post_create_source(config: WorktreeConfig, repo_name: str) -> str:
    """Human-readable name of the active post-create source."""
    source = select_post_create_source(config, repo_name)
    if source is PostCreateSource.HOOK:
        command = getattr(config.post_create_hook, "command", None)
        return f"{ENV_POST_CREATE_HOOK} ({command})" if command else "post-create hook"
    if source is PostCreateSource.REPO_MESSAGE:
        return f"{ENV_POST_CREATE_MSGS}[{repo_name}]"
    if source is PostCreateSource.DEFAULT_MESSAGE:
        return f"{ENV_POST_CREATE_MSG} (default)"
    return "nothing configured"


def report_config(config: WorktreeConfig, repo: Repository) -> None:
    """Print paths, existence checks and the active post-create source."""
    _heading("Worktree Configuration")
    click.echo("=" * 22)
    click.echo("")

    _heading("Path Configuration:")
    click.echo(f"  {ENV_REPOS_ROOT:<22}= {config.repos_root}")
    click.echo(f"  {ENV_BASE_DIR:<22}= {config.worktree_base_dir}")
    click.echo(f"  {ENV_DEFAULT_REPO:<22}= {config.default_repo}")
    click.echo(f"  {ENV_BASE_BRANCH:<22}= {config.base_branch}")
    click.echo(f"  {ENV_REMOTE:<22}= {config.remote}")
    click.echo("")

    _heading(f"Current Repo: {repo.name}")
    click.echo(f"  Main repo path:     {repo.main_path}")
    click.echo(f"  Worktree base path: {repo.worktree_base}")
    click.echo("")
    if repo.exists:
        click.echo("  " + style_success("Main repo exists"))
    else:
        click.echo("  " + style_error("Main repo not found"))
    if repo.worktree_base.is_dir():
        click.echo("  " + style_success("Worktree directory exists"))
    else:
        click.echo(
            "  "
            + style_warn(
                "Worktree directory does not exist (will be created on first worktree)"
            )
        )

    click.echo("")
    _heading("Post-Creation Instructions:")
    click.echo(f"  Using: {describe_post_create_source(config, repo.name)}")
    message = post_create_message(config, repo.name)
    if message:
        click.echo("  Message:")
        echo_indented(message, prefix="    ")

    configured = sorted(name for name, msg in config.post_create_msgs.items() if msg)
    if configured:
        click.echo("")
        _heading("Repo-Specific Messages Configured:")
        for name in configured:
            click.echo(f"  {name}")
    else:
        click.echo(style_dim("  (no repo-specific messages configured)"))
