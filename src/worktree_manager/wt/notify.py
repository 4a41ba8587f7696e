"""Post-creation setup hints: hook, per-repo message, or default message."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import click

from worktree_manager.common import WorktreeConfig, echo_indented


class PostCreateSource(Enum):
    """Which configured source supplies the post-creation instructions."""

    HOOK = "hook"
    REPO_MESSAGE = "repo message"
    DEFAULT_MESSAGE = "default message"
    NONE = "none"


def select_post_create_source(config: WorktreeConfig, repo: str) -> PostCreateSource:
    """Pick the first configured source: hook, then per-repo, then default."""
    if config.post_create_hook is not None:
        return PostCreateSource.HOOK
    if config.post_create_msgs.get(repo):
        return PostCreateSource.REPO_MESSAGE
    if config.post_create_msg:
        return PostCreateSource.DEFAULT_MESSAGE
    return PostCreateSource.NONE


def post_create_message(config: WorktreeConfig, repo: str) -> str | None:
    """The message text for the active source, or None for a hook or nothing."""
    source = select_post_create_source(config, repo)
    if source is PostCreateSource.REPO_MESSAGE:
        return config.post_create_msgs[repo]
    if source is PostCreateSource.DEFAULT_MESSAGE:
        return config.post_create_msg
    return None


def notify_post_create(
    config: WorktreeConfig, repo: str, branch: str, path: Path
) -> PostCreateSource:
    """Show setup instructions for a new worktree. Returns the source used."""
    hook = config.post_create_hook
    if hook is not None:
        # The hook owns all output
        hook(repo, branch, path)
        return PostCreateSource.HOOK

    source = select_post_create_source(config, repo)

    message = post_create_message(config, repo)
    if message:
        click.echo("Don't forget to run:")
        echo_indented(message)
    return source
