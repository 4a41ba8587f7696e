"""Configuration read from the environment once per invocation."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from worktree_manager.common.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_REPOS_ROOT = "WORKTREE_REPOS_ROOT"
ENV_BASE_DIR = "WORKTREE_BASE_DIR"
ENV_DEFAULT_REPO = "WORKTREE_DEFAULT_REPO"
ENV_POST_CREATE_MSG = "WORKTREE_POST_CREATE_MSG"
ENV_POST_CREATE_MSGS = "WORKTREE_POST_CREATE_MSGS"
ENV_POST_CREATE_HOOK = "WORKTREE_POST_CREATE_HOOK"
ENV_BASE_BRANCH = "WORKTREE_BASE_BRANCH"
ENV_REMOTE = "WORKTREE_REMOTE"

DEFAULT_REPO = "my-repo"
DEFAULT_POST_CREATE_MSG = "Run your setup commands here"
DEFAULT_BASE_BRANCH = "master"
DEFAULT_REMOTE = "origin"

# Called with (repo, branch, worktree_path) after a worktree is created
PostCreateHook = Callable[[str, str, Path], None]


class CommandHook:
    """Post-create hook that runs a shell command with repo, branch and path appended.

    The command goes through `sh -c`, so operators like `&&` work; the three
    values are appended to the command line as "$@".
    """

    def __init__(self, command: str) -> None:
        self.command = command

    def __call__(self, repo: str, branch: str, path: Path) -> None:
        script = f'{self.command} "$@"'
        args = ["sh", "-c", script, "worktree-hook", repo, branch, str(path)]
        try:
            result = subprocess.run(args, check=False, cwd=path)
        except OSError as e:
            logger.warning("Post-create hook %r could not run: %s", self.command, e)
            return
        if result.returncode != 0:
            logger.warning(
                "Post-create hook %r exited with %d", self.command, result.returncode
            )

    def __repr__(self) -> str:
        return f"CommandHook({self.command!r})"


@dataclass(frozen=True)
class WorktreeConfig:
    """Resolved settings shared by every worktree command."""

    repos_root: Path
    worktree_base_dir: Path
    default_repo: str = DEFAULT_REPO
    post_create_msg: str = DEFAULT_POST_CREATE_MSG
    post_create_msgs: dict[str, str] = field(default_factory=dict)
    post_create_hook: PostCreateHook | None = None
    base_branch: str = DEFAULT_BASE_BRANCH
    remote: str = DEFAULT_REMOTE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> WorktreeConfig:
        """Build config from WORKTREE_* variables. Empty values count as unset."""
        if environ is None:
            environ = os.environ

        def get(name: str) -> str | None:
            return environ.get(name) or None

        repos_root_env = get(ENV_REPOS_ROOT)
        repos_root = (
            Path(repos_root_env).expanduser()
            if repos_root_env
            else Path.home() / "code"
        )
        base_dir_env = get(ENV_BASE_DIR)
        worktree_base_dir = (
            Path(base_dir_env).expanduser() if base_dir_env else repos_root / "worktrees"
        )

        hook_command = get(ENV_POST_CREATE_HOOK)

        return cls(
            repos_root=repos_root,
            worktree_base_dir=worktree_base_dir,
            default_repo=get(ENV_DEFAULT_REPO) or DEFAULT_REPO,
            post_create_msg=_unescape(
                get(ENV_POST_CREATE_MSG) or DEFAULT_POST_CREATE_MSG
            ),
            post_create_msgs=parse_post_create_msgs(get(ENV_POST_CREATE_MSGS)),
            post_create_hook=CommandHook(hook_command) if hook_command else None,
            base_branch=get(ENV_BASE_BRANCH) or DEFAULT_BASE_BRANCH,
            remote=get(ENV_REMOTE) or DEFAULT_REMOTE,
        )


def parse_post_create_msgs(raw: str | None) -> dict[str, str]:
    """Parse the per-repo message mapping from a JSON object."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{ENV_POST_CREATE_MSGS} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{ENV_POST_CREATE_MSGS} must be a JSON object")

    msgs: dict[str, str] = {}
    for repo, msg in data.items():
        if not isinstance(msg, str):
            raise ConfigError(
                f"{ENV_POST_CREATE_MSGS}[{repo!r}] must be a string, got {type(msg).__name__}"
            )
        msgs[repo] = _unescape(msg)
    return msgs


def _unescape(msg: str) -> str:
    # Messages set in shell startup files often spell newlines as \n
    return msg.replace("\\n", "\n")
