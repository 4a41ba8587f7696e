"""List the worktrees git knows about for a repository."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

import click

from worktree_manager.common import (
    CYAN,
    DIM,
    GREEN,
    YELLOW,
    Git,
    GitCommandError,
    style_dim,
)


class WorktreeInfo(NamedTuple):
    """Information about a git worktree."""

    path: Path
    branch: str | None
    is_bare: bool = False

    @property
    def name(self) -> str:
        return self.path.name


def parse_worktree_list(output: str) -> list[WorktreeInfo]:
    """Parse `git worktree list --porcelain` output.

    Records are separated by blank lines; detached entries have no branch.
    """
    worktrees: list[WorktreeInfo] = []
    current: dict[str, str] = {}

    def flush() -> None:
        if current.get("worktree"):
            worktrees.append(
                WorktreeInfo(
                    path=Path(current["worktree"]),
                    branch=current.get("branch", "").removeprefix("refs/heads/")
                    or None,
                    is_bare="bare" in current,
                )
            )
        current.clear()

    for line in output.split("\n"):
        if not line:
            flush()
        elif line.startswith("worktree "):
            current["worktree"] = line[9:]
        elif line.startswith("branch "):
            current["branch"] = line[7:]
        elif line == "bare":
            current["bare"] = "true"

    # Handle last entry
    flush()
    return worktrees


def list_worktrees(git: Git) -> list[WorktreeInfo]:
    """List all worktrees for the repository, main checkout first.

    Raises GitCommandError if git cannot list them.
    """
    result = git.worktree_list()
    if not result.ok:
        raise GitCommandError("worktree list", result.stderr)
    return parse_worktree_list(result.stdout)


def is_main_worktree(info: WorktreeInfo, main_path: Path) -> bool:
    return info.path.resolve() == main_path.resolve()


def format_worktree_line(info: WorktreeInfo) -> str:
    """Format one worktree as a styled listing row."""
    name_styled = click.style(info.name, fg=CYAN, bold=True)

    if info.is_bare:
        branch_styled = click.style("[bare]", fg=DIM)
    elif info.branch:
        branch_styled = click.style(f"[{info.branch}]", fg=GREEN)
    else:
        branch_styled = click.style("[detached]", fg=YELLOW)

    path_styled = click.style(str(info.path), fg=DIM)

    return f"  {name_styled:30} {branch_styled:40} {path_styled}"


def echo_worktrees(git: Git) -> None:
    """Print the worktree listing."""
    worktrees = list_worktrees(git)
    if not worktrees:
        click.echo(style_dim("No worktrees found."))
        return
    for info in worktrees:
        click.echo(format_worktree_line(info))
