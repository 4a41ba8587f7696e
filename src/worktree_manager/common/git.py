"""Git operations shared across worktree commands."""

from __future__ import annotations

import logging
import subprocess
from enum import Enum
from pathlib import Path
from typing import NamedTuple

logger = logging.getLogger(__name__)


class GitResult(NamedTuple):
    """Outcome of a single git invocation."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class BranchLocation(Enum):
    """Where a branch was found."""

    LOCAL = "local"
    REMOTE = "remote"
    MISSING = "missing"


class Git:
    """Runs git commands against one main repository.

    Every call goes through run(), so tests can substitute a fake by
    overriding that single method.
    """

    def __init__(self, repo_path: Path, executable: str = "git") -> None:
        self.repo_path = repo_path
        self.executable = executable

    def run(self, *args: str) -> GitResult:
        """Run a git command in the main repository and capture its output."""
        logger.debug("git %s (cwd=%s)", " ".join(args), self.repo_path)
        result = subprocess.run(
            [self.executable, *args],
            check=False,
            cwd=self.repo_path,
            capture_output=True,
            text=True,
        )
        logger.debug("git %s -> %d", args[0] if args else "", result.returncode)
        return GitResult(result.returncode, result.stdout, result.stderr)

    def output(self, *args: str) -> str | None:
        """Run a git command and return stripped stdout, or None on failure."""
        result = self.run(*args)
        return result.stdout.strip() if result.ok else None

    def ref_exists(self, ref: str) -> bool:
        """Check whether a fully qualified ref exists."""
        return self.run("show-ref", "--verify", "--quiet", ref).ok

    def local_branch_exists(self, branch: str) -> bool:
        return self.ref_exists(f"refs/heads/{branch}")

    def remote_branch_exists(self, branch: str, remote: str = "origin") -> bool:
        return self.ref_exists(f"refs/remotes/{remote}/{branch}")

    def locate_branch(self, branch: str, remote: str = "origin") -> BranchLocation:
        """Check the local ref first, then the remote-tracking ref."""
        if self.local_branch_exists(branch):
            return BranchLocation.LOCAL
        if self.remote_branch_exists(branch, remote):
            return BranchLocation.REMOTE
        return BranchLocation.MISSING

    def fetch_prune(self, remote: str = "origin") -> GitResult:
        return self.run("fetch", "--prune", remote)

    def worktree_list(self) -> GitResult:
        """Porcelain worktree listing."""
        return self.run("worktree", "list", "--porcelain")

    def worktree_prune(self) -> GitResult:
        return self.run("worktree", "prune")

    def worktree_add(
        self, path: Path, branch: str, *, new_branch: bool = False, base: str | None = None
    ) -> GitResult:
        """Add a worktree checking out branch, or creating it from base."""
        args = ["worktree", "add"]
        if new_branch:
            args.extend(["-b", branch, str(path)])
            if base:
                args.append(base)
        else:
            args.extend([str(path), branch])
        return self.run(*args)

    def worktree_remove(self, path: Path, *, force: bool = False) -> GitResult:
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(str(path))
        return self.run(*args)
