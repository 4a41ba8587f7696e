"""Shared test fixtures for worktree-manager."""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest

from worktree_manager.common import Git, GitResult, WorktreeConfig


def git(*args: str, cwd: Path) -> subprocess.CompletedProcess[str]:
    """Run git in cwd, failing the test on error."""
    return subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )


def init_repo(repo: Path) -> Path:
    """Create a git repository on branch master with one commit."""
    repo.mkdir(parents=True)
    git("init", cwd=repo)
    # Independent of init.defaultBranch
    git("symbolic-ref", "HEAD", "refs/heads/master", cwd=repo)
    git("config", "user.email", "test@example.com", cwd=repo)
    git("config", "user.name", "Test User", cwd=repo)
    (repo / "README.md").write_text("# Test Repo\n")
    git("add", ".", cwd=repo)
    git("commit", "-m", "Initial commit", cwd=repo)
    return repo


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's WORKTREE_* settings out of tests."""
    for name in [
        "WORKTREE_REPOS_ROOT",
        "WORKTREE_BASE_DIR",
        "WORKTREE_DEFAULT_REPO",
        "WORKTREE_POST_CREATE_MSG",
        "WORKTREE_POST_CREATE_MSGS",
        "WORKTREE_POST_CREATE_HOOK",
        "WORKTREE_BASE_BRANCH",
        "WORKTREE_REMOTE",
        "WORKTREE_CD_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for testing."""
    return init_repo(tmp_path / "test-repo")


@pytest.fixture
def repos_root(tmp_path: Path) -> Path:
    """Directory holding repositories, like ~/code."""
    root = tmp_path / "code"
    root.mkdir()
    return root


@pytest.fixture
def demo_repo(repos_root: Path) -> Path:
    """A real repository named 'demo' under repos_root."""
    return init_repo(repos_root / "demo")


@pytest.fixture
def config(repos_root: Path) -> WorktreeConfig:
    """Config pointing at repos_root with 'demo' as the default repo."""
    return WorktreeConfig(
        repos_root=repos_root,
        worktree_base_dir=repos_root / "worktrees",
        default_repo="demo",
    )


class FakeGit(Git):
    """Git double with in-memory refs and worktrees.

    Records every call. Commands whose leading arguments match an entry in
    failing exit with status 1.
    """

    def __init__(
        self,
        repo_path: Path,
        *,
        local: Iterable[str] = (),
        remote: Iterable[str] = (),
        remote_name: str = "origin",
        failing: Iterable[tuple[str, ...]] = (),
    ) -> None:
        super().__init__(repo_path)
        self.local = set(local)
        self.remote = set(remote)
        self.remote_name = remote_name
        self.failing = list(failing)
        self.worktrees: list[tuple[Path, str | None]] = [(repo_path, "master")]
        self.calls: list[tuple[str, ...]] = []

    def add_worktree(self, path: Path, branch: str | None) -> None:
        self.worktrees.append((path, branch))

    def porcelain(self) -> str:
        records = []
        for path, branch in self.worktrees:
            lines = [f"worktree {path}", "HEAD 0123456789abcdef0123456789abcdef01234567"]
            lines.append(f"branch refs/heads/{branch}" if branch else "detached")
            records.append("\n".join(lines))
        return "\n\n".join(records) + "\n"

    def run(self, *args: str) -> GitResult:
        self.calls.append(args)
        for prefix in self.failing:
            if args[: len(prefix)] == prefix:
                return GitResult(1, "", "fatal: simulated failure")

        if args[:3] == ("show-ref", "--verify", "--quiet"):
            refs = {f"refs/heads/{b}" for b in self.local}
            refs |= {f"refs/remotes/{self.remote_name}/{b}" for b in self.remote}
            return GitResult(0 if args[3] in refs else 1, "", "")
        if args[:2] == ("worktree", "list"):
            return GitResult(0, self.porcelain(), "")
        if args[:2] == ("worktree", "remove"):
            target = Path(args[-1])
            self.worktrees = [wt for wt in self.worktrees if wt[0] != target]
        return GitResult(0, "", "")

    def called(self, *prefix: str) -> bool:
        return any(call[: len(prefix)] == prefix for call in self.calls)


@pytest.fixture
def fake_git(tmp_path: Path) -> Callable[..., Any]:
    """Factory for FakeGit instances rooted at the demo repo path."""

    def make(repo_path: Path | None = None, **kwargs: Any) -> FakeGit:
        return FakeGit(repo_path or tmp_path / "code" / "demo", **kwargs)

    return make
