"""Tests for environment configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from worktree_manager.common.config import (
    DEFAULT_POST_CREATE_MSG,
    CommandHook,
    WorktreeConfig,
    parse_post_create_msgs,
)
from worktree_manager.common.errors import ConfigError


class TestFromEnv:
    """Tests for WorktreeConfig.from_env."""

    def test_defaults(self) -> None:
        config = WorktreeConfig.from_env({})

        assert config.repos_root == Path.home() / "code"
        assert config.worktree_base_dir == Path.home() / "code" / "worktrees"
        assert config.default_repo == "my-repo"
        assert config.post_create_msg == DEFAULT_POST_CREATE_MSG
        assert config.post_create_msgs == {}
        assert config.post_create_hook is None
        assert config.base_branch == "master"
        assert config.remote == "origin"

    def test_base_dir_follows_repos_root(self) -> None:
        config = WorktreeConfig.from_env({"WORKTREE_REPOS_ROOT": "/tmp/code"})

        assert config.repos_root == Path("/tmp/code")
        assert config.worktree_base_dir == Path("/tmp/code/worktrees")

    def test_explicit_values(self) -> None:
        config = WorktreeConfig.from_env(
            {
                "WORKTREE_REPOS_ROOT": "/src",
                "WORKTREE_BASE_DIR": "/trees",
                "WORKTREE_DEFAULT_REPO": "api",
                "WORKTREE_BASE_BRANCH": "main",
                "WORKTREE_REMOTE": "upstream",
            }
        )

        assert config.worktree_base_dir == Path("/trees")
        assert config.default_repo == "api"
        assert config.base_branch == "main"
        assert config.remote == "upstream"

    def test_empty_values_use_defaults(self) -> None:
        config = WorktreeConfig.from_env(
            {"WORKTREE_DEFAULT_REPO": "", "WORKTREE_POST_CREATE_MSG": ""}
        )

        assert config.default_repo == "my-repo"
        assert config.post_create_msg == DEFAULT_POST_CREATE_MSG

    def test_expands_user(self) -> None:
        config = WorktreeConfig.from_env({"WORKTREE_REPOS_ROOT": "~/projects"})
        assert config.repos_root == Path.home() / "projects"

    def test_message_newline_escapes(self) -> None:
        config = WorktreeConfig.from_env(
            {"WORKTREE_POST_CREATE_MSG": "npm install\\nnpm run dev"}
        )
        assert config.post_create_msg == "npm install\nnpm run dev"

    def test_hook_command(self) -> None:
        config = WorktreeConfig.from_env({"WORKTREE_POST_CREATE_HOOK": "setup.sh -q"})

        assert isinstance(config.post_create_hook, CommandHook)
        assert config.post_create_hook.command == "setup.sh -q"

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORKTREE_DEFAULT_REPO", "from-env")
        assert WorktreeConfig.from_env().default_repo == "from-env"


class TestParsePostCreateMsgs:
    """Tests for the per-repo message mapping."""

    def test_empty(self) -> None:
        assert parse_post_create_msgs(None) == {}
        assert parse_post_create_msgs("") == {}

    def test_parses_mapping(self) -> None:
        raw = json.dumps({"web": "npm install\\nnpm test", "api": "make"})
        assert parse_post_create_msgs(raw) == {"web": "npm install\nnpm test", "api": "make"}

    def test_keeps_empty_entries(self) -> None:
        """An empty entry stays distinct from a missing key."""
        assert parse_post_create_msgs('{"web": ""}') == {"web": ""}

    def test_invalid_json(self) -> None:
        with pytest.raises(ConfigError, match="not valid JSON"):
            parse_post_create_msgs("{web: npm}")

    def test_not_an_object(self) -> None:
        with pytest.raises(ConfigError, match="JSON object"):
            parse_post_create_msgs('["npm install"]')

    def test_non_string_value(self) -> None:
        with pytest.raises(ConfigError, match="must be a string"):
            parse_post_create_msgs('{"web": 1}')


class TestCommandHook:
    """Tests for shell-command hooks."""

    def test_appends_arguments(self, tmp_path: Path, mocker: Any) -> None:
        run = mocker.patch("subprocess.run", return_value=MagicMock(returncode=0))

        CommandHook("setup.sh --fast")("demo", "feature-x", tmp_path)

        run.assert_called_once_with(
            [
                "sh",
                "-c",
                'setup.sh --fast "$@"',
                "worktree-hook",
                "demo",
                "feature-x",
                str(tmp_path),
            ],
            check=False,
            cwd=tmp_path,
        )

    def test_failure_is_not_raised(self, tmp_path: Path, mocker: Any) -> None:
        mocker.patch("subprocess.run", return_value=MagicMock(returncode=3))
        CommandHook("false")("demo", "x", tmp_path)

    def test_os_error_is_logged(
        self, tmp_path: Path, mocker: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        mocker.patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file"))

        CommandHook("setup.sh")("demo", "x", tmp_path)

        assert "could not run" in caplog.text

    def test_missing_executable_is_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        CommandHook("no-such-setup-cmd")("demo", "x", tmp_path)
        assert "exited with 127" in caplog.text

    def test_unbalanced_quote_is_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        CommandHook("echo 'oops")("demo", "x", tmp_path)
        assert "Post-create hook" in caplog.text

    def test_shell_operators(self, tmp_path: Path) -> None:
        CommandHook("touch first && touch")("demo", "feature-x", tmp_path)

        assert (tmp_path / "first").exists()
        assert (tmp_path / "demo").exists()
        assert (tmp_path / "feature-x").exists()

    def test_runs_real_command(self, tmp_path: Path) -> None:
        script = tmp_path / "hook.sh"
        script.write_text('#!/bin/sh\necho "$1 $2 $3" > "$3/hook.out"\n')
        script.chmod(0o755)

        CommandHook(str(script))("demo", "feature-x", tmp_path)

        assert (tmp_path / "hook.out").read_text() == f"demo feature-x {tmp_path}\n"
