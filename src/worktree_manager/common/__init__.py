"""Shared utilities for worktree commands."""

from worktree_manager.common.config import CommandHook, PostCreateHook, WorktreeConfig
from worktree_manager.common.errors import (
    ConfigError,
    GitCommandError,
    RepositoryNotFoundError,
    WorktreeError,
    WorktreeNotFoundError,
)
from worktree_manager.common.git import BranchLocation, Git, GitResult
from worktree_manager.common.shell import is_inside, output_cd
from worktree_manager.common.ui import (
    CYAN,
    DIM,
    GREEN,
    RED,
    YELLOW,
    Confirm,
    confirm_prompt,
    echo_indented,
    fuzzy_select,
    style_dim,
    style_error,
    style_info,
    style_success,
    style_warn,
)
from worktree_manager.common.validate import (
    ValidationError,
    validate_branch_name,
    validate_repo_name,
)

__all__ = [
    "CYAN",
    "DIM",
    "GREEN",
    "RED",
    "YELLOW",
    "BranchLocation",
    "CommandHook",
    "ConfigError",
    "Confirm",
    "GitCommandError",
    "Git",
    "GitResult",
    "PostCreateHook",
    "RepositoryNotFoundError",
    "ValidationError",
    "WorktreeConfig",
    "WorktreeError",
    "WorktreeNotFoundError",
    "confirm_prompt",
    "echo_indented",
    "fuzzy_select",
    "is_inside",
    "output_cd",
    "style_dim",
    "style_error",
    "style_info",
    "style_success",
    "style_warn",
    "validate_branch_name",
    "validate_repo_name",
]
