"""Input validation utilities for security and safety."""

from __future__ import annotations

import re

from worktree_manager.common.errors import WorktreeError


class ValidationError(WorktreeError):
    """Raised when input validation fails."""

    pass


def validate_repo_name(name: str) -> str:
    """Validate repository name: no path traversal, reasonable characters.

    Returns validated name or raises ValidationError.
    """
    if not name:
        raise ValidationError("Repository name cannot be empty")

    # Block path traversal
    if ".." in name or name.startswith("/") or name.startswith("~"):
        raise ValidationError(
            f"Invalid repository name: {name!r} (path traversal not allowed)"
        )

    # Block path separators
    if "/" in name or "\\" in name:
        raise ValidationError(
            f"Invalid repository name: {name!r} (path separators not allowed)"
        )

    # Allow alphanumeric, hyphens, underscores, dots (but not leading dots)
    if not re.match(r"^[a-zA-Z0-9_][a-zA-Z0-9._-]*$", name):
        raise ValidationError(
            f"Invalid repository name: {name!r} (use alphanumeric, hyphens, underscores)"
        )

    return name


def validate_branch_name(branch: str) -> str:
    """Validate git branch name per git-check-ref-format rules.

    Returns the branch name or raises ValidationError.
    """
    if not branch:
        raise ValidationError("Branch name cannot be empty")

    # Common dangerous patterns
    forbidden = ["..", "~", "^", ":", "\\", " ", "\t", "\n", "?", "*", "["]
    for char in forbidden:
        if char in branch:
            raise ValidationError(f"Invalid branch name: contains {char!r}")

    # Must not start/end with slash or dot
    if branch.startswith("/") or branch.endswith("/"):
        raise ValidationError("Branch name cannot start or end with /")
    if branch.startswith(".") or branch.endswith("."):
        raise ValidationError("Branch name cannot start or end with .")
    if branch.startswith("-"):
        raise ValidationError("Branch name cannot start with -")
    if branch.endswith(".lock"):
        raise ValidationError("Branch name cannot end with .lock")

    # No consecutive slashes
    if "//" in branch:
        raise ValidationError("Branch name cannot contain consecutive slashes")

    return branch
