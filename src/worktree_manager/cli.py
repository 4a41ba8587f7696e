"""Entry point for the worktree command, plus shell integration install."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from worktree_manager.common import (
    ConfigError,
    WorktreeConfig,
    confirm_prompt,
    style_dim,
    style_error,
    style_info,
    style_success,
)
from worktree_manager.common.config import (
    ENV_BASE_DIR,
    ENV_DEFAULT_REPO,
    ENV_POST_CREATE_MSGS,
    ENV_REPOS_ROOT,
)
from worktree_manager.common.shell import (
    detect_shell,
    get_shell_wrapper,
    remove_config_block,
    startup_file,
    write_config_block,
)
from worktree_manager.wt.cli import cli

SHELL_CHOICE = click.Choice(["zsh", "bash", "auto"])


def _resolve_shell(shell: str) -> str:
    resolved = detect_shell(shell)
    if resolved is None:
        click.echo(
            style_error("Unknown shell in $SHELL. Use --shell to specify."), err=True
        )
        sys.exit(1)
    return resolved


def _default_settings() -> WorktreeConfig:
    try:
        return WorktreeConfig.from_env()
    except ConfigError:
        # Only the path settings matter here
        environ = {k: v for k, v in os.environ.items() if k != ENV_POST_CREATE_MSGS}
        return WorktreeConfig.from_env(environ)


def collect_settings(*, assume_defaults: bool) -> dict[str, str]:
    """Ask for the three path/name settings, defaulting to the current values."""
    current = _default_settings()
    repos_root = str(current.repos_root)
    base_dir = str(current.worktree_base_dir)
    default_repo = current.default_repo

    if not assume_defaults:
        old_root = repos_root
        repos_root = click.prompt(
            "  Repositories root", default=repos_root, prompt_suffix=" → "
        )
        if repos_root != old_root:
            base_dir = str(Path(repos_root).expanduser() / "worktrees")
        base_dir = click.prompt(
            "  Worktree base directory",
            default=base_dir,
            prompt_suffix=" → ",
        )
        default_repo = click.prompt(
            "  Default repository", default=default_repo, prompt_suffix=" → "
        )

    return {
        ENV_REPOS_ROOT: repos_root,
        ENV_BASE_DIR: base_dir,
        ENV_DEFAULT_REPO: default_repo,
    }


@cli.command()
@click.option(
    "--shell",
    type=SHELL_CHOICE,
    default="auto",
    help="Shell type (default: auto-detect)",
)
@click.option(
    "--print",
    "print_only",
    is_flag=True,
    help="Print shell function instead of installing",
)
@click.option("-y", "--yes", is_flag=True, help="Accept current values without prompting")
def install(shell: str, *, print_only: bool, yes: bool) -> None:
    """Install configuration and shell integration (cd support).

    Writes the WORKTREE_* settings and a `worktree` shell function to your
    shell startup file. An existing block is backed up and replaced.

    EXAMPLES:
        worktree install              # Auto-detect shell
        worktree install --shell zsh  # Install for zsh
        worktree install --print      # Print shell function only
    """
    if print_only:
        click.echo(get_shell_wrapper())
        return

    rc_file = startup_file(_resolve_shell(shell))
    settings = collect_settings(assume_defaults=yes)
    backup = write_config_block(rc_file, settings)

    if backup:
        click.echo(style_info(f"Replaced existing configuration (backup: {backup})"))
    click.echo(style_success(f"Installed to {rc_file}"))
    click.echo(style_dim(f"  Restart your shell or run: source {rc_file}"))


@cli.command()
@click.option(
    "--shell",
    type=SHELL_CHOICE,
    default="auto",
    help="Shell type (default: auto-detect)",
)
@click.option("-y", "--yes", is_flag=True, help="Don't ask for confirmation")
def uninstall(shell: str, *, yes: bool) -> None:
    """Remove configuration and shell integration from your startup file.

    EXAMPLES:
        worktree uninstall
    """
    rc_file = startup_file(_resolve_shell(shell))

    if not yes and not confirm_prompt(f"Remove worktree configuration from {rc_file}?"):
        click.echo(style_dim("Cancelled."))
        return

    backup = remove_config_block(rc_file)
    if backup is None:
        click.echo(style_dim(f"No worktree configuration found in {rc_file}"))
        return

    click.echo(style_success(f"Removed configuration from {rc_file}"))
    click.echo(style_dim(f"  Backup saved to {backup}"))


if __name__ == "__main__":
    cli()
