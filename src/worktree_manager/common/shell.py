"""Shell integration utilities: cd support and startup-file configuration."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import tempfile
from pathlib import Path

import click

logger = logging.getLogger(__name__)

# Shell integration marker for cd
CD_MARKER = "Switching to "
CD_FILE_ENV = "WORKTREE_CD_FILE"

BLOCK_START = "# >>> worktree-manager >>>"
BLOCK_END = "# <<< worktree-manager <<<"
BACKUP_SUFFIX = ".worktree-manager.bak"


def output_cd(path: Path, env_var: str = CD_FILE_ENV) -> None:
    """Write path to CD file for shell wrapper to handle directory change.

    Args:
        path: The path to change to
        env_var: Environment variable containing the CD file path
    """
    cd_file = os.environ.get(env_var)
    if cd_file:
        # Validate cd_file is in temp directory to prevent path traversal
        try:
            cd_path = Path(cd_file).resolve()
            temp_dir = Path(tempfile.gettempdir()).resolve()
            cd_path.relative_to(temp_dir)
            cd_path.write_text(str(path))
        except (ValueError, OSError) as e:
            logger.debug("Not writing cd file %s: %s", cd_file, e)
    click.echo(f"{CD_MARKER}{path}")


def is_inside(path: Path, directory: Path) -> bool:
    """Check whether path is directory itself or somewhere below it."""
    try:
        path.resolve().relative_to(directory.resolve())
    except ValueError:
        return False
    return True


SHELL_WRAPPER_TEMPLATE = """
# worktree-manager shell integration
export {env_var}="${{TMPDIR:-/tmp}}/.worktree_cd_$$"

worktree() {{
    rm -f "${env_var}"
    {binary} "$@"
    local exit_code=$?

    if [[ -f "${env_var}" ]]; then
        cd "$(cat "${env_var}")"
        rm -f "${env_var}"
    fi

    return $exit_code
}}
"""


def get_shell_wrapper(binary: str | None = None) -> str:
    """Generate the `worktree` shell function (same text for zsh and bash)."""
    if binary is None:
        binary = find_binary()
    # `command` skips the shell function when only the bare name is known
    invocation = shlex.quote(binary) if os.sep in binary else f"command {binary}"
    return SHELL_WRAPPER_TEMPLATE.format(env_var=CD_FILE_ENV, binary=invocation)


def find_binary() -> str:
    """Find the worktree binary location."""
    return shutil.which("worktree") or "worktree"


def detect_shell(shell: str = "auto") -> str | None:
    """Resolve 'auto' from $SHELL. Returns 'zsh', 'bash', or None if unknown."""
    if shell != "auto":
        return shell
    shell_path = os.environ.get("SHELL", "")
    if "zsh" in shell_path:
        return "zsh"
    if "bash" in shell_path:
        return "bash"
    return None


def startup_file(shell: str, home: Path | None = None) -> Path:
    """Return the startup file for a shell."""
    home = home or Path.home()
    return home / ".zshrc" if shell == "zsh" else home / ".bashrc"


def render_config_block(settings: dict[str, str]) -> str:
    """Render export lines plus the wrapper eval, fenced by block markers."""
    lines = [BLOCK_START]
    lines.extend(f"export {name}={shlex.quote(value)}" for name, value in settings.items())
    lines.append('eval "$(worktree install --print)"')
    lines.append(BLOCK_END)
    return "\n".join(lines)


def has_config_block(content: str) -> bool:
    return BLOCK_START in content and BLOCK_END in content


def strip_config_block(content: str) -> str:
    """Remove every marked block (and the blank line before it) from content."""
    out: list[str] = []
    inside = False
    for line in content.splitlines(keepends=True):
        if line.rstrip("\n") == BLOCK_START:
            inside = True
            if out and not out[-1].strip():
                out.pop()
            continue
        if inside:
            if line.rstrip("\n") == BLOCK_END:
                inside = False
            continue
        out.append(line)
    return "".join(out)


def backup_file(path: Path) -> Path:
    """Copy path next to itself with the backup suffix."""
    backup = path.with_name(path.name + BACKUP_SUFFIX)
    shutil.copy2(path, backup)
    return backup


def write_config_block(rc_file: Path, settings: dict[str, str]) -> Path | None:
    """Write or replace the config block. Returns the backup path if one was made."""
    block = render_config_block(settings)

    if not rc_file.exists():
        rc_file.write_text(f"{block}\n")
        return None

    content = rc_file.read_text()
    backup = None
    if has_config_block(content):
        backup = backup_file(rc_file)
        content = strip_config_block(content)

    if content and not content.endswith("\n"):
        content += "\n"
    rc_file.write_text(f"{content}\n{block}\n")
    return backup


def remove_config_block(rc_file: Path) -> Path | None:
    """Strip the config block. Returns the backup path, or None if there was no block."""
    if not rc_file.exists():
        return None
    content = rc_file.read_text()
    if not has_config_block(content):
        return None
    backup = backup_file(rc_file)
    rc_file.write_text(strip_config_block(content))
    return backup
