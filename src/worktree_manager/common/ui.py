"""Shared UI utilities: colors, styling, and interactive selection."""

from __future__ import annotations

from typing import Callable

import click
from InquirerPy import inquirer

# Colors using click.style
CYAN = "cyan"
GREEN = "green"
YELLOW = "yellow"
RED = "red"
DIM = "bright_black"

# Asks a yes/no question; the terminal version is confirm_prompt
Confirm = Callable[[str], bool]


def style_error(msg: str) -> str:
    """Style an error message."""
    return click.style(f"✗ {msg}", fg=RED)


def style_success(msg: str) -> str:
    """Style a success message."""
    return click.style(f"✓ {msg}", fg=GREEN)


def style_info(msg: str) -> str:
    """Style an info message."""
    return click.style(f"→ {msg}", fg=CYAN)


def style_warn(msg: str) -> str:
    """Style a warning message."""
    return click.style(f"! {msg}", fg=YELLOW)


def style_dim(msg: str) -> str:
    """Style dim/muted text."""
    return click.style(msg, fg=DIM)


def echo_indented(text: str, prefix: str = "  ") -> None:
    """Echo a multi-line block with every line indented."""
    for line in text.splitlines():
        click.echo(f"{prefix}{line}")


def confirm_prompt(message: str) -> bool:
    """Ask a yes/no question on the terminal, defaulting to no."""
    return click.confirm(style_warn(message), default=False)


def fuzzy_select(options: list[str], message: str) -> int | None:
    """Show fuzzy select menu. Returns index or None if cancelled.

    Uses exact substring matching which gives predictable results -
    typing a character shows only options containing that character,
    with matches at the start appearing first.
    """
    try:
        prompt = inquirer.fuzzy(  # type: ignore[attr-defined]
            message=message,
            choices=options,
            match_exact=True,
        )
        result = prompt.execute()
        if result is None:
            return None
        return options.index(result)
    except KeyboardInterrupt:
        return None
