# SPDX-License-Identifier: MIT
"""Colored progress and error output."""

from __future__ import annotations

from rich.console import Console

console = Console()
err_console = Console(stderr=True)


def progress(
    current: int,
    total: int,
    action: str,
    inputs: str,
    output: str,
    *,
    skipped: bool = False,
    style: str = "green",
) -> None:
    """Print one ``[current/total] action: inputs -> output`` line."""
    prefix = "SKIPPING " if skipped else ""
    console.print(
        f"[{current}/{total}] {prefix}{action}: {inputs} -> {output}",
        style=style,
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def error(message: str) -> None:
    """Print a fatal error message."""
    err_console.print(
        f"ERROR: {message}", style="red", markup=False, highlight=False, soft_wrap=True
    )
