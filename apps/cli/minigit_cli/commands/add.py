"""MiniGit add command.

Stores the current content of working files and stages them for the
next commit.

Execution Context:
    CLI command - invoked via `minigit add <path>`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - minigit_core: Repository management

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from minigit_cli.commands.utils import require_repository
from minigit_core.errors import MinigitError
from minigit_core.worktree import DiskWorkTree

console = Console()


# ---- Add Command --------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
)
def add(
        paths: tuple[str, ...],
) -> None:
    """Stage file contents for the next commit.

    Restaging a path replaces its earlier staged content.

    Examples:
        minigit add notes.txt
        minigit add src/app.py README.md
    """
    repo = require_repository()
    worktree = repo.worktree

    try:
        for path in paths:
            rel_path = worktree.relative(path) if isinstance(worktree, DiskWorkTree) else path
            staged_path, fingerprint = repo.stage_file(rel_path)
            console.print(f"Added '{escape(staged_path)}' to staging area. [dim]({fingerprint[:8]})[/dim]")

    except (MinigitError, ValueError) as add_error:
        msg = f"Add failed: {add_error}"
        raise click.ClickException(msg) from add_error
