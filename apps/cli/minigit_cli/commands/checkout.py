"""MiniGit checkout command.

Switches HEAD to a branch or commit and restores its files.

Execution Context:
    CLI command - invoked via `minigit checkout <branch-or-commit>`

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
from minigit_cli.commands.utils import short_id
from minigit_core.errors import MinigitError

console = Console()


# ---- Checkout Command ---------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "target",
    required=True,
)
def checkout(
        target: str,
) -> None:
    """Switch to a branch or commit.

    TARGET is looked up as a branch name first, then as a commit ID.
    Every file recorded in that commit overwrites the working copy.
    Checking out a commit ID leaves HEAD detached.

    Examples:
        minigit checkout main
        minigit checkout 3f2a9c01d4e5...
    """
    repo = require_repository()

    try:
        result = repo.checkout(target)

    except MinigitError as checkout_error:
        msg = f"Checkout failed: {checkout_error}"
        raise click.ClickException(msg) from checkout_error

    for path in result.missing:
        console.print(f"[red]Missing blob for {escape(path)}[/red]")

    kind = "commit" if result.is_detached else "branch"
    console.print(f"[green]Checked out {kind}: {escape(target)}[/green]")
    console.print(f"[dim]Restored {len(result.restored)} file(s)[/dim]")

    commit = repo.get_commit(result.commit_id)
    if commit:
        console.print(f"[dim]At commit: {short_id(commit.id)} - {escape(commit.message)}[/dim]")
    if result.is_detached:
        console.print("[yellow]HEAD is detached; new commits will not move any branch[/yellow]")
