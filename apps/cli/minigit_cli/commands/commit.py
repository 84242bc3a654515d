"""MiniGit commit command.

Records the staged entries as a new commit.

Execution Context:
    CLI command - invoked via `minigit commit -m "message"`

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
from minigit_core.errors import NothingStaged

console = Console()


# ---- Commit Command -----------------------------------------------------------------------------------------


@click.command()
@click.option(
    "--message",
    "-m",
    required=True,
    help="Commit message describing the changes.",
)
def commit(
        message: str,
) -> None:
    """Record staged changes to the repository.

    Creates a commit from the staging area on top of HEAD, advances the
    current branch (or the detached HEAD) and clears the staging area.

    Examples:
        minigit commit -m "Initial commit"
    """
    repo = require_repository()

    try:
        new_commit = repo.create_commit(message=message)

    except NothingStaged as empty_error:
        msg = f"{empty_error}. Stage files first using 'minigit add <file>'."
        raise click.ClickException(msg) from empty_error
    except MinigitError as commit_error:
        msg = f"Commit failed: {commit_error}"
        raise click.ClickException(msg) from commit_error

    console.print(f"[green]Committed with hash: {new_commit.id}[/green]")
    console.print()
    console.print(f"  [bold]Message:[/bold] {escape(new_commit.message)}")
    console.print(f"  [bold]Date:[/bold] {escape(new_commit.timestamp)}")
    console.print(f"  [bold]Parent:[/bold] {short_id(new_commit.parent)}")
    console.print(f"  [bold]Files:[/bold] {len(new_commit.entries)}")

    current_branch = repo.get_current_branch()
    if current_branch:
        console.print()
        console.print(f"[dim]Branch '{escape(current_branch)}' updated to {short_id(new_commit.id)}[/dim]")
