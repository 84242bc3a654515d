"""MiniGit diff command.

Shows line differences between the files two commits share.

Execution Context:
    CLI command - invoked via `minigit diff <commit-a> <commit-b>`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - minigit_core: Diff operations

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from minigit_cli.commands.utils import require_repository
from minigit_core.diff import POSITIONAL
from minigit_core.diff import REMOVED
from minigit_core.diff import UNIFIED
from minigit_core.errors import MinigitError

console = Console()


# ---- Diff Command -------------------------------------------------------------------------------------------


@click.command()
@click.argument("commit_a")
@click.argument("commit_b")
@click.option(
    "--unified",
    "-u",
    is_flag=True,
    help="Align lines (unified diff) instead of comparing by position.",
)
def diff(
        commit_a: str,
        commit_b: str,
        unified: bool,
) -> None:
    """Show line changes between two commits.

    Only files present in both commits are compared. By default line N
    of one file is compared with line N of the other.

    Examples:
        minigit diff 1a2b3c4d... 5e6f7a8b...
        minigit diff 1a2b3c4d... 5e6f7a8b... --unified
    """
    repo = require_repository()

    try:
        file_diffs = repo.diff(commit_a, commit_b, mode=UNIFIED if unified else POSITIONAL)

    except MinigitError as diff_error:
        msg = f"Diff failed: {diff_error}"
        raise click.ClickException(msg) from diff_error

    if not file_diffs:
        console.print("[green]No differences[/green]")
        return

    for file_diff in file_diffs:
        console.print(f"[bold]Diff: {escape(file_diff.path)}[/bold]")

        for line in file_diff.unified:
            console.print(escape(line), highlight=False)

        for change in file_diff.changes:
            if change.kind == REMOVED:
                console.print(f"[red]- {escape(change.text)}[/red]", highlight=False)
            else:
                console.print(f"[green]+ {escape(change.text)}[/green]", highlight=False)

        console.print("--------------------------")
