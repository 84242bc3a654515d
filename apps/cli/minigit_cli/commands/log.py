"""MiniGit log command.

Shows commit history for the repository.

Execution Context:
    CLI command - invoked via `minigit log`

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

console = Console()

SEPARATOR = "------------------------------"


# ---- Log Command --------------------------------------------------------------------------------------------


@click.command()
@click.option(
    "--limit",
    "-n",
    default=0,
    help="Maximum number of commits to show (0 for all).",
)
@click.option(
    "--oneline",
    is_flag=True,
    help="Show compact one-line format.",
)
def log(
        limit: int,
        oneline: bool,
) -> None:
    """Show commit history.

    Walks from HEAD back through parent commits to the root. If a
    commit record is missing, the reachable part is shown before the
    error is reported.

    Examples:
        minigit log
        minigit log -n 5
        minigit log --oneline
    """
    repo = require_repository()

    try:
        head_commit = repo.resolve_head()
        if not head_commit:
            console.print("[dim]No commits yet[/dim]")
            return

        current_branch = repo.get_current_branch()

        for shown, commit in enumerate(repo.iter_commits(head_commit)):
            if limit and shown >= limit:
                break

            if oneline:
                marker = "[yellow]*[/yellow] " if commit.id == head_commit else "  "
                console.print(f"{marker}[cyan]{commit.id[:8]}[/cyan] {escape(commit.message)}")
                continue

            is_head = commit.id == head_commit
            label = escape(current_branch or "detached")
            head_marker = f" [yellow](HEAD -> {label})[/yellow]" if is_head else ""

            console.print(SEPARATOR)
            console.print(f"[bold cyan]Commit: {commit.id}[/bold cyan]{head_marker}")
            console.print(f"Date: {escape(commit.timestamp)}")
            console.print(f"Message: {escape(commit.message)}")

        if not oneline:
            console.print(SEPARATOR)

    except MinigitError as log_error:
        msg = f"Log failed: {log_error}"
        raise click.ClickException(msg) from log_error
