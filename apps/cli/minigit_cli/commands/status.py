"""MiniGit status command.

Shows the current position in history and the staging area.

Execution Context:
    CLI command - invoked via `minigit status`

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
from rich.panel import Panel

from minigit_cli.commands.utils import short_id
from minigit_core.errors import MinigitError
from minigit_core.repository import find_repository

console = Console()


# ---- Status Command -----------------------------------------------------------------------------------------


@click.command()
def status() -> None:
    """Show the repository status.

    Displays the current branch (or detached commit), the latest
    commit, and the entries staged for the next commit.

    Example:
        minigit status
    """
    repo = find_repository()

    if not repo:
        console.print("[red]Not a MiniGit repository[/red]")
        console.print("Run 'minigit init' to create a new repository.")
        return

    try:
        head = repo.get_head()
        head_commit = repo.resolve_head()

        if head.is_detached:
            position = f"[yellow]HEAD detached at {short_id(head.commit_id)}[/yellow]"
        else:
            position = f"[bold]On branch:[/bold] [cyan]{escape(head.branch)}[/cyan]"
        console.print(Panel(position, title="MiniGit Status", border_style="blue"))

        if head_commit:
            commit = repo.get_commit(head_commit)
            if commit:
                console.print(f"[dim]Latest commit: {short_id(commit.id)} - {escape(commit.message)}[/dim]")
        else:
            console.print("[dim]No commits yet[/dim]")

        console.print()

        staged = repo.get_staged()
        if staged:
            console.print("[yellow]Changes to be committed:[/yellow]")
            for path, fingerprint in staged:
                console.print(f"  {escape(path)} [dim]{fingerprint[:8]}[/dim]")
            console.print()
            console.print('[dim]Use "minigit commit -m <message>" to commit changes[/dim]')
        else:
            console.print("[green]Nothing staged[/green]")

    except MinigitError as status_error:
        msg = f"Failed to get status: {status_error}"
        raise click.ClickException(msg) from status_error
