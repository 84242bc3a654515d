"""MiniGit branch command.

Lists existing branches or creates a new branch.

Execution Context:
    CLI command - invoked via `minigit branch [name]`

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


# ---- Branch Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "name",
    required=False,
)
def branch(
        name: str | None,
) -> None:
    """List or create branches.

    Without arguments, lists all branches. With a NAME argument,
    creates a new branch pointing at the current commit.

    Examples:
        minigit branch              # List branches
        minigit branch feature/x    # Create branch 'feature/x'
    """
    repo = require_repository()

    try:
        if not name:
            branches = repo.list_branches()
            current_branch = repo.get_current_branch()

            if not branches:
                console.print("[dim]No branches yet[/dim]")
                return

            for branch_name in branches:
                if branch_name == current_branch:
                    console.print(f"[green]* {escape(branch_name)}[/green]")
                else:
                    console.print(f"  {escape(branch_name)}")
            return

        new_branch = repo.create_branch(name)

    except (MinigitError, ValueError) as branch_error:
        msg = f"Branch operation failed: {branch_error}"
        raise click.ClickException(msg) from branch_error

    console.print(
        f"[green]Created new branch '{escape(new_branch.name)}' at commit: {new_branch.commit_id}[/green]"
    )
