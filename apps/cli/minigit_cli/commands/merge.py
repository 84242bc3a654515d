"""MiniGit merge command.

Merges one branch into the current branch's working files.

Execution Context:
    CLI command - invoked via `minigit merge <branch>`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - minigit_core: Merge operations

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from minigit_cli.commands.utils import require_repository
from minigit_core.errors import MinigitError
from minigit_core.merge import CONFLICT
from minigit_core.merge import MERGED
from minigit_core.merge import format_merge_summary

console = Console()

OUTCOME_STYLES = {
    CONFLICT: "red",
    MERGED: "green",
}


# ---- Merge Command ------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "branch",
    required=True,
)
def merge(
        branch: str,
) -> None:
    """Merge a branch into the current branch.

    Performs a file-level three-way merge against the lowest common
    ancestor. Files changed differently on both sides get conflict
    markers. No commit is created: resolve any conflicts, then add
    and commit the result.

    Examples:
        minigit merge feature/login
    """
    repo = require_repository()

    try:
        current_branch = repo.get_current_branch()
        result = repo.merge(branch)

    except MinigitError as merge_error:
        msg = f"Merge failed: {merge_error}"
        raise click.ClickException(msg) from merge_error

    console.print(f"Merging branch '{escape(branch)}' into '{escape(str(current_branch))}'")
    console.print(f"Lowest Common Ancestor: {result.lca}")

    if result.files:
        table = Table(show_header=True, header_style="bold")
        table.add_column("File")
        table.add_column("Outcome")
        for file_merge in result.files:
            style = OUTCOME_STYLES.get(file_merge.outcome, "dim")
            table.add_row(escape(file_merge.path), f"[{style}]{file_merge.outcome}[/{style}]")
        console.print(table)

    console.print(format_merge_summary(result), markup=False, highlight=False)
