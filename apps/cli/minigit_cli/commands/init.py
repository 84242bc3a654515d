"""MiniGit init command.

Initializes a new MiniGit repository in the current directory,
creating the .minigit directory structure.

Execution Context:
    CLI command - invoked via `minigit init`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - minigit_core: Repository management

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from minigit_core.errors import MinigitError
from minigit_core.repository import Repository

console = Console()


# ---- Init Command -------------------------------------------------------------------------------------------


@click.command()
@click.option(
    "--project-name",
    "-n",
    default="",
    help="Project name (defaults to directory name).",
)
@click.option(
    "--default-branch",
    "-b",
    default="main",
    show_default=True,
    help="Branch HEAD refers to before the first commit.",
)
@click.argument(
    "path",
    type=click.Path(),
    default=".",
    required=False,
)
def init(
        path: str,
        project_name: str,
        default_branch: str,
) -> None:
    """Initialize a new MiniGit repository.

    Creates a .minigit directory structure in the specified PATH
    (defaults to current directory).

    Example:
        minigit init
        minigit init /path/to/project --default-branch trunk
    """
    try:
        repo = Repository(Path(path).resolve())

        if repo.exists():
            console.print(
                f"[yellow]MiniGit repo already initialized at {escape(str(repo.minigit_dir))}[/yellow]"
            )
            return

        repo.init(project_name=project_name, default_branch=default_branch)

        console.print(
            f"[green]Initialized empty MiniGit repository in {escape(str(repo.minigit_dir))}[/green]"
        )
        console.print()
        console.print("Repository structure created:")
        console.print(f"  [dim]{escape(str(repo.minigit_dir))}/[/dim]")
        console.print("    [dim]├── config.json[/dim]")
        console.print("    [dim]├── HEAD[/dim]")
        console.print("    [dim]├── index.json[/dim]")
        console.print("    [dim]├── refs/heads/[/dim]")
        console.print("    [dim]└── objects/commits/[/dim]")

    except MinigitError as init_error:
        msg = f"Failed to initialize repository: {init_error}"
        raise click.ClickException(msg) from init_error
