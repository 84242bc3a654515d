"""MiniGit CLI entry point.

Orchestrator for the MiniGit command-line interface. Registers all
command modules and provides the main entry point.

Execution Context:
    CLI application - run via `python main.py` or `minigit` command

Dependencies:
    - click: CLI framework
    - rich: Log rendering
    - minigit_core: Core library

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import logging
import sys

import click
from rich.logging import RichHandler

from minigit_cli import __version__
from minigit_cli.commands.add import add
from minigit_cli.commands.branch import branch
from minigit_cli.commands.checkout import checkout
from minigit_cli.commands.commit import commit
from minigit_cli.commands.diff import diff
from minigit_cli.commands.init import init
from minigit_cli.commands.log import log
from minigit_cli.commands.merge import merge
from minigit_cli.commands.status import status


# ---- Logging Setup ------------------------------------------------------------------------------------------


def configure_logging(
        verbose: bool,
) -> None:
    """Route library logging through rich at DEBUG or WARNING level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )


# ---- CLI Group ----------------------------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="minigit")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show debug logging from the repository engine.",
)
def cli(
        verbose: bool,
) -> None:
    """MiniGit - a minimal version-control engine.

    Snapshot a working directory, navigate history, branch, and
    reconcile divergent lines of work with a three-way merge.
    """
    configure_logging(verbose)


# ---- Register Commands --------------------------------------------------------------------------------------


cli.add_command(init)
cli.add_command(add)
cli.add_command(commit)
cli.add_command(log)
cli.add_command(branch)
cli.add_command(checkout)
cli.add_command(merge)
cli.add_command(diff)
cli.add_command(status)


# ---- Main Function ------------------------------------------------------------------------------------------


def main() -> int:
    """Main entry point for MiniGit CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        cli()
        return 0
    except Exception as cli_error:
        click.echo(f"Error: {cli_error}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
