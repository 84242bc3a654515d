"""Utility functions for MiniGit CLI commands.

Execution Context:
    CLI command utilities - imported by command modules

Dependencies:
    - click: CLI framework
    - minigit_core: Repository discovery

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import click

from minigit_core.repository import Repository
from minigit_core.repository import find_repository


def require_repository() -> Repository:
    """Find the repository enclosing the current directory.

    Raises:
        click.ClickException: If no repository is found.
    """
    repo = find_repository()
    if not repo:
        raise click.ClickException(
            "Repository not initialized. Run 'minigit init' first."
        )
    return repo


def short_id(
        commit_id: str | None,
) -> str:
    """Abbreviate a commit ID for display."""
    return commit_id[:8] if commit_id else "none"
