"""MiniGit Core Library.

Provides a minimal version-control engine: a content-addressed object
store, single-parent commit history with branches and HEAD, lowest
common ancestor search, three-way file merge and line diffs.

Execution Context:
    Library package - imported by CLI and other applications

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

from minigit_core.errors import MinigitError
from minigit_core.models import Branch
from minigit_core.models import Commit
from minigit_core.models import Head
from minigit_core.models import RepoConfig
from minigit_core.repository import Repository
from minigit_core.repository import find_repository
from minigit_core.repository import init_repository

__version__ = "0.1.0"

__all__ = [
    "Branch",
    "Commit",
    "Head",
    "MinigitError",
    "RepoConfig",
    "Repository",
    "find_repository",
    "init_repository",
    "__version__",
]
