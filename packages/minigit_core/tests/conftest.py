"""Shared test configuration and fixtures for minigit_core tests.

Provides:
- Temporary repository directories, initialized or not.
- Helpers for writing working files and committing them in one step.
"""
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable

import pytest

from minigit_core.models import Commit
from minigit_core.repository import Repository


# ---- Fixtures ------------------------------------------------------------------------------------------------


@pytest.fixture
def temp_repo_dir() -> Path:
    """Create temporary directory for repository tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def initialized_repo(temp_repo_dir: Path) -> Repository:
    """Create and initialize a repository."""
    repo = Repository(temp_repo_dir)
    repo.init(project_name="TestProject")
    return repo


@pytest.fixture
def write_file(initialized_repo: Repository) -> Callable[[str, str], Path]:
    """Write a text file into the working tree of ``initialized_repo``."""

    def _write(path: str, content: str) -> Path:
        target = initialized_repo.root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target

    return _write


@pytest.fixture
def commit_files(
        initialized_repo: Repository,
        write_file: Callable[[str, str], Path],
) -> Callable[..., Commit]:
    """Write, stage and commit files; timestamps are fixed per call."""
    counter = {"n": 0}

    def _commit(message: str, files: dict[str, str]) -> Commit:
        for path, content in files.items():
            write_file(path, content)
            initialized_repo.stage_file(path)
        counter["n"] += 1
        return initialized_repo.create_commit(message, timestamp=f"t{counter['n']}")

    return _commit


@pytest.fixture
def repo_with_commit(
        initialized_repo: Repository,
        commit_files: Callable[..., Commit],
) -> Repository:
    """Create repository with one commit on main."""
    commit_files("Initial commit", {"notes.txt": "hello\n", "todo.txt": "one\ntwo\n"})
    return initialized_repo
