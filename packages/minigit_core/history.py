"""Commit ancestry walking.

Commits have at most one parent, so history is a tree: the ancestors
of a commit form a single chain back to a root. Lowest common ancestor
search relies on that; it would need a proper DAG intersection with
tie-breaking if commits could ever have several parents.

Execution Context:
    Library module - used by Repository for log and merge

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import logging
from typing import Callable
from typing import Iterator

from minigit_core.errors import BrokenHistory
from minigit_core.models import Commit

logger = logging.getLogger(__name__)

CommitLoader = Callable[[str], "Commit | None"]


# ---- Ancestor Walking ---------------------------------------------------------------------------------------


def iter_history(
        commit_id: str | None,
        load_commit: CommitLoader,
) -> Iterator[Commit]:
    """Yield the commit records from ``commit_id`` back to the root.

    Args:
        commit_id: Commit to start from (None yields nothing).
        load_commit: Returns the commit for an id, or None if missing.

    Raises:
        BrokenHistory: If a commit in the chain has no record.
    """
    current_id = commit_id
    seen: set[str] = set()

    while current_id:
        if current_id in seen:
            # Hand-edited records can loop; stop at the first repeat.
            logger.warning("Ancestry cycle at %s", current_id)
            return
        seen.add(current_id)

        commit = load_commit(current_id)
        if commit is None:
            raise BrokenHistory(current_id)

        yield commit
        current_id = commit.parent


def ancestors(
        commit_id: str | None,
        load_commit: CommitLoader,
) -> Iterator[str]:
    """Yield ``commit_id``, its parent, that parent's parent, and so on.

    The sequence is lazy; call again to restart from the beginning.

    Raises:
        BrokenHistory: If a commit in the chain has no record.
    """
    for commit in iter_history(commit_id, load_commit):
        yield commit.id


def lowest_common_ancestor(
        first: str,
        second: str,
        load_commit: CommitLoader,
) -> str | None:
    """Find the nearest commit reachable from both ``first`` and ``second``.

    Collects every ancestor of ``first`` then walks ``second`` towards the
    root, returning the first id also seen from ``first``.

    Returns:
        Common ancestor id, or None if the histories are unrelated.

    Raises:
        BrokenHistory: If either chain references a missing commit.
    """
    first_ancestors = set(ancestors(first, load_commit))

    for commit_id in ancestors(second, load_commit):
        if commit_id in first_ancestors:
            logger.debug("LCA of %s and %s is %s", first[:8], second[:8], commit_id[:8])
            return commit_id

    return None
