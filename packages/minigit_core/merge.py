"""File-level three-way merge logic for MiniGit.

Reconciles the per-file fingerprints of two branch tips against their
common ancestor. Each file is treated as an atomic unit: a file changed
differently on both sides is a conflict and gets conflict markers;
otherwise the target's version is taken.

The merge is computed as a plan first and only then applied to a
working tree, so a missing object aborts before any file is touched.

Execution Context:
    Library module - imported by Repository.merge and the CLI merge command

Dependencies:
    - minigit_core.worktree: Working file writes

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Callable

from minigit_core.worktree import WorkTree

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


CONFLICT = "conflict"
MERGED = "merged"
SKIPPED = "skipped"

CURRENT_LABEL = "current"


# ---- Data Classes -------------------------------------------------------------------------------------------


@dataclass
class FileMerge:
    """Outcome of merging a single path.

    Attributes:
        path: Repo-relative path.
        outcome: One of 'conflict', 'merged', 'skipped'.
        base: Fingerprint in the common ancestor.
        current: Fingerprint on the current branch ('' if absent).
        target: Fingerprint on the target branch ('' if absent).
        content: Bytes to write to the working file (None when skipped).
    """

    path: str
    outcome: str
    base: str
    current: str = ""
    target: str = ""
    content: bytes | None = None


@dataclass
class MergeResult:
    """Result of a merge operation.

    Attributes:
        target_name: Name of the branch merged in.
        lca: Common ancestor commit ID.
        current: Current branch tip commit ID.
        target: Target branch tip commit ID.
        files: Per-file outcomes in path order.
    """

    target_name: str
    lca: str | None = None
    current: str | None = None
    target: str | None = None
    files: list[FileMerge] = field(default_factory=list)

    @property
    def conflicts(
            self,
    ) -> list[FileMerge]:
        """Files left with conflict markers."""
        return [f for f in self.files if f.outcome == CONFLICT]

    @property
    def merged(
            self,
    ) -> list[FileMerge]:
        """Files overwritten with the target's version."""
        return [f for f in self.files if f.outcome == MERGED]

    @property
    def skipped(
            self,
    ) -> list[FileMerge]:
        """Files needing no action."""
        return [f for f in self.files if f.outcome == SKIPPED]

    @property
    def has_conflicts(
            self,
    ) -> bool:
        """Check if there are unresolved conflicts."""
        return len(self.conflicts) > 0


# ---- Merge Functions ----------------------------------------------------------------------------------------


def render_conflict(
        current: bytes,
        target: bytes,
        target_name: str,
) -> bytes:
    """Build the conflict-marked file body for two divergent versions."""
    return b"".join([
        f"<<<<<<< {CURRENT_LABEL}\n".encode(),
        current,
        b"\n=======\n",
        target,
        f"\n>>>>>>> {target_name}\n".encode(),
    ])


def merge_trees(
        base: dict[str, str],
        current: dict[str, str],
        target: dict[str, str],
        read_object: Callable[[str], bytes],
        target_name: str,
) -> MergeResult:
    """Plan a three-way merge of path -> fingerprint maps.

    Only paths present in ``base`` are considered; files added on just
    one side since the ancestor are left alone. For each base path, with
    ``a`` the current fingerprint and ``b`` the target's:

    - target deleted it, or ``a == b``: skipped.
    - ``a``, ``b`` and the base all differ: conflict.
    - otherwise the target's version is applied.

    Args:
        base: Entries of the common ancestor.
        current: Entries of the current branch tip.
        target: Entries of the target branch tip.
        read_object: Loads object bytes by fingerprint.
        target_name: Label used in conflict markers.

    Returns:
        MergeResult with one FileMerge per base path.

    Raises:
        ObjectNotFound: If an object needed for the merge is missing.
    """
    result = MergeResult(target_name=target_name)

    for path in sorted(base):
        base_fp = base[path]
        a = current.get(path, "")
        b = target.get(path, "")
        outcome = FileMerge(path=path, outcome=SKIPPED, base=base_fp, current=a, target=b)

        if not b or a == b:
            pass
        elif a != base_fp and b != base_fp:
            ours = read_object(a) if a else b""
            theirs = read_object(b)
            outcome.outcome = CONFLICT
            outcome.content = render_conflict(ours, theirs, target_name)
        else:
            outcome.outcome = MERGED
            outcome.content = read_object(b)

        result.files.append(outcome)

    return result


def apply_merge(
        result: MergeResult,
        worktree: WorkTree,
) -> None:
    """Write every conflicted and merged file to the working tree."""
    for file_merge in result.files:
        if file_merge.content is None:
            continue

        worktree.write(file_merge.path, file_merge.content)
        if file_merge.outcome == CONFLICT:
            logger.info("CONFLICT: both modified %s", file_merge.path)
        else:
            logger.debug("Merged change from %s: %s", result.target_name, file_merge.path)


# ---- Formatting Functions -----------------------------------------------------------------------------------


def format_merge_summary(
        result: MergeResult,
) -> str:
    """Format merge result as human-readable summary."""
    lines = []

    for file_merge in result.conflicts:
        lines.append(f"CONFLICT: both modified {file_merge.path}")

    for file_merge in result.merged:
        lines.append(f"Merged change from {result.target_name}: {file_merge.path}")

    if result.has_conflicts:
        lines.append(f"Merge has {len(result.conflicts)} conflict(s).")

    lines.append("Merge complete. Please resolve conflicts and commit the result.")

    return "\n".join(lines)
