"""Line diffing between two commits.

Only files present in both commits are compared. The default
``positional`` mode compares line ``i`` against line ``i``; an
insertion shifts every later line into the changed set. The
``unified`` mode aligns lines with difflib instead and is kept as a
separate mode so positional output never changes.

Execution Context:
    Library module - imported by Repository.diff and the CLI diff command

Dependencies:
    - difflib: Line alignment for unified mode

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import difflib
from dataclasses import dataclass
from dataclasses import field
from typing import Callable


# ---- Constants ----------------------------------------------------------------------------------------------


POSITIONAL = "positional"
UNIFIED = "unified"
DIFF_MODES = (POSITIONAL, UNIFIED)

REMOVED = "removed"
ADDED = "added"


# ---- Data Classes -------------------------------------------------------------------------------------------


@dataclass
class LineChange:
    """A single removed or added line.

    Attributes:
        kind: 'removed' (from the first commit) or 'added' (from the second).
        index: Zero-based line number in its own file.
        text: Line content without the line terminator.
    """

    kind: str
    index: int
    text: str


@dataclass
class FileDiff:
    """Differences for one shared path.

    Attributes:
        path: Repo-relative path.
        changes: Removed/added lines (positional mode).
        unified: Unified diff lines (unified mode).
    """

    path: str
    changes: list[LineChange] = field(default_factory=list)
    unified: list[str] = field(default_factory=list)

    @property
    def removed(
            self,
    ) -> list[str]:
        """Removed line texts."""
        return [c.text for c in self.changes if c.kind == REMOVED]

    @property
    def added(
            self,
    ) -> list[str]:
        """Added line texts."""
        return [c.text for c in self.changes if c.kind == ADDED]

    @property
    def has_changes(
            self,
    ) -> bool:
        return bool(self.changes or self.unified)


# ---- Diff Functions -----------------------------------------------------------------------------------------


def split_lines(
        data: bytes,
) -> list[str]:
    """Decode content and split it into lines on ``\\n`` only.

    A carriage return stays part of its line, so CRLF and LF files
    with otherwise equal text still differ.
    """
    lines = data.decode("utf-8", errors="replace").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def diff_lines(
        lines_a: list[str],
        lines_b: list[str],
) -> list[LineChange]:
    """Compare two line sequences index by index.

    For every index where the lines differ, the first sequence's line is
    reported removed and the second's added, each only if that sequence
    is long enough to have a line there.
    """
    changes = []

    for i in range(max(len(lines_a), len(lines_b))):
        a = lines_a[i] if i < len(lines_a) else None
        b = lines_b[i] if i < len(lines_b) else None

        if a == b:
            continue
        if a is not None:
            changes.append(LineChange(kind=REMOVED, index=i, text=a))
        if b is not None:
            changes.append(LineChange(kind=ADDED, index=i, text=b))

    return changes


def unified_lines(
        path: str,
        lines_a: list[str],
        lines_b: list[str],
) -> list[str]:
    """Aligned diff of two line sequences in unified format."""
    return list(difflib.unified_diff(
        lines_a,
        lines_b,
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
        lineterm="",
    ))


def diff_trees(
        first: dict[str, str],
        second: dict[str, str],
        read_object: Callable[[str], bytes],
        mode: str = POSITIONAL,
) -> list[FileDiff]:
    """Compare the files two commits share.

    Args:
        first: Entries of the first commit.
        second: Entries of the second commit.
        read_object: Loads object bytes by fingerprint.
        mode: 'positional' or 'unified'.

    Returns:
        One FileDiff per shared path whose content differs, in path order.

    Raises:
        ValueError: If ``mode`` is unknown.
        ObjectNotFound: If an object for a shared path is missing.
    """
    if mode not in DIFF_MODES:
        msg = f"Invalid diff mode: {mode}"
        raise ValueError(msg)

    results = []

    for path in sorted(first):
        if path not in second:
            continue
        if first[path] == second[path]:
            continue

        lines_a = split_lines(read_object(first[path]))
        lines_b = split_lines(read_object(second[path]))

        file_diff = FileDiff(path=path)
        if mode == POSITIONAL:
            file_diff.changes = diff_lines(lines_a, lines_b)
        else:
            file_diff.unified = unified_lines(path, lines_a, lines_b)

        if file_diff.has_changes:
            results.append(file_diff)

    return results


# ---- Formatting Functions -----------------------------------------------------------------------------------


def format_diff(
        file_diffs: list[FileDiff],
) -> str:
    """Format file diffs as plain text."""
    if not file_diffs:
        return "No differences."

    lines = []
    for file_diff in file_diffs:
        lines.append(f"Diff: {file_diff.path}")
        if file_diff.unified:
            lines.extend(file_diff.unified)
        for change in file_diff.changes:
            marker = "-" if change.kind == REMOVED else "+"
            lines.append(f"{marker} {change.text}")
        lines.append("--------------------------")

    return "\n".join(lines)
