"""Error types for MiniGit.

Every failure a core operation can surface is a subclass of
``MinigitError`` so callers can catch the whole family at once while
still telling the kinds apart.

Execution Context:
    Library module - imported by all minigit_core modules and the CLI

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations


# ---- Base Error ---------------------------------------------------------------------------------------------


class MinigitError(RuntimeError):
    """Base class for all repository errors."""


# ---- Repository Errors --------------------------------------------------------------------------------------


class RepositoryNotInitialized(MinigitError):
    """Raised when an operation needs a repository that does not exist."""

    def __init__(self, root: str) -> None:
        self.root = root
        super().__init__(f"Not a MiniGit repository: {root}")


class RepositoryExists(MinigitError):
    """Raised when initializing over an existing repository."""

    def __init__(self, root: str) -> None:
        self.root = root
        super().__init__(f"MiniGit repository already exists at {root}")


class CorruptRecord(MinigitError):
    """Raised when a persisted record cannot be decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to load {path}: {reason}")


# ---- Object and History Errors ------------------------------------------------------------------------------


class ObjectNotFound(MinigitError):
    """Raised when no object exists for a referenced fingerprint."""

    def __init__(self, fingerprint: str) -> None:
        self.fingerprint = fingerprint
        super().__init__(f"Object not found: {fingerprint}")


class CommitNotFound(MinigitError):
    """Raised when a commit id does not name a stored commit."""

    def __init__(self, commit_id: str) -> None:
        self.commit_id = commit_id
        super().__init__(f"Commit not found: {commit_id}")


class BrokenHistory(MinigitError):
    """Raised when a commit record is missing part way through an ancestor walk."""

    def __init__(self, commit_id: str) -> None:
        self.commit_id = commit_id
        super().__init__(f"Commit file missing for hash {commit_id}")


# ---- Reference Errors ---------------------------------------------------------------------------------------


class AlreadyExists(MinigitError):
    """Raised when creating a branch whose name is taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Branch '{name}' already exists")


class BranchNameConflict(MinigitError):
    """Raised when a branch name nests inside, or contains, an existing branch.

    Branch refs are files under refs/heads, so 'feat' and 'feat/x'
    cannot both exist.
    """

    def __init__(self, name: str, existing: str) -> None:
        self.name = name
        self.existing = existing
        super().__init__(f"Branch '{name}' conflicts with existing branch '{existing}'")


class NoCommitYet(MinigitError):
    """Raised when a branch is needed before anything has been committed."""

    def __init__(self, branch: str) -> None:
        self.branch = branch
        super().__init__(f"Cannot proceed before first commit on branch '{branch}'")


class NotFound(MinigitError):
    """Raised when a name resolves to neither a branch nor a commit."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"Commit not found for: {target}")


class DetachedHead(MinigitError):
    """Raised when an operation requires HEAD to be on a branch."""

    def __init__(self, commit_id: str | None = None) -> None:
        self.commit_id = commit_id
        super().__init__("You must be on a branch to perform a merge (not detached)")


class NoCommonAncestor(MinigitError):
    """Raised when two commits share no history."""

    def __init__(self, first: str, second: str) -> None:
        self.first = first
        self.second = second
        super().__init__(f"No common ancestor between {first[:8]} and {second[:8]}")


# ---- Staging Errors -----------------------------------------------------------------------------------------


class NothingStaged(MinigitError):
    """Raised when committing with an empty staging area."""

    def __init__(self) -> None:
        super().__init__("No files staged for commit")


class WorkingFileNotFound(MinigitError):
    """Raised when staging a path that is not in the working directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")
