"""Data models for MiniGit version control.

Defines the commit record, branch pointer, HEAD reference and
repository configuration used throughout the MiniGit system.

Execution Context:
    Library module - imported by other minigit_core modules

Dependencies:
    - dataclasses: Data class decorators
    - json: Record serialization

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from pathlib import Path
from typing import Any

from minigit_core.errors import CorruptRecord
from minigit_core.objects import hash_text


# ---- Constants ----------------------------------------------------------------------------------------------


HEAD_REF_PREFIX = "ref: "
TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %Y"

Entry = tuple[str, str]


# ---- Helpers ------------------------------------------------------------------------------------------------


def current_timestamp() -> str:
    """Local time in ``ctime`` form, e.g. ``Mon Oct 19 13:55:00 2026``."""
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def serialize_entries(
        entries: list[Entry],
) -> str:
    """Render entries as ``path fingerprint`` lines.

    This text is what commit ids are computed over, so its format must
    not change.
    """
    return "".join(f"{path} {fingerprint}\n" for path, fingerprint in entries)


def compute_commit_id(
        message: str,
        timestamp: str,
        entries: list[Entry],
) -> str:
    """Compute a commit id from message, timestamp and entries.

    The parent is not part of the hashed content: two
    commits with equal message, timestamp and entries share an id
    regardless of where they sit in history.
    """
    return hash_text(message + timestamp + serialize_entries(entries))


# ---- Data Model Classes -------------------------------------------------------------------------------------


@dataclass
class Commit:
    """Immutable snapshot of staged entries.

    Attributes:
        id: Commit identifier (hash of message, timestamp and entries).
        message: Commit message describing changes.
        timestamp: Human readable creation time.
        parent: Parent commit ID (None for the root commit).
        entries: Ordered (path, fingerprint) pairs.
    """

    id: str
    message: str
    timestamp: str
    parent: str | None = None
    entries: list[Entry] = field(default_factory=list)

    @classmethod
    def create(
            cls,
            message: str,
            entries: list[Entry],
            parent: str | None = None,
            timestamp: str | None = None,
    ) -> Commit:
        """Create a new commit, computing its id.

        Args:
            message: Commit message.
            entries: Staged (path, fingerprint) pairs.
            parent: Parent commit ID.
            timestamp: Creation time (defaults to now).

        Returns:
            New Commit instance.
        """
        timestamp = timestamp if timestamp is not None else current_timestamp()
        entries = [(path, fingerprint) for path, fingerprint in entries]
        return cls(
            id=compute_commit_id(message, timestamp, entries),
            message=message,
            timestamp=timestamp,
            parent=parent,
            entries=entries,
        )

    @property
    def files(
            self,
    ) -> dict[str, str]:
        """Entries as a path -> fingerprint mapping (last entry for a path wins)."""
        return dict(self.entries)

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert commit to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "parent": self.parent,
            "timestamp": self.timestamp,
            "message": self.message,
            "entries": [[path, fingerprint] for path, fingerprint in self.entries],
        }

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> Commit:
        """Create commit from dictionary."""
        return cls(
            id=data["id"],
            message=data["message"],
            timestamp=data["timestamp"],
            parent=data.get("parent"),
            entries=[(path, fingerprint) for path, fingerprint in data.get("entries", [])],
        )

    def save(
            self,
            commits_dir: Path,
    ) -> Path:
        """Save commit to file unless a record with this id already exists.

        Args:
            commits_dir: Directory to store commit files.

        Returns:
            Path to the commit file.
        """
        filepath = commits_dir / f"{self.id}.json"
        if not filepath.exists():
            filepath.write_text(json.dumps(self.to_dict(), indent=2))
        return filepath

    @classmethod
    def load(
            cls,
            filepath: Path,
    ) -> Commit:
        """Load commit from file.

        Raises:
            CorruptRecord: If the commit file cannot be decoded.
        """
        try:
            data = json.loads(filepath.read_text())
            return cls.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError) as file_error:
            raise CorruptRecord(str(filepath), str(file_error)) from file_error


@dataclass
class Branch:
    """Named pointer to a commit.

    Attributes:
        name: Branch name (e.g., 'main', 'feature/login').
        commit_id: ID of the commit this branch points to.
    """

    name: str
    commit_id: str


@dataclass
class Head:
    """Current repository position.

    Exactly one of ``branch`` and ``commit_id`` is set: a symbolic HEAD
    tracks a branch, a detached HEAD pins a commit.
    """

    branch: str | None = None
    commit_id: str | None = None

    @property
    def is_detached(
            self,
    ) -> bool:
        return self.branch is None

    def serialize(
            self,
    ) -> str:
        """Render as the contents of the HEAD file."""
        if self.branch is not None:
            return f"{HEAD_REF_PREFIX}{self.branch}\n"
        return f"{self.commit_id}\n"

    @classmethod
    def parse(
            cls,
            text: str,
    ) -> Head:
        """Parse the contents of the HEAD file."""
        content = text.strip()
        if content.startswith(HEAD_REF_PREFIX.strip()):
            return cls(branch=content[len(HEAD_REF_PREFIX.strip()):].strip())
        return cls(commit_id=content or None)


@dataclass
class RepoConfig:
    """Repository configuration stored in .minigit/config.json.

    Attributes:
        version: MiniGit format version.
        project_name: Project name (defaults to the root directory name).
        default_branch: Branch HEAD refers to after init.
    """

    version: str = "1.0"
    project_name: str = ""
    default_branch: str = "main"

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "project_name": self.project_name,
            "default_branch": self.default_branch,
        }

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> RepoConfig:
        """Create config from dictionary, filling in defaults."""
        return cls(
            version=data.get("version", "1.0"),
            project_name=data.get("project_name", ""),
            default_branch=data.get("default_branch", "main"),
        )

    def save(
            self,
            config_path: Path,
    ) -> None:
        """Save config to file."""
        config_path.write_text(json.dumps(self.to_dict(), indent=2))

    @classmethod
    def load(
            cls,
            config_path: Path,
    ) -> RepoConfig:
        """Load config from file.

        Raises:
            CorruptRecord: If config file cannot be loaded.
        """
        try:
            data = json.loads(config_path.read_text())
            return cls.from_dict(data)
        except (OSError, ValueError, AttributeError) as file_error:
            raise CorruptRecord(str(config_path), str(file_error)) from file_error
