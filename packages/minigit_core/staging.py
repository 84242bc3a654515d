"""Staging area (index) management.

The index is an ordered mapping of repo-relative paths to content
fingerprints, persisted as a JSON list of ``[path, fingerprint]``
pairs. Restaging a path replaces its fingerprint and keeps the
position it was first staged at.

Execution Context:
    Library module - owned by Repository

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from minigit_core.errors import CorruptRecord
from minigit_core.errors import NothingStaged
from minigit_core.models import Entry

logger = logging.getLogger(__name__)


# ---- Staging Area -------------------------------------------------------------------------------------------


class StagingArea:
    """Pending entries for the next commit.

    Attributes:
        index_path: Path to the index.json file.
    """

    def __init__(
            self,
            index_path: Path | str,
    ) -> None:
        self.index_path = Path(index_path)

    def _read(
            self,
    ) -> dict[str, str]:
        if not self.index_path.exists():
            return {}

        try:
            pairs = json.loads(self.index_path.read_text() or "[]")
            return {path: fingerprint for path, fingerprint in pairs}
        except (ValueError, TypeError) as index_error:
            raise CorruptRecord(str(self.index_path), str(index_error)) from index_error

    def _write(
            self,
            staged: dict[str, str],
    ) -> None:
        pairs = [[path, fingerprint] for path, fingerprint in staged.items()]
        self.index_path.write_text(json.dumps(pairs, indent=2))

    def stage(
            self,
            path: str,
            fingerprint: str,
    ) -> None:
        """Record ``path`` at ``fingerprint``, replacing any earlier entry for it."""
        staged = self._read()
        previous = staged.get(path)
        staged[path] = fingerprint
        self._write(staged)

        if previous and previous != fingerprint:
            logger.debug("Restaged %s: %s -> %s", path, previous[:8], fingerprint[:8])
        else:
            logger.debug("Staged %s at %s", path, fingerprint[:8])

    def entries(
            self,
    ) -> list[Entry]:
        """Staged entries in staging order (may be empty)."""
        return list(self._read().items())

    def snapshot(
            self,
    ) -> list[Entry]:
        """Staged entries for commit creation.

        Raises:
            NothingStaged: If nothing has been staged.
        """
        entries = self.entries()
        if not entries:
            raise NothingStaged()
        return entries

    def clear(
            self,
    ) -> None:
        """Empty the index."""
        self._write({})

    def __len__(
            self,
    ) -> int:
        return len(self._read())
