"""Content-addressed object store.

Each distinct content is written exactly once, under the hex SHA-1
fingerprint of its bytes. Objects are never mutated or deleted.

Execution Context:
    Library module - used by the repository, merge and diff layers

Dependencies:
    - hashlib: Content fingerprints

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path

from minigit_core.errors import ObjectNotFound

logger = logging.getLogger(__name__)

FINGERPRINT_PATTERN = re.compile(r"[0-9a-f]{40}")


# ---- Hashing ------------------------------------------------------------------------------------------------


def hash_bytes(
        data: bytes,
) -> str:
    """Compute the fingerprint of a byte sequence.

    Args:
        data: Raw content.

    Returns:
        40 character lowercase hex digest.
    """
    return hashlib.sha1(data).hexdigest()


def hash_text(
        text: str,
) -> str:
    """Fingerprint a string using its UTF-8 encoding."""
    return hash_bytes(text.encode("utf-8"))


def is_fingerprint(
        value: str,
) -> bool:
    """Check that ``value`` is a 40 character lowercase hex digest."""
    return bool(FINGERPRINT_PATTERN.fullmatch(value or ""))


# ---- Object Store -------------------------------------------------------------------------------------------


class ObjectStore:
    """Directory of content objects keyed by fingerprint.

    Attributes:
        objects_dir: Directory holding one file per object.
    """

    def __init__(
            self,
            objects_dir: Path | str,
    ) -> None:
        self.objects_dir = Path(objects_dir)

    def path_for(
            self,
            fingerprint: str,
    ) -> Path:
        """Path of the object file for a fingerprint."""
        return self.objects_dir / fingerprint

    def put(
            self,
            data: bytes,
    ) -> str:
        """Store content and return its fingerprint.

        Storing content that is already present only recomputes the
        fingerprint; the existing object file is left untouched.

        Args:
            data: Raw content.

        Returns:
            Fingerprint of ``data``.
        """
        fingerprint = hash_bytes(data)
        object_path = self.path_for(fingerprint)

        if not object_path.exists():
            self.objects_dir.mkdir(parents=True, exist_ok=True)
            object_path.write_bytes(data)
            logger.debug("Stored object %s (%d bytes)", fingerprint, len(data))

        return fingerprint

    def get(
            self,
            fingerprint: str,
    ) -> bytes:
        """Load content by fingerprint.

        Raises:
            ObjectNotFound: If no object is stored under ``fingerprint``.
        """
        object_path = self.path_for(fingerprint)
        if not is_fingerprint(fingerprint) or not object_path.is_file():
            raise ObjectNotFound(fingerprint)

        return object_path.read_bytes()

    def exists(
            self,
            fingerprint: str,
    ) -> bool:
        """Check whether an object is stored."""
        return is_fingerprint(fingerprint) and self.path_for(fingerprint).is_file()

    def __contains__(
            self,
            fingerprint: str,
    ) -> bool:
        return self.exists(fingerprint)
