"""Tests for the content-addressed object store.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - minigit_core.objects: Module under test
"""
from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from minigit_core.errors import ObjectNotFound
from minigit_core.objects import ObjectStore
from minigit_core.objects import hash_bytes
from minigit_core.objects import hash_text
from minigit_core.objects import is_fingerprint


# ---- Fixtures ------------------------------------------------------------------------------------------------


@pytest.fixture
def store(temp_repo_dir: Path) -> ObjectStore:
    """Object store in a fresh directory."""
    return ObjectStore(temp_repo_dir / "objects")


# ---- Hashing Tests ------------------------------------------------------------------------------------------


class TestHashing:
    """Tests for fingerprint functions."""

    def test_hash_bytes_is_sha1_hex(self) -> None:
        """Test fingerprints are 160-bit hex digests."""
        fingerprint = hash_bytes(b"hello")

        assert fingerprint == hashlib.sha1(b"hello").hexdigest()
        assert len(fingerprint) == 40

    def test_hash_text_uses_utf8(self) -> None:
        """Test text fingerprints match their UTF-8 bytes."""
        assert hash_text("héllo") == hash_bytes("héllo".encode("utf-8"))

    def test_empty_content_has_fingerprint(self) -> None:
        """Test empty content still hashes."""
        assert hash_bytes(b"") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


# ---- Store Tests --------------------------------------------------------------------------------------------


class TestObjectStore:
    """Tests for ObjectStore put/get."""

    @pytest.mark.parametrize("content", [b"", b"a", b"line1\nline2\n", bytes(range(256))])
    def test_get_returns_put_content(self, store: ObjectStore, content: bytes) -> None:
        """Test get(put(x)) == x."""
        assert store.get(store.put(content)) == content

    def test_put_twice_same_fingerprint(self, store: ObjectStore) -> None:
        """Test put is idempotent."""
        first = store.put(b"same")
        second = store.put(b"same")

        assert first == second
        assert len(list(store.objects_dir.iterdir())) == 1

    def test_put_does_not_rewrite_existing(self, store: ObjectStore) -> None:
        """Test an existing object file is left untouched."""
        fingerprint = store.put(b"data")
        object_path = store.path_for(fingerprint)
        mtime = object_path.stat().st_mtime_ns

        store.put(b"data")

        assert object_path.stat().st_mtime_ns == mtime

    def test_distinct_content_distinct_objects(self, store: ObjectStore) -> None:
        """Test different content is stored separately."""
        assert store.put(b"x") != store.put(b"y")
        assert len(list(store.objects_dir.iterdir())) == 2

    def test_get_missing_raises(self, store: ObjectStore) -> None:
        """Test get of unknown fingerprint raises ObjectNotFound."""
        with pytest.raises(ObjectNotFound) as exc_info:
            store.get("0" * 40)

        assert exc_info.value.fingerprint == "0" * 40

    def test_get_empty_fingerprint_raises(self, store: ObjectStore) -> None:
        """Test an empty fingerprint is never found."""
        with pytest.raises(ObjectNotFound):
            store.get("")

    def test_contains(self, store: ObjectStore) -> None:
        """Test membership check."""
        fingerprint = store.put(b"present")

        assert fingerprint in store
        assert "f" * 40 not in store

    def test_non_hex_fingerprint_never_read(self, store: ObjectStore, temp_repo_dir: Path) -> None:
        """Test a path-like fingerprint does not reach outside the store."""
        (temp_repo_dir / "secret.txt").write_text("secret")

        assert "../secret.txt" not in store
        with pytest.raises(ObjectNotFound):
            store.get("../secret.txt")


class TestIsFingerprint:
    """Tests for fingerprint validation."""

    @pytest.mark.parametrize("value", ["0" * 40, hash_bytes(b"data")])
    def test_accepts_hex_digests(self, value: str) -> None:
        """Test full lowercase hex digests are accepted."""
        assert is_fingerprint(value)

    @pytest.mark.parametrize("value", ["", "abc", "A" * 40, "g" * 40, "0" * 41, "../../config"])
    def test_rejects_other_strings(self, value: str) -> None:
        """Test short, uppercase, non-hex and path-like strings are rejected."""
        assert not is_fingerprint(value)
