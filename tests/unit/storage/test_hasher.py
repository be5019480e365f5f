"""Unit tests for content hashing."""

import hashlib
from pathlib import Path

import pytest

from commet.constants import HASH_LENGTH
from commet.errors import FileError
from commet.storage.hasher import hash_bytes, hash_file


class TestHashFile:
    """Test file fingerprinting."""

    def test_hash_is_hex_digest(self, tmp_path: Path) -> None:
        """Test the fingerprint format."""
        f = tmp_path / "file.txt"
        f.write_bytes(b"hello")

        digest = hash_file(f)

        assert len(digest) == HASH_LENGTH
        assert all(c in "0123456789abcdef" for c in digest)

    def test_matches_hashlib(self, tmp_path: Path) -> None:
        """Test the fingerprint is the SHA-256 of the bytes."""
        f = tmp_path / "file.txt"
        f.write_bytes(b"hello")

        assert hash_file(f) == hashlib.sha256(b"hello").hexdigest()

    def test_deterministic(self, tmp_path: Path) -> None:
        """Test hashing an unmodified file twice gives the same result."""
        f = tmp_path / "file.txt"
        f.write_text("same content")

        assert hash_file(f) == hash_file(f)

    def test_changes_with_content(self, tmp_path: Path) -> None:
        """Test modifying bytes changes the fingerprint."""
        f = tmp_path / "file.txt"
        f.write_text("version 1")
        before = hash_file(f)

        f.write_text("version 2")

        assert hash_file(f) != before

    def test_large_file_read_in_chunks(self, tmp_path: Path) -> None:
        """Test files larger than one read chunk hash correctly."""
        content = b"x" * (200 * 1024 + 7)
        f = tmp_path / "big.bin"
        f.write_bytes(content)

        assert hash_file(f) == hash_bytes(content)

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test empty files have the digest of no bytes."""
        f = tmp_path / "empty"
        f.write_bytes(b"")

        assert hash_file(f) == hashlib.sha256(b"").hexdigest()

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        """Test string paths are accepted."""
        f = tmp_path / "file.txt"
        f.write_text("data")

        assert hash_file(str(f)) == hash_file(f)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises FileError."""
        with pytest.raises(FileError, match="Cannot read"):
            hash_file(tmp_path / "missing.txt")

    def test_directory(self, tmp_path: Path) -> None:
        """Test a directory raises FileError."""
        with pytest.raises(FileError):
            hash_file(tmp_path)

    def test_nul_byte_in_path(self, tmp_path: Path) -> None:
        """Test an unrepresentable path raises FileError."""
        with pytest.raises(FileError, match="Cannot read"):
            hash_file(str(tmp_path / "bad\x00name"))
