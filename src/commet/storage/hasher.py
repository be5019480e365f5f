"""Content fingerprinting for working-tree files."""

import hashlib
from pathlib import Path
from typing import Union

from commet.constants import HASH_ALGORITHM, READ_CHUNK_SIZE
from commet.errors import FileError


def hash_bytes(content: bytes) -> str:
    """Compute the hex digest of in-memory content."""
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(content)
    return hasher.hexdigest()


def hash_file(file_path: Union[str, Path]) -> str:
    """Compute the hex digest of a file's full byte stream.

    The file is read in chunks, so large files are never loaded whole.

    Args:
        file_path: File to fingerprint

    Returns:
        Hex digest (64 characters for SHA-256)

    Raises:
        FileError: If the file is missing, unreadable, a directory or an invalid path
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    try:
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(READ_CHUNK_SIZE), b""):
                hasher.update(chunk)
    except (OSError, ValueError) as e:
        reason = getattr(e, "strerror", None) or e
        raise FileError(f"Cannot read {file_path}: {reason}") from e

    return hasher.hexdigest()
