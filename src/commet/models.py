"""Value objects persisted by Commet.

Both records are frozen: a staged entry describes one file at one moment,
and a commit is never mutated once written.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from commet.errors import CorruptStateError


@dataclass(frozen=True)
class StagedEntry:
    """One file queued for the next commit.

    Attributes:
        path: POSIX path relative to the repository root
        content_hash: Hex digest of the file's bytes when it was added
    """

    path: str
    content_hash: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to the on-disk ``{"path", "hash"}`` record."""
        return {"path": self.path, "hash": self.content_hash}

    @classmethod
    def from_dict(cls, data: Any) -> "StagedEntry":
        """Build an entry from an on-disk record.

        Raises:
            CorruptStateError: If the record is not a ``{"path", "hash"}`` object
        """
        if not isinstance(data, dict):
            raise CorruptStateError(f"Staged entry must be an object, got {type(data).__name__}")

        path = data.get("path")
        content_hash = data.get("hash")
        if not isinstance(path, str) or not isinstance(content_hash, str):
            raise CorruptStateError(f"Staged entry is missing 'path' or 'hash': {data!r}")

        return cls(path=path, content_hash=content_hash)


@dataclass(frozen=True)
class Commit:
    """An immutable history entry.

    Attributes:
        hash: Identifier, also the record's filename under ``commits/``
        message: Commit message
        timestamp: ISO-8601 creation instant (UTC)
        files: Paths sealed into this commit, in staging order
    """

    hash: str
    message: str
    timestamp: str
    files: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "hash": self.hash,
            "message": self.message,
            "timestamp": self.timestamp,
            "files": list(self.files),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Commit":
        """Build a commit from a deserialized record.

        Raises:
            CorruptStateError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise CorruptStateError(f"Commit record must be an object, got {type(data).__name__}")

        for key in ("hash", "message", "timestamp"):
            if not isinstance(data.get(key), str):
                raise CorruptStateError(f"Commit record has no valid '{key}' field")

        files = data.get("files", [])
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise CorruptStateError("Commit record 'files' must be a list of paths")

        return cls(
            hash=data["hash"],
            message=data["message"],
            timestamp=data["timestamp"],
            files=tuple(files),
        )
