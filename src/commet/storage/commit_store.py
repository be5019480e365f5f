"""Commit record storage for Commet.

Each commit is a pretty-printed JSON file at ``.commet/commits/<hash>``.
Records are written once and never modified.
"""

import hashlib
import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Tuple

from commet.constants import COMMITS_DIR, HASH_ALGORITHM, HASH_LENGTH, TMP_PREFIX
from commet.errors import CorruptStateError, NotFoundError, WriteError
from commet.models import Commit
from commet.storage.atomic import atomic_write_text

logger = logging.getLogger(__name__)

COMMIT_NAME_RE = re.compile(rf"[0-9a-f]{{{HASH_LENGTH}}}")


def compute_commit_hash(
    message: str,
    timestamp: str,
    files: Iterable[Tuple[str, str]],
) -> str:
    """Compute a commit identifier from its message, instant and snapshot.

    The hash covers the canonical JSON (sorted keys, no whitespace) of the
    message, the timestamp and the ``(path, content_hash)`` pairs sorted by
    path, so equal snapshots with different messages or instants still get
    distinct identifiers.

    Args:
        message: Commit message
        timestamp: ISO-8601 creation instant
        files: ``(path, content_hash)`` pairs of the snapshot

    Returns:
        Hex digest
    """
    canonical_json = json.dumps(
        {
            "message": message,
            "timestamp": timestamp,
            "files": sorted([path, content_hash] for path, content_hash in files),
        },
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(canonical_json.encode("utf-8"))
    return hasher.hexdigest()


class CommitStore:
    """Append-only store of commit records keyed by hash.

    Attributes:
        commet_dir: Path to the control directory
        commits_dir: Directory holding one file per commit
    """

    def __init__(self, commet_dir: Path) -> None:
        self.commet_dir = Path(commet_dir)
        self.commits_dir = self.commet_dir / COMMITS_DIR

    def save(self, commit: Commit) -> None:
        """Persist a commit under its hash, creating ``commits/`` if needed.

        An existing record with the same hash is replaced.

        Raises:
            WriteError: If the record cannot be written
        """
        try:
            self.commits_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(f"Failed to create {self.commits_dir}: {e}") from e

        json_str = json.dumps(commit.to_dict(), indent=2, ensure_ascii=False)
        atomic_write_text(self._commit_path(commit.hash), json_str)

        logger.debug("Saved commit %s", commit.hash)

    def load(self, commit_hash: str) -> Commit:
        """Read a commit by its full hash.

        Raises:
            NotFoundError: If no record exists for the hash
            CorruptStateError: If the record cannot be parsed or names another hash
        """
        if not self._is_valid_name(commit_hash):
            raise NotFoundError(f"Commit not found: {commit_hash}")

        commit_path = self._commit_path(commit_hash)
        try:
            with open(commit_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise NotFoundError(f"Commit not found: {commit_hash}") from e
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"Corrupted commit record {commit_hash}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptStateError(f"Cannot read commit record {commit_hash}: {e}") from e
        except ValueError as e:
            raise NotFoundError(f"Commit not found: {commit_hash}") from e

        commit = Commit.from_dict(data)
        if commit.hash != commit_hash:
            raise CorruptStateError(
                f"Commit hash mismatch: expected {commit_hash}, got {commit.hash}"
            )

        return commit

    def exists(self, commit_hash: str) -> bool:
        """Check if a commit record exists."""
        if not self._is_valid_name(commit_hash):
            return False
        return self._commit_path(commit_hash).is_file()

    def list(self) -> List[Commit]:
        """Return every stored commit, newest first.

        Files whose names are not commit hashes are skipped.

        Raises:
            CorruptStateError: If a commit record cannot be parsed
        """
        if not self.commits_dir.is_dir():
            return []

        commits = [
            self.load(item.name)
            for item in self.commits_dir.iterdir()
            if item.is_file() and COMMIT_NAME_RE.fullmatch(item.name)
        ]
        commits.sort(key=lambda c: c.timestamp, reverse=True)
        return commits

    def _commit_path(self, commit_hash: str) -> Path:
        return self.commits_dir / commit_hash

    @staticmethod
    def _is_valid_name(commit_hash: str) -> bool:
        """Reject names that could escape ``commits/`` or name a temp file."""
        return (
            isinstance(commit_hash, str)
            and bool(commit_hash)
            and "/" not in commit_hash
            and "\\" not in commit_hash
            and "\x00" not in commit_hash
            and commit_hash not in (".", "..")
            and not commit_hash.startswith(TMP_PREFIX)
        )
