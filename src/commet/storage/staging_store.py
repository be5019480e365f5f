"""Staging area persistence for Commet.

The staging area is a JSON list of ``{"path", "hash"}`` records stored in
``.commet/staged.json``. The file is absent whenever nothing is staged.

Read-modify-write cycles are serialized across processes with an exclusive
``flock`` on ``.commet/staged.lock``; every write goes through a temp file and
an atomic rename, so a crash never leaves a half-written list behind.
"""

import contextlib
import fcntl
import json
import logging
from pathlib import Path
from typing import Iterator, List

from commet.constants import STAGED_FILE, STAGED_LOCK_FILE
from commet.errors import CorruptStateError, WriteError
from commet.models import StagedEntry
from commet.storage.atomic import atomic_write_text

logger = logging.getLogger(__name__)


class StagingStore:
    """Ordered, append-only list of staged entries.

    Duplicates are kept: adding the same path twice stores two entries.

    Attributes:
        commet_dir: Path to the control directory
        staged_path: Path to the staging file
        lock_path: Path to the lock file guarding the staging file
    """

    def __init__(self, commet_dir: Path) -> None:
        self.commet_dir = Path(commet_dir)
        self.staged_path = self.commet_dir / STAGED_FILE
        self.lock_path = self.commet_dir / STAGED_LOCK_FILE
        self._lock_depth = 0

    @contextlib.contextmanager
    def lock(self) -> Iterator[None]:
        """Hold the exclusive staging lock for the duration of a ``with`` block.

        Re-entrant for this instance: nested ``with store.lock()`` blocks
        share the outer acquisition.

        Raises:
            WriteError: If the lock file cannot be opened
        """
        if self._lock_depth:
            self._lock_depth += 1
            try:
                yield
            finally:
                self._lock_depth -= 1
            return

        try:
            lock_f = open(self.lock_path, "a")
        except OSError as e:
            raise WriteError(f"Cannot open staging lock {self.lock_path}: {e}") from e

        with lock_f:
            fcntl.flock(lock_f.fileno(), fcntl.LOCK_EX)
            self._lock_depth = 1
            logger.debug("Acquired staging lock: %s", self.lock_path)
            try:
                yield
            finally:
                self._lock_depth = 0
                fcntl.flock(lock_f.fileno(), fcntl.LOCK_UN)
                logger.debug("Released staging lock: %s", self.lock_path)

    def load(self) -> List[StagedEntry]:
        """Return staged entries in insertion order.

        Returns:
            Staged entries; empty if no staging file exists

        Raises:
            CorruptStateError: If the staging file is not a list of records
        """
        try:
            with open(self.staged_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"Corrupted staging file {self.staged_path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptStateError(f"Cannot read staging file {self.staged_path}: {e}") from e

        if not isinstance(data, list):
            raise CorruptStateError(
                f"Corrupted staging file {self.staged_path}: expected a list, "
                f"got {type(data).__name__}"
            )

        return [StagedEntry.from_dict(item) for item in data]

    def append(self, entry: StagedEntry) -> None:
        """Append an entry at the end of the staging list.

        Raises:
            CorruptStateError: If the existing staging file is unreadable
            WriteError: If the new list cannot be persisted
        """
        with self.lock():
            entries = self.load()
            entries.append(entry)
            self._save(entries)

        logger.debug("Staged %s (%s)", entry.path, entry.content_hash)

    def clear(self) -> None:
        """Remove the staging file. Clearing an empty store is a no-op.

        Raises:
            WriteError: If the staging file exists but cannot be removed
        """
        with self.lock():
            try:
                self.staged_path.unlink()
            except FileNotFoundError:
                return
            except OSError as e:
                raise WriteError(f"Failed to clear staging area: {e}") from e

        logger.debug("Cleared staging area")

    def is_empty(self) -> bool:
        """Check whether anything is staged."""
        return not self.load()

    def _save(self, entries: List[StagedEntry]) -> None:
        """Persist entries atomically."""
        payload = json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)
        atomic_write_text(self.staged_path, payload)
