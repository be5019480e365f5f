"""Repository orchestration for Commet.

A :class:`Repository` ties the hasher, the staging store and the commit store
together. ``add`` fingerprints a file and appends it to the staging area;
``commit`` seals the staged entries into an immutable record and only then
clears the staging area, so a crash between the two steps leaves the staged
entries in place rather than losing them.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from commet.constants import COMMET_DIR
from commet.errors import (
    AlreadyInitializedError,
    FileError,
    NotInitializedError,
    NothingToCommitError,
    WriteError,
)
from commet.models import Commit, StagedEntry
from commet.storage import CommitStore, StagingStore, hash_file
from commet.storage.commit_store import compute_commit_hash

logger = logging.getLogger(__name__)


class Repository:
    """A working tree with a ``.commet/`` control directory.

    Attributes:
        root: Absolute path of the working tree
        commet_dir: Path to the control directory
        staging: Staging store for this repository
        commits: Commit store for this repository
    """

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(os.path.abspath(root))
        self.commet_dir = self.root / COMMET_DIR
        self.staging = StagingStore(self.commet_dir)
        self.commits = CommitStore(self.commet_dir)

    @property
    def is_initialized(self) -> bool:
        """Whether the control directory exists."""
        return self.commet_dir.is_dir()

    def init(self) -> Path:
        """Create the control directory.

        Returns:
            Path of the new control directory

        Raises:
            AlreadyInitializedError: If ``.commet/`` already exists
            WriteError: If the directory cannot be created
        """
        try:
            self.commet_dir.mkdir()
        except FileExistsError as e:
            raise AlreadyInitializedError(
                f"Repository already initialized in {self.root}"
            ) from e
        except OSError as e:
            raise WriteError(f"Failed to initialize repository: {e}") from e

        logger.info("Initialized repository in %s", self.root)
        return self.commet_dir

    def add(self, file_path: Union[str, Path]) -> StagedEntry:
        """Fingerprint a file and append it to the staging area.

        Re-adding a path appends another entry; earlier entries are kept.

        Args:
            file_path: File to stage, absolute or relative to the root

        Returns:
            The entry that was staged

        Raises:
            NotInitializedError: If the repository has no control directory
            FileError: If the file cannot be read or lies outside the working tree
            WriteError: If the staging area cannot be persisted
        """
        self._require_initialized()

        abs_path, rel_path = self._resolve_path(file_path)
        content_hash = hash_file(abs_path)

        entry = StagedEntry(path=rel_path, content_hash=content_hash)
        self.staging.append(entry)

        logger.info("Added %s to staging area", rel_path)
        return entry

    def commit(self, message: str) -> Commit:
        """Seal the staged entries into a new commit and clear the staging area.

        The staging lock is held throughout, so no ``add`` from another
        process can land between reading the entries and clearing them.

        Args:
            message: Commit message

        Returns:
            The saved commit

        Raises:
            NotInitializedError: If the repository has no control directory
            NothingToCommitError: If nothing is staged
            CorruptStateError: If the staging file cannot be parsed
            WriteError: If the commit or the cleared staging area cannot be persisted
        """
        self._require_initialized()

        with self.staging.lock():
            staged = self.staging.load()
            if not staged:
                raise NothingToCommitError("No changes to commit")

            snapshot = self._snapshot(staged)
            timestamp = datetime.now(timezone.utc).isoformat()
            commit = Commit(
                hash=compute_commit_hash(message, timestamp, snapshot.items()),
                message=message,
                timestamp=timestamp,
                files=tuple(snapshot),
            )

            # Record first, then clear
            self.commits.save(commit)
            self.staging.clear()

        logger.info("Committed %s (%d file(s))", commit.hash, len(commit.files))
        return commit

    def status(self) -> List[StagedEntry]:
        """Return the staged entries in the order they were added.

        Raises:
            NotInitializedError: If the repository has no control directory
            CorruptStateError: If the staging file cannot be parsed
        """
        self._require_initialized()
        return self.staging.load()

    def log(self, limit: Optional[int] = None) -> List[Commit]:
        """Return commits newest first, optionally capped at ``limit``."""
        self._require_initialized()

        commits = self.commits.list()
        if limit is not None:
            commits = commits[:limit]
        return commits

    def show(self, commit_hash: str) -> Commit:
        """Load a single commit by hash.

        Raises:
            NotInitializedError: If the repository has no control directory
            NotFoundError: If no commit has that hash
        """
        self._require_initialized()
        return self.commits.load(commit_hash)

    def _require_initialized(self) -> None:
        if not self.is_initialized:
            raise NotInitializedError(
                f"Not a Commet repository (no {COMMET_DIR}/ found in {self.root})"
            )

    def _resolve_path(self, file_path: Union[str, Path]) -> Tuple[Path, str]:
        """Return the absolute path and the root-relative POSIX path of a file.

        Raises:
            FileError: If the path is outside the working tree or inside ``.commet/``
        """
        path = Path(file_path)
        if not path.is_absolute():
            path = self.root / path
        abs_path = Path(os.path.normpath(path))

        try:
            rel_path = abs_path.relative_to(self.root)
        except ValueError:
            raise FileError(f"Path {file_path} is outside repository root {self.root}")

        if rel_path.parts and rel_path.parts[0] == COMMET_DIR:
            raise FileError(f"Cannot stage {file_path}: it is inside {COMMET_DIR}/")

        return abs_path, rel_path.as_posix()

    @staticmethod
    def _snapshot(staged: List[StagedEntry]) -> Dict[str, str]:
        """Collapse staged entries to one hash per path.

        Paths keep the position of their first entry; the last entry wins.
        """
        snapshot: Dict[str, str] = {}
        for entry in staged:
            snapshot[entry.path] = entry.content_hash
        return snapshot
