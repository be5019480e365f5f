"""Storage layer for Commet.

This module provides content fingerprinting, the staging store and the
commit store.
"""

from commet.storage.commit_store import CommitStore
from commet.storage.hasher import hash_bytes, hash_file
from commet.storage.staging_store import StagingStore

__all__ = [
    "CommitStore",
    "StagingStore",
    "hash_bytes",
    "hash_file",
]
