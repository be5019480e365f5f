"""Core engine layer for Commet.

This module provides the repository orchestration over the storage layer:
initialization, staging, committing and history lookups.
"""

from commet.core.repository import Repository

__all__ = [
    "Repository",
]
