"""Commet - a minimal local version control engine.

Commet tracks whole-file snapshots through a staging area and immutable,
hash-addressed commit records stored under ``.commet/``.
"""

__version__ = "0.1.0"
__author__ = "Commet Contributors"

__all__ = ["__version__", "__author__"]
