"""Exception hierarchy for Commet.

Every failure the core reports is a subclass of :class:`CommetError`, so a
caller can catch the whole family at once or pick out a single kind.
"""


class CommetError(Exception):
    """Base class for all Commet errors."""


class NotInitializedError(CommetError):
    """Raised when an operation needs a repository that does not exist."""


class AlreadyInitializedError(CommetError):
    """Raised by ``init`` when the control directory already exists."""


class FileError(CommetError):
    """Raised when a working-tree file cannot be opened or read."""


class CorruptStateError(CommetError):
    """Raised when a staging file or commit record cannot be parsed."""


class WriteError(CommetError):
    """Raised when repository state cannot be persisted."""


class NothingToCommitError(CommetError):
    """Raised by ``commit`` when the staging area is empty."""


class NotFoundError(CommetError):
    """Raised when a commit lookup misses."""
