"""Atomic file replacement shared by the stores."""

import logging
import os
import tempfile
from pathlib import Path

from commet.constants import TMP_PREFIX
from commet.errors import WriteError

logger = logging.getLogger(__name__)


def atomic_write_text(target: Path, text: str) -> None:
    """Write ``text`` to ``target`` so readers see the old or new file, never a mix.

    Content goes to a temp file in the same directory, is fsynced, and is
    then moved over the target with ``os.replace``.

    Raises:
        WriteError: If any step fails; the temp file is removed
    """
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent,
            prefix=TMP_PREFIX,
            suffix=".json",
        )
    except OSError as e:
        raise WriteError(f"Failed to write {target}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, target)

    except OSError as e:
        try:
            os.unlink(tmp_path)
        except OSError:
            logger.debug("Temp file already gone: %s", tmp_path)
        raise WriteError(f"Failed to write {target}: {e}") from e

    logger.debug("Wrote %s", target)
