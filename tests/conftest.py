"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from commet.core import Repository


@pytest.fixture
def repo(tmp_path: Path) -> Repository:
    """Create an initialized repository with a few sample files."""
    root = tmp_path / "test_repo"
    root.mkdir()

    (root / "a.txt").write_text("alpha\n")
    (root / "b.txt").write_text("bravo\n")
    (root / "docs").mkdir()
    (root / "docs" / "notes.md").write_text("# Notes\n")

    repository = Repository(root)
    repository.init()
    return repository
