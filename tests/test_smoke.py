"""Basic smoke tests to verify project setup."""

from commet import __version__


def test_version() -> None:
    """Test that version is correctly defined."""
    assert __version__ == "0.1.0"


def test_import_storage() -> None:
    """Test that storage module can be imported."""
    from commet import storage  # noqa: F401


def test_import_core() -> None:
    """Test that core module can be imported."""
    from commet import core  # noqa: F401


def test_import_cli() -> None:
    """Test that cli module can be imported."""
    from commet.cli import main  # noqa: F401


def test_repo_fixture(repo) -> None:
    """Test that the repo fixture is initialized with sample files."""
    assert repo.is_initialized
    assert (repo.root / "a.txt").read_text() == "alpha\n"
