"""Unit tests for commet init and top-level options."""

import os
from pathlib import Path

from typer.testing import CliRunner

from commet.cli.main import app
from commet.constants import COMMET_DIR

runner = CliRunner()


class TestInitCommand:
    """Test commet init command."""

    def test_init_creates_control_dir(self, tmp_path: Path) -> None:
        """Test that init creates .commet/."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            result = runner.invoke(app, ["init"])

            assert result.exit_code == 0
            assert "Initialized empty repository" in result.stdout
            assert (tmp_path / COMMET_DIR).is_dir()
        finally:
            os.chdir(original_cwd)

    def test_init_fails_when_already_initialized(self, tmp_path: Path) -> None:
        """Test that a second init exits non-zero."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            result1 = runner.invoke(app, ["init", "--quiet"])
            assert result1.exit_code == 0

            result2 = runner.invoke(app, ["init"])
            assert result2.exit_code == 1
            assert "already initialized" in result2.stdout
        finally:
            os.chdir(original_cwd)

    def test_init_quiet_mode_no_output(self, tmp_path: Path) -> None:
        """Test that --quiet suppresses output."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            result = runner.invoke(app, ["init", "--quiet"])

            assert result.exit_code == 0
            assert "Initialized" not in result.stdout
        finally:
            os.chdir(original_cwd)


class TestTopLevelOptions:
    """Test version and help handling."""

    def test_version_flag(self) -> None:
        """Test -v prints the version."""
        result = runner.invoke(app, ["-v"])

        assert result.exit_code == 0
        assert "Commet version: 0.1.0" in result.stdout

    def test_version_command(self) -> None:
        """Test the version subcommand."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.stdout

    def test_no_arguments_prints_usage(self) -> None:
        """Test running without arguments shows help."""
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "Usage" in result.stdout

    def test_single_dash_help(self) -> None:
        """Test -help is accepted as a help flag."""
        result = runner.invoke(app, ["-help"])

        assert result.exit_code == 0
        assert "Usage" in result.stdout

    def test_unknown_command_fails(self) -> None:
        """Test unknown subcommands exit non-zero."""
        result = runner.invoke(app, ["frobnicate"])

        assert result.exit_code != 0
