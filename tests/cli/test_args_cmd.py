"""Tests for ``vslocate args`` command and the top-level group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from vslocate import __version__
from vslocate.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


class TestArgsCommand:
    """Printing arguments without running vswhere."""

    def test_json_array(self, runner: CliRunner) -> None:
        """--json prints the argument list as a JSON array."""
        result = runner.invoke(cli, ["args", "--min-version", "15.0", "--all", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            "-format", "json", "-utf8", "-version", "[15.0.0.0,)", "-all",
        ]

    def test_command_line(self, runner: CliRunner) -> None:
        """Without --json, a quoted command line is printed."""
        result = runner.invoke(cli, ["args", "--path", r"C:\Program Files\VS"])
        assert result.exit_code == 0
        assert result.output.strip() == r'-format json -utf8 -path "C:\Program Files\VS"'

    def test_text_format(self, runner: CliRunner) -> None:
        """Text output adds -nologo."""
        result = runner.invoke(cli, ["args", "--format", "text", "--json"])
        assert json.loads(result.output) == ["-format", "text", "-utf8", "-nologo"]

    def test_legacy_rejects_components(self, runner: CliRunner) -> None:
        """Component options are usage errors in legacy mode."""
        result = runner.invoke(cli, ["args", "--mode", "legacy", "--requires-any"])
        assert result.exit_code == 2
        assert "--requires-any" in result.output


class TestGroup:
    """Top-level options."""

    def test_version(self, runner: CliRunner) -> None:
        """--version reports the package version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        """--help lists both subcommands."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "find" in result.output
        assert "args" in result.output

    def test_verbose_accepted(self, runner: CliRunner) -> None:
        """-v enables debug logging without changing output."""
        result = runner.invoke(cli, ["-v", "args", "--json"])
        assert result.exit_code == 0
        assert "-utf8" in result.output
