"""CLI smoke tests."""

from click.testing import CliRunner
from typemock.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "list" in result.output
    assert "extract" in result.output
    assert "prompt" in result.output
