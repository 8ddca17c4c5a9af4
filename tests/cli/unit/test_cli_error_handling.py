"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from typemock.cli import main


def test_missing_argument_returns_clean_click_error(capsys) -> None:
    exit_code = main(["extract", "--source", "types.ts"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing argument" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["list", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_source_and_config_is_reported(capsys) -> None:
    exit_code = main(["list"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Provide --config or --source." in captured.err


def test_unreadable_source_is_reported_without_traceback(tmp_path: Path, capsys) -> None:
    exit_code = main(["extract", "Anything", "--source", str(tmp_path / "missing.ts")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Source file not found" in captured.err
    assert "Traceback" not in captured.err


def test_malformed_source_is_reported(tmp_path: Path, capsys) -> None:
    source = tmp_path / "broken.ts"
    source.write_text("interface Broken { a: }\n", encoding="utf-8")

    exit_code = main(["list", "--source", str(source)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "broken.ts:1:" in captured.err


def test_invalid_configuration_is_reported(tmp_path: Path, capsys) -> None:
    config = tmp_path / "typemock.yaml"
    config.write_text("output:\n  indent: 2\n", encoding="utf-8")

    exit_code = main(["list", "--config", str(config)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration section 'source' is required." in captured.err
