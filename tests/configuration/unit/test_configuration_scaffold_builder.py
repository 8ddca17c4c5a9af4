"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from typemock.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Configuration template for typemock" in scaffold
    assert "source:" in scaffold
    assert "output:" in scaffold
    assert "generation:" in scaffold
    assert "<REQUIRED>" in scaffold
    assert "batch_temperature" in scaffold


def test_placeholder_configuration_is_valid_yaml_with_defaults() -> None:
    parsed = yaml.safe_load(build_placeholder_configuration())

    assert parsed["source"]["path"] == "<REQUIRED>"
    assert parsed["output"]["indent"] == 2
    assert parsed["generation"] == {
        "model": "gpt-3.5-turbo",
        "temperature": 0.7,
        "batch_temperature": 0.8,
    }


def test_write_placeholder_configuration_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / "typemock.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert output_path.exists()
    assert "<REQUIRED>" in output_path.read_text(encoding="utf-8")


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "typemock.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
