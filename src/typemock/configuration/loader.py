"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from typemock.prompt_rendering import (
    DEFAULT_BATCH_TEMPERATURE,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    GenerationSettings,
)

from .runtime_settings import Configuration, OutputSettings, SourceSettings

_MAX_TEMPERATURE = 2.0


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        source=_parse_source_section(parsed.get("source"), path.parent),
        output=_parse_output_section(parsed.get("output")),
        generation=_parse_generation_section(parsed.get("generation")),
    )


def _parse_source_section(value: Any, base_path: Path) -> SourceSettings:
    section = _require_mapping(value, "source")
    raw_path = _require_non_empty_string(section.get("path"), "source.path")
    source_path = _resolve_path(base_path, raw_path)
    if not source_path.exists():
        raise ConfigurationError(f"Source file not found: {source_path}")
    return SourceSettings(path=source_path)


def _parse_output_section(value: Any) -> OutputSettings:
    section = _optional_mapping(value, "output")
    indent = _require_positive_int(section.get("indent", 2), "output.indent")
    return OutputSettings(indent=indent)


def _parse_generation_section(value: Any) -> GenerationSettings:
    section = _optional_mapping(value, "generation")
    model = _require_non_empty_string(section.get("model", DEFAULT_MODEL), "generation.model")
    temperature = _require_temperature(
        section.get("temperature", DEFAULT_TEMPERATURE), "generation.temperature"
    )
    batch_temperature = _require_temperature(
        section.get("batch_temperature", DEFAULT_BATCH_TEMPERATURE),
        "generation.batch_temperature",
    )
    return GenerationSettings(
        model=model, temperature=temperature, batch_temperature=batch_temperature
    )


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _require_temperature(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{field_name} must be a number.")
    if not 0 <= value <= _MAX_TEMPERATURE:
        raise ConfigurationError(f"{field_name} must be between 0 and {_MAX_TEMPERATURE:g}.")
    return float(value)
