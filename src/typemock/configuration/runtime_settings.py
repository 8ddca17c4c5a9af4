"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from typemock.prompt_rendering import GenerationSettings


@dataclass(frozen=True)
class SourceSettings:
    """Declaration source file to extract from."""

    path: Path


@dataclass(frozen=True)
class OutputSettings:
    """JSON rendering options for command output."""

    indent: int


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    source: SourceSettings
    output: OutputSettings
    generation: GenerationSettings
