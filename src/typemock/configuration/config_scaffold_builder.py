"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "typemock.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for typemock.
# Replace every <REQUIRED> placeholder before running list, extract or prompt.
# Remove or edit the optional sections only when the defaults do not fit.

source:
  # Declaration source file; relative paths resolve against this file.
  path: "<REQUIRED>"

output:
  # Indentation used for JSON printed by the commands.
  indent: 2

generation:
  # Chat model named in generated request payloads.
  model: "gpt-3.5-turbo"
  # Sampling temperature for a single sample and for batches (0 to 2).
  temperature: 0.7
  batch_temperature: 0.8
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
