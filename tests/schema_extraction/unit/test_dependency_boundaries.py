"""Boundary tests for extraction-core internal dependencies."""

from __future__ import annotations

from pathlib import Path


def _package_root() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "typemock"


def test_extraction_core_does_not_import_outer_layers() -> None:
    core_modules = sorted((_package_root() / "schema_extraction").glob("*.py"))
    forbidden_import_fragments = (
        "typemock.cli",
        "typemock.configuration",
        "typemock.prompt_rendering",
    )

    assert core_modules
    for module_path in core_modules:
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden core dependency in {module_path}: {fragment}"


def test_type_model_does_not_import_schema_extraction() -> None:
    for module_path in sorted((_package_root() / "type_model").glob("*.py")):
        text = module_path.read_text(encoding="utf-8")
        assert "schema_extraction" not in text, f"Forbidden dependency in {module_path}"
