"""Declaration locator tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typemock.schema_extraction import (
    DeclarationHandle,
    DeclarationNotFound,
    locate_all_declarations,
    locate_declaration,
)
from typemock.type_model import SourceLoadError


def _write_source(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "types.ts"
    path.write_text(text, encoding="utf-8")
    return path


def test_locates_declaration_by_exact_name(tmp_path: Path) -> None:
    path = _write_source(
        tmp_path, "interface User { id: string }\ninterface UserTag { id: number }\n"
    )

    located = locate_declaration(path, "UserTag")

    assert isinstance(located, DeclarationHandle)
    assert located.name == "UserTag"
    assert located.model.path == path


def test_missing_declaration_is_returned_as_data(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = _write_source(tmp_path, "interface User { id: string }\ntype Label = string;\n")

    with caplog.at_level(logging.WARNING, logger="typemock"):
        located = locate_declaration(path, "user")

    assert located == DeclarationNotFound(
        source_path=path, declaration_name="user", available_names=("User",)
    )
    assert located.message == f'Declaration "user" not found in {path}'
    assert 'Declaration "user" not found' in caplog.text


def test_non_structural_alias_is_not_located(tmp_path: Path) -> None:
    path = _write_source(tmp_path, "type Label = string;\n")

    assert isinstance(locate_declaration(path, "Label"), DeclarationNotFound)


def test_locate_all_returns_structural_declarations_in_file_order(tmp_path: Path) -> None:
    path = _write_source(
        tmp_path,
        """
type Settings = { theme: string };
interface Zeta { a: string }
type Label = string;
interface Alpha { b: string }
interface Zeta { c: string }
""",
    )

    handles = locate_all_declarations(path)

    assert [handle.name for handle in handles] == ["Settings", "Zeta", "Alpha"]


def test_source_load_failure_propagates(tmp_path: Path) -> None:
    with pytest.raises(SourceLoadError):
        locate_declaration(tmp_path / "missing.ts", "Anything")

    broken = _write_source(tmp_path, "interface Broken { a: }")
    with pytest.raises(SourceLoadError):
        locate_all_declarations(broken)
