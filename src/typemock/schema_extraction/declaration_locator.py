"""Declaration lookup service."""

from __future__ import annotations

import logging
from pathlib import Path

from typemock.type_model import (
    InterfaceDeclaration,
    NamedDeclaration,
    SourceModel,
    load_source_model,
    resolve_object_members,
)

from .schema_models import DeclarationHandle, DeclarationNotFound

_LOGGER = logging.getLogger(__name__)


def locate_declaration(
    source_path: Path | str, declaration_name: str
) -> DeclarationHandle | DeclarationNotFound:
    """Find the top-level structural declaration with an exactly matching name.

    The source file is loaded afresh on every call. An absent name is a
    normal outcome and comes back as `DeclarationNotFound`; unreadable or
    malformed sources raise `SourceLoadError`.
    """
    model = load_source_model(source_path)
    handles = _structural_handles(model)
    for handle in handles:
        if handle.name == declaration_name:
            return handle

    _LOGGER.warning('Declaration "%s" not found in %s', declaration_name, model.path)
    return DeclarationNotFound(
        source_path=model.path,
        declaration_name=declaration_name,
        available_names=tuple(handle.name for handle in handles),
    )


def locate_all_declarations(source_path: Path | str) -> tuple[DeclarationHandle, ...]:
    """Return every top-level structural declaration in file order."""
    return _structural_handles(load_source_model(source_path))


def _structural_handles(model: SourceModel) -> tuple[DeclarationHandle, ...]:
    handles: list[DeclarationHandle] = []
    seen_names: set[str] = set()
    for declaration in model.declarations:
        if declaration.name in seen_names or not _is_structural(declaration, model):
            continue
        seen_names.add(declaration.name)
        handles.append(DeclarationHandle(model=model, declaration=declaration))
    _LOGGER.debug("Found %d structural declarations in %s", len(handles), model.path)
    return tuple(handles)


def _is_structural(declaration: NamedDeclaration, model: SourceModel) -> bool:
    if isinstance(declaration, InterfaceDeclaration):
        return True
    return resolve_object_members(declaration, model) is not None
