"""Schema building service."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from typemock.type_model import (
    PropertySignature,
    SourceModel,
    TypeNode,
    is_array_shaped,
    is_object_shaped,
    owner_declaration,
    render_type,
    resolve_object_members,
)

from .declaration_locator import locate_all_declarations, locate_declaration
from .schema_models import (
    DeclarationHandle,
    DeclarationNotFound,
    DeclarationSummary,
    FieldSchema,
    InterfaceSchema,
    RecursionDecision,
)


def build_interface_schema(handle: DeclarationHandle) -> InterfaceSchema:
    """Convert a located declaration into its schema tree."""
    members = resolve_object_members(handle.declaration, handle.model) or ()
    return InterfaceSchema(
        name=handle.name,
        docs=handle.declaration.docs,
        fields=_build_fields(members, handle.model, expanding=frozenset()),
    )


def classify_for_recursion(
    field_type: TypeNode,
    model: SourceModel,
    *,
    expanding: frozenset[TypeNode] = frozenset(),
) -> RecursionDecision:
    """Decide whether a field type is expanded into child fields.

    Only inline object literals with at least one property recurse. Arrays,
    non-object types and anything that refers to one of the file's named
    declarations stay terminal. `expanding` holds the object nodes already
    being expanded on the current path.
    """
    if not is_object_shaped(field_type, model) or is_array_shaped(field_type, model):
        return RecursionDecision.TERMINAL
    if owner_declaration(field_type, model) is not None:
        return RecursionDecision.TERMINAL
    if field_type in expanding or not resolve_object_members(field_type, model):
        return RecursionDecision.TERMINAL
    return RecursionDecision.RECURSE


def extract_interface_schema(
    source_path: Path | str, declaration_name: str
) -> InterfaceSchema | DeclarationNotFound:
    """Locate one declaration and build its schema."""
    located = locate_declaration(source_path, declaration_name)
    if isinstance(located, DeclarationNotFound):
        return located
    return build_interface_schema(located)


def extract_all_interface_schemas(source_path: Path | str) -> tuple[InterfaceSchema, ...]:
    return tuple(build_interface_schema(handle) for handle in locate_all_declarations(source_path))


def summarize_declarations(schemas: Iterable[InterfaceSchema]) -> tuple[DeclarationSummary, ...]:
    return tuple(
        DeclarationSummary(name=schema.name, docs=schema.docs, field_count=len(schema.fields))
        for schema in schemas
    )


def _build_fields(
    members: Sequence[PropertySignature],
    model: SourceModel,
    *,
    expanding: frozenset[TypeNode],
) -> tuple[FieldSchema, ...]:
    return tuple(_build_field(member, model, expanding=expanding) for member in members)


def _build_field(
    member: PropertySignature, model: SourceModel, *, expanding: frozenset[TypeNode]
) -> FieldSchema:
    children: tuple[FieldSchema, ...] | None = None
    decision = classify_for_recursion(member.type, model, expanding=expanding)
    if decision is RecursionDecision.RECURSE:
        nested = resolve_object_members(member.type, model) or ()
        children = _build_fields(nested, model, expanding=expanding | {member.type})
    return FieldSchema(
        name=member.name,
        type=render_type(member.type),
        docs=member.docs,
        is_required=not member.optional,
        children=children,
    )
