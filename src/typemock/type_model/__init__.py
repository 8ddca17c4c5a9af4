"""Type model exports."""

from .declaration_models import (
    InterfaceDeclaration,
    NamedDeclaration,
    ObjectLiteralType,
    PropertySignature,
    RawType,
    SourceModel,
    TypeAliasDeclaration,
    TypeNode,
    TypePredicate,
    TypeReference,
)
from .source_parser import SourceLoadError, load_source_model, parse_source_text
from .type_inspection import (
    is_array_shaped,
    is_object_shaped,
    owner_declaration,
    render_type,
    resolve_object_members,
)

__all__ = [
    "InterfaceDeclaration",
    "NamedDeclaration",
    "ObjectLiteralType",
    "PropertySignature",
    "RawType",
    "SourceModel",
    "TypeAliasDeclaration",
    "TypeNode",
    "TypePredicate",
    "TypeReference",
    "SourceLoadError",
    "load_source_model",
    "parse_source_text",
    "is_array_shaped",
    "is_object_shaped",
    "owner_declaration",
    "render_type",
    "resolve_object_members",
]
