"""Schema extraction exports."""

from .declaration_locator import locate_all_declarations, locate_declaration
from .schema_builder import (
    build_interface_schema,
    classify_for_recursion,
    extract_all_interface_schemas,
    extract_interface_schema,
    summarize_declarations,
)
from .schema_models import (
    DeclarationHandle,
    DeclarationNotFound,
    DeclarationSummary,
    FieldSchema,
    InterfaceSchema,
    RecursionDecision,
)

__all__ = [
    "DeclarationHandle",
    "DeclarationNotFound",
    "DeclarationSummary",
    "FieldSchema",
    "InterfaceSchema",
    "RecursionDecision",
    "build_interface_schema",
    "classify_for_recursion",
    "extract_all_interface_schemas",
    "extract_interface_schema",
    "locate_all_declarations",
    "locate_declaration",
    "summarize_declarations",
]
