"""Structural introspection over parsed type nodes."""

from __future__ import annotations

import json

from .declaration_models import (
    ARRAY_REFERENCE_NAMES,
    ArrayType,
    ConditionalType,
    FunctionType,
    IndexedAccessType,
    InterfaceDeclaration,
    IntersectionType,
    LiteralType,
    NamedDeclaration,
    ObjectLiteralType,
    PrimitiveType,
    PropertySignature,
    RawType,
    SourceModel,
    TupleType,
    TypeAliasDeclaration,
    TypeNode,
    TypeOperatorType,
    TypePredicate,
    TypeReference,
    UnionType,
)

_Resolved = TypeNode | InterfaceDeclaration


def owner_declaration(node: TypeNode, model: SourceModel) -> NamedDeclaration | None:
    """Return the file's named declaration a type refers to, if any."""
    if isinstance(node, TypeReference):
        return model.get_declaration(node.name)
    return None


def is_object_shaped(node: TypeNode, model: SourceModel) -> bool:
    resolved = _resolve(node, model)
    if isinstance(resolved, (ObjectLiteralType, InterfaceDeclaration, FunctionType)):
        return True
    return resolved is not None and _is_array_node(resolved)


def is_array_shaped(node: TypeNode, model: SourceModel) -> bool:
    resolved = _resolve(node, model)
    return resolved is not None and _is_array_node(resolved)


def resolve_object_members(
    node: TypeNode | NamedDeclaration, model: SourceModel
) -> tuple[PropertySignature, ...] | None:
    """Return the property list of an object shape, following alias chains.

    Returns ``None`` when the node does not resolve to an object literal or
    interface, including when an alias chain loops back on itself.
    """
    if isinstance(node, TypeAliasDeclaration):
        node = node.type
    resolved = node if isinstance(node, InterfaceDeclaration) else _resolve(node, model)
    if isinstance(resolved, ObjectLiteralType):
        return resolved.members
    if isinstance(resolved, InterfaceDeclaration):
        return resolved.members
    return None


def render_type(node: TypeNode) -> str:
    """Render a type node to its canonical text form."""
    if isinstance(node, PrimitiveType):
        return node.keyword
    if isinstance(node, LiteralType):
        return node.text
    if isinstance(node, UnionType):
        return " | ".join(_render_operand(member, _UNION_WRAPPED) for member in node.members)
    if isinstance(node, IntersectionType):
        return " & ".join(
            _render_operand(member, _INTERSECTION_WRAPPED) for member in node.members
        )
    if isinstance(node, ArrayType):
        return _render_operand(node.element, _POSTFIX_WRAPPED) + "[]"
    if isinstance(node, TupleType):
        return "[" + ", ".join(render_type(element) for element in node.elements) + "]"
    if isinstance(node, TypeReference):
        if not node.arguments:
            return node.name
        return f"{node.name}<{', '.join(render_type(arg) for arg in node.arguments)}>"
    if isinstance(node, FunctionType):
        return f"{node.parameters_text} => {render_type(node.return_type)}"
    if isinstance(node, TypeOperatorType):
        return f"{node.operator} {_render_operand(node.operand, _OPERATOR_WRAPPED)}"
    if isinstance(node, IndexedAccessType):
        return f"{_render_operand(node.object, _POSTFIX_WRAPPED)}[{render_type(node.index)}]"
    if isinstance(node, ConditionalType):
        return (
            f"{render_type(node.check)} extends {render_type(node.extends)}"
            f" ? {render_type(node.true_type)} : {render_type(node.false_type)}"
        )
    if isinstance(node, TypePredicate):
        prefix = "asserts " if node.asserts else ""
        if node.type is None:
            return f"{prefix}{node.parameter}"
        return f"{prefix}{node.parameter} is {render_type(node.type)}"
    if isinstance(node, RawType):
        return node.text
    if isinstance(node, ObjectLiteralType):
        if not node.members:
            return "{}"
        return "{ " + "".join(f"{_render_member(member)}; " for member in node.members) + "}"
    raise TypeError(f"Unsupported type node: {node!r}")


_UNION_WRAPPED = (FunctionType, ConditionalType)
_INTERSECTION_WRAPPED = (UnionType, FunctionType, ConditionalType)
_POSTFIX_WRAPPED = (UnionType, IntersectionType, FunctionType, ConditionalType, TypeOperatorType)
_OPERATOR_WRAPPED = (UnionType, IntersectionType, FunctionType, ConditionalType)


def _render_operand(node: TypeNode, wrapped: tuple[type, ...]) -> str:
    text = render_type(node)
    return f"({text})" if isinstance(node, wrapped) else text


def _render_member(member: PropertySignature) -> str:
    name = member.name
    if not _is_identifier_name(name):
        name = json.dumps(name, ensure_ascii=False)
    prefix = "readonly " if member.readonly else ""
    marker = "?" if member.optional else ""
    return f"{prefix}{name}{marker}: {render_type(member.type)}"


def _is_identifier_name(name: str) -> bool:
    return bool(name) and (name[0].isalpha() or name[0] in "_$") and all(
        char.isalnum() or char in "_$" for char in name
    )


def _resolve(node: TypeNode, model: SourceModel) -> _Resolved | None:
    """Follow references through the file's declarations to a concrete shape.

    References that name nothing in the file (globals, imports) resolve to
    themselves so array built-ins still classify.
    """
    seen: set[int] = set()
    current: _Resolved = node
    while True:
        if isinstance(current, TypeOperatorType) and current.operator == "readonly":
            current = current.operand
            continue
        if not isinstance(current, TypeReference):
            return current
        declaration = model.get_declaration(current.name)
        if declaration is None:
            return current
        if isinstance(declaration, InterfaceDeclaration):
            return declaration
        if id(declaration) in seen:
            return None
        seen.add(id(declaration))
        current = declaration.type


def _is_array_node(node: _Resolved) -> bool:
    if isinstance(node, (ArrayType, TupleType)):
        return True
    return isinstance(node, TypeReference) and node.name in ARRAY_REFERENCE_NAMES
