"""Builds type model nodes from declared-type parse trees."""

from __future__ import annotations

import json
from collections.abc import Callable

from lark import Token, Transformer, v_args

from .declaration_models import (
    PRIMITIVE_KEYWORDS,
    ArrayType,
    ConditionalType,
    FunctionType,
    IndexedAccessType,
    IntersectionType,
    LiteralType,
    ObjectLiteralType,
    PrimitiveType,
    PropertySignature,
    RawType,
    TupleType,
    TypeNode,
    TypeOperatorType,
    TypePredicate,
    TypeReference,
    UnionType,
)

_ANY = "any"


def decode_string_literal(raw: str) -> str:
    """Return the value of a single- or double-quoted string literal."""
    body = raw[1:-1]
    if raw.startswith("'"):
        body = body.replace("\\'", "'").replace('"', '\\"')
    try:
        return json.loads(f'"{body}"')
    except json.JSONDecodeError:
        return body


def quote_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def normalize_source_text(raw: str) -> str:
    """Collapse whitespace runs of a source slice into single spaces."""
    text = " ".join(raw.split())
    for opening in ("(", "[", "<"):
        text = text.replace(f"{opening} ", opening)
    for closing in (")", "]", ">"):
        text = text.replace(f" {closing}", closing)
    return text


class DeclarationTransformer(Transformer):
    """Turns `member` and `type` parse trees into declaration model nodes.

    Parse trees carry positions relative to the parsed source slice; `offset`
    maps them back into the file so member documentation can be looked up.
    """

    def __init__(self, source_text: str, offset: int, docs_at: Callable[[int], str]) -> None:
        super().__init__()
        self._source_text = source_text
        self._offset = offset
        self._docs_at = docs_at

    # -- members ------------------------------------------------------------

    @v_args(meta=True)
    def property_signature(self, meta, children) -> PropertySignature:
        readonly, name, optional, member_type = children
        return PropertySignature(
            name=name,
            type=member_type if member_type is not None else PrimitiveType(_ANY),
            optional=bool(optional),
            readonly=readonly is not None,
            docs=self._docs_at(self._offset + meta.start_pos),
        )

    @v_args(meta=True)
    def method_signature(self, meta, children) -> PropertySignature:
        name, optional, signature = children
        return PropertySignature(
            name=name,
            type=signature,
            optional=bool(optional),
            readonly=False,
            docs=self._docs_at(self._offset + meta.start_pos),
        )

    @v_args(meta=True)
    def get_accessor(self, meta, children) -> PropertySignature:
        _, name, signature = children
        return PropertySignature(
            name=name,
            type=signature.return_type,
            optional=False,
            readonly=False,
            docs=self._docs_at(self._offset + meta.start_pos),
        )

    def set_accessor(self, _children) -> None:
        return None

    def index_signature(self, _children) -> None:
        return None

    def call_signature(self, _children) -> None:
        return None

    def construct_signature(self, _children) -> None:
        return None

    def property_name(self, children) -> str:
        (token,) = children
        if token.type == "STRING":
            return decode_string_literal(token)
        return str(token)

    def optional_mark(self, _children) -> bool:
        return True

    def type_annotation(self, children) -> TypeNode:
        return children[0]

    def signature(self, children) -> FunctionType:
        head, return_type = children
        if return_type is None:
            return_type = PrimitiveType(_ANY)
        return FunctionType(parameters_text=head, return_type=return_type)

    @v_args(meta=True)
    def signature_head(self, meta, _children) -> str:
        return self._text_of(meta)

    def return_annotation(self, children) -> TypeNode:
        return children[0]

    # -- types --------------------------------------------------------------

    def type_predicate(self, children) -> TypePredicate:
        parameter, _, predicate_type = children
        return TypePredicate(parameter=str(parameter), type=predicate_type, asserts=False)

    def asserts_predicate(self, children) -> TypePredicate:
        predicate_type = children[3] if len(children) > 3 else None
        return TypePredicate(parameter=str(children[1]), type=predicate_type, asserts=True)

    def conditional_type(self, children) -> ConditionalType:
        check, _, extends, true_type, false_type = children
        return ConditionalType(
            check=check, extends=extends, true_type=true_type, false_type=false_type
        )

    def function_type(self, children) -> FunctionType:
        head, return_type = children
        return FunctionType(parameters_text=head, return_type=return_type)

    def constructor_type(self, children) -> FunctionType:
        abstract, _, head, return_type = children
        prefix = "abstract new " if abstract is not None else "new "
        return FunctionType(parameters_text=prefix + head, return_type=return_type)

    def union_type(self, children) -> UnionType:
        return UnionType(members=tuple(children))

    def intersection_type(self, children) -> IntersectionType:
        return IntersectionType(members=tuple(children))

    def type_operator_expression(self, children) -> TypeOperatorType:
        operator, operand = children
        return TypeOperatorType(operator=str(operator), operand=operand)

    def array_type(self, children) -> ArrayType:
        return ArrayType(element=children[0])

    def indexed_access_type(self, children) -> IndexedAccessType:
        target, index = children
        return IndexedAccessType(object=target, index=index)

    def object_type(self, children) -> ObjectLiteralType:
        return ObjectLiteralType(members=tuple(child for child in children if child is not None))

    @v_args(meta=True)
    def mapped_type(self, meta, _children) -> RawType:
        return RawType(text=self._text_of(meta))

    def tuple_type(self, children) -> TupleType:
        return TupleType(elements=tuple(children))

    def tuple_element(self, children) -> TypeNode:
        return children[1]

    def type_reference(self, children) -> TypeNode:
        name, arguments = children
        if arguments is None:
            if name in PRIMITIVE_KEYWORDS:
                return PrimitiveType(keyword=name)
            if name in ("true", "false"):
                return LiteralType(text=name)
        return TypeReference(name=name, arguments=arguments or ())

    def qualified_name(self, children) -> str:
        return ".".join(str(part) for part in children)

    def type_arguments(self, children) -> tuple[TypeNode, ...]:
        return tuple(children)

    def type_query(self, children) -> TypeOperatorType:
        target = children[1]
        if not isinstance(target, TypeReference):
            arguments = children[2] if len(children) > 2 else None
            target = TypeReference(name=target, arguments=arguments or ())
        return TypeOperatorType(operator="typeof", operand=target)

    def import_type(self, children) -> TypeReference:
        module = quote_string(decode_string_literal(children[1]))
        members = [str(child) for child in children[2:] if isinstance(child, Token)]
        arguments = children[-1] if isinstance(children[-1], tuple) else ()
        name = ".".join([f"import({module})", *members])
        return TypeReference(name=name, arguments=arguments)

    def string_literal(self, children) -> LiteralType:
        return LiteralType(text=quote_string(decode_string_literal(children[0])))

    def number_literal(self, children) -> LiteralType:
        return LiteralType(text=str(children[0]))

    def negative_number_literal(self, children) -> LiteralType:
        return LiteralType(text=f"-{children[0]}")

    def template_literal(self, children) -> LiteralType:
        return LiteralType(text=str(children[0]))

    def _text_of(self, meta) -> str:
        return normalize_source_text(self._source_text[meta.start_pos : meta.end_pos])
