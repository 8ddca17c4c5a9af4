"""Type model entities for parsed declaration sources."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

PRIMITIVE_KEYWORDS = frozenset(
    {
        "any",
        "bigint",
        "boolean",
        "never",
        "null",
        "number",
        "object",
        "string",
        "symbol",
        "undefined",
        "unknown",
        "void",
    }
)

ARRAY_REFERENCE_NAMES = frozenset({"Array", "ReadonlyArray"})


@dataclass(frozen=True, eq=False)
class PrimitiveType:
    """Keyword type such as `string` or `boolean`."""

    keyword: str


@dataclass(frozen=True, eq=False)
class LiteralType:
    """String, numeric or boolean literal type, stored as rendered text."""

    text: str


@dataclass(frozen=True, eq=False)
class UnionType:
    members: tuple[TypeNode, ...]


@dataclass(frozen=True, eq=False)
class IntersectionType:
    members: tuple[TypeNode, ...]


@dataclass(frozen=True, eq=False)
class ArrayType:
    """`T[]` suffix form."""

    element: TypeNode


@dataclass(frozen=True, eq=False)
class TupleType:
    elements: tuple[TypeNode, ...]


@dataclass(frozen=True, eq=False)
class TypeReference:
    """Reference to a named type, optionally qualified and generic."""

    name: str
    arguments: tuple[TypeNode, ...] = ()


@dataclass(frozen=True, eq=False)
class FunctionType:
    """Function type; parameters are kept as normalized source text."""

    parameters_text: str
    return_type: TypeNode


@dataclass(frozen=True, eq=False)
class TypeOperatorType:
    """`keyof T`, `typeof x`, `readonly T[]` and friends."""

    operator: str
    operand: TypeNode


@dataclass(frozen=True, eq=False)
class IndexedAccessType:
    object: TypeNode
    index: TypeNode


@dataclass(frozen=True, eq=False)
class ConditionalType:
    check: TypeNode
    extends: TypeNode
    true_type: TypeNode
    false_type: TypeNode


@dataclass(frozen=True, eq=False)
class TypePredicate:
    """`x is T`, `asserts x` or `asserts x is T` in a return position."""

    parameter: str
    type: TypeNode | None
    asserts: bool


@dataclass(frozen=True, eq=False)
class RawType:
    """Type kept as written when it falls outside the declared-type grammar."""

    text: str


@dataclass(frozen=True, eq=False)
class ObjectLiteralType:
    """Inline anonymous object shape."""

    members: tuple[PropertySignature, ...]


TypeNode = (
    PrimitiveType
    | LiteralType
    | UnionType
    | IntersectionType
    | ArrayType
    | TupleType
    | TypeReference
    | FunctionType
    | TypeOperatorType
    | IndexedAccessType
    | ConditionalType
    | TypePredicate
    | RawType
    | ObjectLiteralType
)


@dataclass(frozen=True, eq=False)
class PropertySignature:
    """One property member of an interface or object literal."""

    name: str
    type: TypeNode
    optional: bool
    readonly: bool
    docs: str


@dataclass(frozen=True, eq=False)
class InterfaceDeclaration:
    """Top-level `interface` declaration."""

    name: str
    members: tuple[PropertySignature, ...]
    docs: str
    exported: bool


@dataclass(frozen=True, eq=False)
class TypeAliasDeclaration:
    """Top-level `type Name = ...` declaration."""

    name: str
    type: TypeNode
    docs: str
    exported: bool


NamedDeclaration = InterfaceDeclaration | TypeAliasDeclaration


@dataclass(frozen=True)
class SourceModel:
    """In-memory type model of one loaded source file."""

    path: Path
    declarations: tuple[NamedDeclaration, ...]
    _index: Mapping[str, NamedDeclaration] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, NamedDeclaration] = {}
        for declaration in self.declarations:
            index.setdefault(declaration.name, declaration)
        object.__setattr__(self, "_index", index)

    def get_declaration(self, name: str) -> NamedDeclaration | None:
        """Return the first top-level declaration with the given name."""
        return self._index.get(name)

    @property
    def declaration_names(self) -> tuple[str, ...]:
        return tuple(declaration.name for declaration in self.declarations)
