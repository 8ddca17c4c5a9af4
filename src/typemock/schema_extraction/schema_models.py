"""Schema extraction entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from typemock.type_model import NamedDeclaration, SourceModel


class RecursionDecision(str, Enum):
    """Whether a field's type is expanded into child fields."""

    TERMINAL = "terminal"
    RECURSE = "recurse"


@dataclass(frozen=True)
class FieldSchema:
    """Description of one field of a declaration or inline object."""

    name: str
    type: str
    docs: str
    is_required: bool
    children: tuple[FieldSchema, ...] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "docs": self.docs,
            "isRequired": self.is_required,
        }
        if self.children is not None:
            payload["children"] = [child.to_payload() for child in self.children]
        return payload


@dataclass(frozen=True)
class InterfaceSchema:
    """Schema of one extracted declaration; fields keep source order."""

    name: str
    docs: str
    fields: tuple[FieldSchema, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "docs": self.docs,
            "fields": [field.to_payload() for field in self.fields],
        }


@dataclass(frozen=True)
class DeclarationHandle:
    """A located structural declaration together with the model it lives in."""

    model: SourceModel
    declaration: NamedDeclaration

    @property
    def name(self) -> str:
        return self.declaration.name


@dataclass(frozen=True)
class DeclarationNotFound:
    """Outcome of looking up a declaration name absent from a source file."""

    source_path: Path
    declaration_name: str
    available_names: tuple[str, ...]

    @property
    def message(self) -> str:
        return f'Declaration "{self.declaration_name}" not found in {self.source_path}'


@dataclass(frozen=True)
class DeclarationSummary:
    """Discovery listing entry for one declaration."""

    name: str
    docs: str
    field_count: int

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "docs": self.docs, "fieldCount": self.field_count}
